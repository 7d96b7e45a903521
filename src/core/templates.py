# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# STEP-TEMPLATE LOOKUP
# -----------------------------------------------------------------------------
# Responsibility: Produce the effective TaskSpec of a pipeline task, inline or
# fetched by reference, for exactly one transformation.
#
# Fetched specs are cached per reference and handed out as deep copies, so
# two tasks sharing a Task never see each other's injected steps.
# -----------------------------------------------------------------------------

from rich.console import Console

from src.domain.models import PipelineTask, TaskSpec
from src.infra.store import ResourceStore, StoreLookupError

console = Console(stderr=True)


class TemplateResolver:
    """Resolves task specs for one request, scoped to its namespace."""

    def __init__(self, store: ResourceStore, namespace: str) -> None:
        self._store = store
        self._namespace = namespace
        self._cache: dict[tuple[str, str], TaskSpec] = {}

    def lookup(self, task: PipelineTask) -> TaskSpec:
        """
        Return a private, mutable copy of the task's effective spec.

        Args:
            task: The pipeline task to resolve.

        Returns:
            A deep copy of the inline spec or of the referenced Task's spec.

        Raises:
            StoreLookupError: If the reference cannot be resolved.
        """
        if task.task_spec is not None:
            return task.task_spec.model_copy(deep=True)

        ref = task.task_ref
        if ref is None or not ref.name:
            raise StoreLookupError(
                f"task {task.name!r} has neither taskSpec nor a named taskRef",
                kind="Task", name=None, namespace=self._namespace,
            )
        if ref.is_remote():
            raise StoreLookupError(
                f"task {task.name!r} uses a remote taskRef, which cannot be inlined",
                kind=ref.get_kind(), name=ref.name, namespace=self._namespace,
            )

        key = (ref.get_kind(), ref.name)
        if key not in self._cache:
            console.print(f"[cyan][LOOKUP] Fetching {key[0]} {key[1]}[/cyan]")
            fetched = self._store.get_task(self._namespace, ref.name, kind=ref.get_kind())
            self._cache[key] = fetched.spec
        return self._cache[key].model_copy(deep=True)
