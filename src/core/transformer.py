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
# PIPELINE TRANSFORMER
# -----------------------------------------------------------------------------
# Responsibility: Rewrite a Pipeline so tasks share the requested workspaces
# through registry images instead of a mounted volume.
#
# Every task, in order, has its TaskSpec resolved (inline or by reference).
# For each one that binds a requested workspace:
#   1. prepend one import step, unless it is the first task of the pipeline
#   2. append one export step
#   3. inline the mutated spec in place of the taskRef
# Everything else passes through untouched. The input is never mutated.
# -----------------------------------------------------------------------------

from collections.abc import Iterable, Mapping

from rich.console import Console

from src.core.scripts import WorkspaceTransfer, export_step, import_step
from src.core.templates import TemplateResolver
from src.domain.models import API_VERSION, Pipeline, PipelineTask, TaskSpec, WorkspacePipelineTaskBinding

console = Console(stderr=True)


class TransformError(Exception):
    """
    Raised when a task cannot be rewritten.

    Carries the offending task's name and the underlying cause. No partial
    pipeline accompanies it.
    """

    def __init__(self, step: str, cause: Exception | str) -> None:
        super().__init__(f"couldn't rewrite task {step!r}: {cause}")
        self.step = step
        self.cause = cause


class PipelineTransformer:
    """
    Rewrites one pipeline for one request.

    Args:
        templates: Resolver used to fetch task specs (caches per request).
        wrapper: Base image the first task's export layers onto.
    """

    def __init__(self, templates: TemplateResolver, wrapper: str) -> None:
        self._templates = templates
        self._wrapper = wrapper

    def transform(
        self,
        pipeline: Pipeline,
        workspace_names: Iterable[str],
        targets: Mapping[str, str],
    ) -> Pipeline:
        """
        Return a rewritten copy of `pipeline`.

        Args:
            pipeline: The original pipeline.
            workspace_names: Pipeline-scope workspaces to move through images.
            targets: Image reference per workspace name.

        Returns:
            A new Pipeline with every participating task inlined and wrapped.

        Raises:
            TransformError: If any task's spec cannot be resolved.
        """
        requested = set(workspace_names)
        missing_targets = sorted(requested - set(targets))
        if missing_targets:
            raise ValueError(f"no target image for workspace(s): {', '.join(missing_targets)}")

        rewritten = pipeline.model_copy(deep=True)
        rewritten.api_version = API_VERSION
        rewritten.kind = "Pipeline"

        for index, task in enumerate(rewritten.spec.tasks):
            spec = self._resolve(task)
            uses = [b for b in task.workspaces if b.pipeline_workspace in requested]
            if not uses:
                continue
            self._rewrite_task(index, task, spec, uses, targets)

        console.print(
            f"[green][TRANSFORM] {rewritten.metadata.name}: "
            f"{len(rewritten.spec.tasks)} task(s) processed[/green]"
        )
        return rewritten

    def _rewrite_task(
        self,
        index: int,
        task: PipelineTask,
        spec: TaskSpec,
        uses: list[WorkspacePipelineTaskBinding],
        targets: Mapping[str, str],
    ) -> None:
        mount_paths = self._mount_paths(task.name, spec, uses)
        steps = list(spec.steps)

        # The first task produces workspace content; it never imports
        if index != 0:
            imports = [
                WorkspaceTransfer(u.pipeline_workspace, mount_paths[u.name], targets[u.pipeline_workspace])
                for u in uses
            ]
            steps.insert(0, import_step(imports))

        exports = [
            WorkspaceTransfer(
                u.pipeline_workspace,
                mount_paths[u.name],
                targets[u.pipeline_workspace],
                base_image=self._wrapper if index == 0 else targets[u.pipeline_workspace],
            )
            for u in uses
        ]
        steps.append(export_step(exports))

        spec.steps = steps
        task.task_ref = None
        task.task_spec = spec
        console.print(
            f"[cyan][TRANSFORM] {task.name}: "
            f"{'export' if index == 0 else 'import+export'} of "
            f"{', '.join(u.pipeline_workspace for u in uses)}[/cyan]"
        )

    def _resolve(self, task: PipelineTask) -> TaskSpec:
        """Effective spec of a task; lookup failures become TransformError."""
        try:
            return self._templates.lookup(task)
        except LookupError as e:
            console.print(f"[red][TRANSFORM] Lookup failed for {task.name}: {e}[/red]")
            raise TransformError(task.name, e) from e

    @staticmethod
    def _mount_paths(
        task_name: str, spec: TaskSpec, uses: list[WorkspacePipelineTaskBinding]
    ) -> dict[str, str]:
        paths = {}
        for use in uses:
            declaration = spec.find_workspace(use.name)
            if declaration is None:
                raise TransformError(
                    task_name, f"workspace {use.name!r} is bound but not declared by the task"
                )
            paths[use.name] = declaration.get_mount_path()
        return paths
