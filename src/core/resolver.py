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
# THE WRAP RESOLVER
# -----------------------------------------------------------------------------
# Responsibility: The entry point a resolution host calls. Takes a request's
# namespace and raw params, returns the rewritten Pipeline as YAML bytes.
#
# Flow: validate params -> load pipeline -> resolve targets -> transform ->
# serialize. Validation runs before any store access. The whole flow runs
# under a per-request deadline; on expiry nothing is returned.
# -----------------------------------------------------------------------------

import threading
from dataclasses import dataclass, field

from rich.console import Console

from src.core.config import ResolverConfig
from src.core.params import ResolvedParameters, validate_params
from src.core.targets import resolve_targets
from src.core.templates import TemplateResolver
from src.core.transformer import PipelineTransformer
from src.infra.serializer import to_bytes
from src.infra.store import ResourceStore

console = Console(stderr=True)

RESOLVER_NAME = "wrapresolver"
CONFIG_NAME = "wrapresolver-config"

# Label the host matches requests on
RESOLVER_TYPE_LABEL = "resolution.tekton.dev/type"
RESOLVER_TYPE = "wrap"

PIPELINE_REF_ANNOTATION = "PipelineRef"


class ResolutionTimeout(TimeoutError):
    """Raised when a resolution exceeds its deadline."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"resolution timed out after {timeout:g}s")
        self.timeout = timeout


@dataclass
class ResolvedResource:
    """The resolved document handed back to the host."""

    data: bytes
    pipeline_ref: str
    annotations: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.annotations.setdefault(PIPELINE_REF_ANNOTATION, self.pipeline_ref)


class WrapResolver:
    """
    Resolver that wraps a Pipeline so it needs no shared volume.

    Stateless across requests: every call builds its own parameters,
    target map and template cache.
    """

    def __init__(self, store: ResourceStore) -> None:
        self._store = store

    def get_name(self) -> str:
        return RESOLVER_NAME

    def get_config_name(self) -> str:
        return CONFIG_NAME

    def get_selector(self) -> dict[str, str]:
        return {RESOLVER_TYPE_LABEL: RESOLVER_TYPE}

    def validate_params(self, params: dict[str, str], config: ResolverConfig) -> ResolvedParameters:
        """Validate a request's params without touching the store."""
        return validate_params(params, config)

    def resolve(
        self, namespace: str, params: dict[str, str], config: ResolverConfig
    ) -> ResolvedResource:
        """
        Resolve a request under the configured deadline.

        Args:
            namespace: Namespace the request was made from.
            params: Raw request parameters.
            config: Resolver configuration map.

        Returns:
            ResolvedResource with the rewritten Pipeline.

        Raises:
            MissingParameter: If required parameters are absent.
            StoreLookupError: If the pipeline itself cannot be loaded.
            TransformError: If a task's spec cannot be resolved.
            ResolutionTimeout: If the deadline passes first.
        """
        resolved = validate_params(params, config)
        return self._with_deadline(namespace, resolved, config.timeout_seconds)

    def _with_deadline(
        self, namespace: str, params: ResolvedParameters, timeout: float
    ) -> ResolvedResource:
        result: dict = {"resource": None, "error": None}

        def _run():
            try:
                result["resource"] = self._resolve(namespace, params)
            except Exception as e:
                result["error"] = e

        thread = threading.Thread(target=_run, daemon=True)
        thread.start()
        thread.join(timeout=timeout)

        if thread.is_alive():
            console.print(f"[red][RESOLVER] {params.pipelineref}: timeout ({timeout:g}s)[/red]")
            raise ResolutionTimeout(timeout)

        if result["error"]:
            raise result["error"]

        return result["resource"]

    def _resolve(self, namespace: str, params: ResolvedParameters) -> ResolvedResource:
        console.print(f"[cyan][RESOLVER] Wrapping {namespace}/{params.pipelineref}[/cyan]")

        try:
            pipeline = self._store.get_pipeline(namespace, params.pipelineref)
        except LookupError as e:
            console.print(
                f"[red][RESOLVER] Failed to load pipeline {params.pipelineref} "
                f"from namespace {namespace}: {e}[/red]"
            )
            raise

        workspace_names = params.workspace_names
        targets = resolve_targets(workspace_names, params.target)

        transformer = PipelineTransformer(TemplateResolver(self._store, namespace), params.wrapper)
        rewritten = transformer.transform(pipeline, workspace_names, targets)

        data = to_bytes(rewritten)
        console.print(f"[green][RESOLVER] Resolved {params.pipelineref} ({len(data)} bytes)[/green]")
        return ResolvedResource(data=data, pipeline_ref=params.pipelineref)
