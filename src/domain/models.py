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
# DOMAIN MODELS - PIPELINE RESOURCES
# -----------------------------------------------------------------------------
# Pydantic models for the tekton.dev/v1beta1 resources the wrap resolver reads
# and writes: Pipeline, Task and the pieces that bind them together.
#
# Only the fields the rewrite touches are declared. Everything else rides along
# as extra fields so the output document keeps whatever the author wrote.
# -----------------------------------------------------------------------------

from typing import Any

from pydantic import BaseModel, Field, model_validator

API_VERSION = "tekton.dev/v1beta1"

# Tekton mounts undeclared workspace paths here
DEFAULT_WORKSPACE_ROOT = "/workspace"


class ResourceModel(BaseModel):
    """Base for all resource models: camelCase aliases, unknown keys preserved."""

    class Config:
        """Pydantic configuration for round-trip fidelity."""

        populate_by_name = True
        extra = "allow"

    def to_dict(self) -> dict[str, Any]:
        """Dump to the wire shape, only emitting what was set."""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True, mode="json")


class Step(ResourceModel):
    """A single container step inside a Task (the executable sub-step)."""

    name: str | None = None
    image: str | None = None
    working_dir: str | None = Field(default=None, alias="workingDir")
    script: str | None = None


class WorkspaceDeclaration(ResourceModel):
    """A workspace a Task declares, with the path it is mounted at."""

    name: str = Field(..., min_length=1)
    mount_path: str | None = Field(default=None, alias="mountPath")
    read_only: bool | None = Field(default=None, alias="readOnly")
    optional: bool | None = None
    description: str | None = None

    def get_mount_path(self) -> str:
        """Return the declared mount path, or the runtime default."""
        if self.mount_path:
            return self.mount_path
        return f"{DEFAULT_WORKSPACE_ROOT}/{self.name}"


class TaskSpec(ResourceModel):
    """The body of a Task: ordered steps plus the workspaces it declares."""

    steps: list[Step] = Field(default_factory=list)
    workspaces: list[WorkspaceDeclaration] = Field(default_factory=list)
    params: list[dict[str, Any]] = Field(default_factory=list)

    def find_workspace(self, name: str) -> WorkspaceDeclaration | None:
        """Look up a declared workspace by its task-local name."""
        for declaration in self.workspaces:
            if declaration.name == name:
                return declaration
        return None


class TaskRef(ResourceModel):
    """Reference to a Task (or ClusterTask) by name."""

    name: str | None = None
    kind: str | None = None
    bundle: str | None = None
    resolver: str | None = None

    def get_kind(self) -> str:
        return self.kind or "Task"

    def is_remote(self) -> bool:
        """True when the ref points at a bundle or a remote resolver."""
        return bool(self.bundle or self.resolver)


class WorkspacePipelineTaskBinding(ResourceModel):
    """
    Binds a task-local workspace name to a pipeline-scope workspace.

    `name` is what the Task calls it; `workspace` is what the Pipeline calls
    it. Tekton lets `workspace` be omitted when both names agree.
    """

    name: str = Field(..., min_length=1)
    workspace: str | None = None
    sub_path: str | None = Field(default=None, alias="subPath")

    @property
    def pipeline_workspace(self) -> str:
        return self.workspace or self.name


class PipelineTask(ResourceModel):
    """
    One entry of a Pipeline's task list.

    Carries its Task either inline (`taskSpec`) or by reference (`taskRef`),
    never both.
    """

    name: str = Field(..., min_length=1)
    task_ref: TaskRef | None = Field(default=None, alias="taskRef")
    task_spec: TaskSpec | None = Field(default=None, alias="taskSpec")
    workspaces: list[WorkspacePipelineTaskBinding] = Field(default_factory=list)
    params: list[dict[str, Any]] = Field(default_factory=list)
    run_after: list[str] = Field(default_factory=list, alias="runAfter")

    @model_validator(mode="after")
    def _single_task_source(self) -> "PipelineTask":
        if self.task_ref is not None and self.task_spec is not None:
            raise ValueError(f"task {self.name!r} sets both taskRef and taskSpec")
        return self


class PipelineSpec(ResourceModel):
    """Ordered task list plus pipeline-scope declarations."""

    tasks: list[PipelineTask] = Field(default_factory=list)
    workspaces: list[dict[str, Any]] = Field(default_factory=list)
    params: list[dict[str, Any]] = Field(default_factory=list)
    finally_: list[PipelineTask] = Field(default_factory=list, alias="finally")


class ObjectMeta(ResourceModel):
    name: str = Field(..., min_length=1)
    namespace: str | None = None
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None


class Pipeline(ResourceModel):
    """A Pipeline resource."""

    api_version: str = Field(default=API_VERSION, alias="apiVersion")
    kind: str = "Pipeline"
    metadata: ObjectMeta
    spec: PipelineSpec = Field(default_factory=PipelineSpec)


class Task(ResourceModel):
    """A Task or ClusterTask resource."""

    api_version: str = Field(default=API_VERSION, alias="apiVersion")
    kind: str = "Task"
    metadata: ObjectMeta
    spec: TaskSpec = Field(default_factory=TaskSpec)
