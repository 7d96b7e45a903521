# -----------------------------------------------------------------------------
# DOMAIN LAYER
# -----------------------------------------------------------------------------
# Contains the pipeline resource models (Pydantic) shared by the store, the
# transformer and the serializer.
# -----------------------------------------------------------------------------

from .models import (
    ObjectMeta,
    Pipeline,
    PipelineSpec,
    PipelineTask,
    Step,
    Task,
    TaskRef,
    TaskSpec,
    WorkspaceDeclaration,
    WorkspacePipelineTaskBinding,
)

__all__ = [
    "ObjectMeta", "Pipeline", "PipelineSpec", "PipelineTask", "Step",
    "Task", "TaskRef", "TaskSpec", "WorkspaceDeclaration",
    "WorkspacePipelineTaskBinding",
]
