# -----------------------------------------------------------------------------
# CORE LAYER
# -----------------------------------------------------------------------------
# The business logic of the wrap resolver:
# - params: request parameter validation and defaults
# - targets: per-workspace image references
# - scripts: import/export step generation
# - templates: task spec lookup with per-request cache
# - transformer: the pipeline rewrite
# - resolver: the host-facing entry point with its deadline
# -----------------------------------------------------------------------------

from .config import ResolverConfig, load_config
from .params import MissingParameter, ResolvedParameters, validate_params
from .resolver import ResolutionTimeout, ResolvedResource, WrapResolver
from .targets import resolve_targets
from .transformer import PipelineTransformer, TransformError

__all__ = [
    "ResolverConfig", "load_config",
    "MissingParameter", "ResolvedParameters", "validate_params",
    "ResolutionTimeout", "ResolvedResource", "WrapResolver",
    "resolve_targets",
    "PipelineTransformer", "TransformError",
]
