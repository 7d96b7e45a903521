# -----------------------------------------------------------------------------
# INFRASTRUCTURE LAYER
# -----------------------------------------------------------------------------
# Contains low-level wrappers around the outside world:
# - Resource stores: where Pipelines and Tasks come from
# - Serializer: YAML rendering of resolved resources
# -----------------------------------------------------------------------------

from .serializer import to_bytes, to_yaml
from .store import DirectoryStore, InMemoryStore, ResourceStore, StoreLookupError

__all__ = [
    "DirectoryStore", "InMemoryStore", "ResourceStore", "StoreLookupError",
    "to_bytes", "to_yaml",
]
