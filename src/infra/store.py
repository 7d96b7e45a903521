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
# RESOURCE STORES
# -----------------------------------------------------------------------------
# Responsibility: Supply Pipeline and Task resources by name.
#
# The resolver only depends on the ResourceStore protocol. Two stores ship:
# - InMemoryStore: dict-backed, used by tests and by embedders
# - DirectoryStore: reads YAML manifests laid out per namespace on disk
#
# Every get returns a freshly parsed object; callers may mutate it freely.
# -----------------------------------------------------------------------------

from pathlib import Path
from typing import Any, Protocol

import yaml
from pydantic import ValidationError
from rich.console import Console

from src.domain.models import Pipeline, ResourceModel, Task

console = Console(stderr=True)

CLUSTER_SCOPED_KINDS = frozenset({"ClusterTask"})

# Directory holding cluster-scoped manifests inside a DirectoryStore root
CLUSTER_DIR = "_cluster"

MANIFEST_SUFFIXES = (".yaml", ".yml")


class StoreLookupError(LookupError):
    """Raised when a resource is absent, unreadable, or malformed."""

    def __init__(self, message: str, kind: str, name: str | None, namespace: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.name = name
        self.namespace = namespace


class ResourceStore(Protocol):
    """Name-keyed access to pipeline resources."""

    def get_pipeline(self, namespace: str, name: str) -> Pipeline:
        ...

    def get_task(self, namespace: str, name: str, kind: str = "Task") -> Task:
        ...


def _scope(kind: str, namespace: str | None) -> str | None:
    return None if kind in CLUSTER_SCOPED_KINDS else namespace


def _parse(kind: str, name: str, namespace: str | None, doc: dict[str, Any]) -> Any:
    model = Pipeline if kind == "Pipeline" else Task
    try:
        return model.model_validate(doc)
    except ValidationError as e:
        raise StoreLookupError(
            f"{kind} {name!r} is malformed: {e.error_count()} validation error(s)",
            kind=kind, name=name, namespace=namespace,
        ) from e


def _not_found(kind: str, name: str, namespace: str | None) -> StoreLookupError:
    where = "cluster scope" if namespace is None else f"namespace {namespace!r}"
    return StoreLookupError(
        f"{kind} {name!r} not found in {where}", kind=kind, name=name, namespace=namespace
    )


class InMemoryStore:
    """Dict-backed store keyed by (namespace, kind, name)."""

    def __init__(self, default_namespace: str = "default") -> None:
        self._default_namespace = default_namespace
        self._resources: dict[tuple[str | None, str, str], dict[str, Any]] = {}

    def add(self, resource: ResourceModel | dict[str, Any], namespace: str | None = None) -> None:
        """Register a resource under `namespace`, else its metadata.namespace, else the default."""
        if isinstance(resource, ResourceModel):
            doc = resource.to_dict()
            doc.setdefault("kind", getattr(resource, "kind", ""))
        else:
            doc = dict(resource)
        kind = doc.get("kind", "")
        metadata = doc.get("metadata") or {}
        name = metadata.get("name")
        if not kind or not name:
            raise ValueError("resource needs both kind and metadata.name")
        scope = _scope(kind, namespace or metadata.get("namespace") or self._default_namespace)
        self._resources[(scope, kind, name)] = doc

    def _get(self, kind: str, namespace: str, name: str) -> Any:
        scope = _scope(kind, namespace)
        doc = self._resources.get((scope, kind, name))
        if doc is None:
            raise _not_found(kind, name, scope)
        return _parse(kind, name, scope, doc)

    def get_pipeline(self, namespace: str, name: str) -> Pipeline:
        return self._get("Pipeline", namespace, name)

    def get_task(self, namespace: str, name: str, kind: str = "Task") -> Task:
        return self._get(kind, namespace, name)


class DirectoryStore:
    """
    Store backed by YAML manifests on disk.

    Layout:
        <root>/<namespace>/*.yaml   namespaced Pipelines and Tasks
        <root>/_cluster/*.yaml      ClusterTasks

    Files may hold several documents. The directory is re-read on every
    lookup so edits show up without a restart.
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    def _documents(self, kind: str, scope: str | None, name: str) -> list[dict[str, Any]]:
        folder = self._root / (scope if scope is not None else CLUSTER_DIR)
        if not folder.is_dir():
            raise _not_found(kind, name, scope)

        docs: list[dict[str, Any]] = []
        for path in sorted(folder.iterdir()):
            if path.suffix not in MANIFEST_SUFFIXES:
                continue
            try:
                with open(path) as f:
                    docs.extend(d for d in yaml.safe_load_all(f) if isinstance(d, dict))
            except (OSError, yaml.YAMLError) as e:
                console.print(f"[red][STORE] Cannot read {path}: {e}[/red]")
                raise StoreLookupError(
                    f"cannot read {path.name}: {e}", kind=kind, name=name, namespace=scope
                ) from e
        return docs

    def _get(self, kind: str, namespace: str, name: str) -> Any:
        scope = _scope(kind, namespace)
        for doc in self._documents(kind, scope, name):
            if doc.get("kind") == kind and (doc.get("metadata") or {}).get("name") == name:
                return _parse(kind, name, scope, doc)
        raise _not_found(kind, name, scope)

    def get_pipeline(self, namespace: str, name: str) -> Pipeline:
        return self._get("Pipeline", namespace, name)

    def get_task(self, namespace: str, name: str, kind: str = "Task") -> Task:
        return self._get(kind, namespace, name)
