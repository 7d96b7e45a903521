"""
Pytest configuration and fixtures for wrap resolver tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.config import ResolverConfig
from src.domain.models import Pipeline, Task
from src.infra.store import InMemoryStore

PROJECT_ROOT = Path(__file__).parent.parent
RESOURCES_DIR = PROJECT_ROOT / "resources"

WRAPPER = "registry.example/wrap/base:latest"
TARGET = "registry.example/ci/{{workspace}}:latest"


def make_task(name: str, workspaces: list[dict], steps: list[dict] | None = None) -> Task:
    """A namespaced Task declaring the given workspaces."""
    return Task.model_validate(
        {
            "apiVersion": "tekton.dev/v1beta1",
            "kind": "Task",
            "metadata": {"name": name},
            "spec": {
                "workspaces": workspaces,
                "steps": steps or [{"name": "run", "image": "alpine", "script": f"echo {name}\n"}],
            },
        }
    )


def make_pipeline(tasks: list[dict], name: str = "demo") -> Pipeline:
    return Pipeline.model_validate(
        {
            "apiVersion": "tekton.dev/v1beta1",
            "kind": "Pipeline",
            "metadata": {"name": name, "namespace": "ci"},
            "spec": {
                "workspaces": [{"name": "src"}, {"name": "cache"}],
                "params": [{"name": "revision", "type": "string", "default": "main"}],
                "tasks": tasks,
            },
        }
    )


def ref_task(name: str, ref: str, *bindings: tuple[str, str]) -> dict:
    """A pipeline task entry that references `ref` and binds (local, pipeline) workspaces."""
    return {
        "name": name,
        "taskRef": {"name": ref},
        "workspaces": [{"name": local, "workspace": shared} for local, shared in bindings],
    }


@pytest.fixture
def config():
    """Resolver config with a default wrapper image."""
    return ResolverConfig.from_mapping({"default-wrapper": WRAPPER})


@pytest.fixture
def params():
    """A complete, valid set of request params."""
    return {"pipelineref": "demo", "workspaces": "src", "target": TARGET, "wrapper": WRAPPER}


@pytest.fixture
def three_step_pipeline():
    """Three tasks that all bind the `src` workspace through one shared Task."""
    return make_pipeline(
        [
            ref_task("fetch", "worker", ("source", "src")),
            ref_task("build", "worker", ("source", "src")),
            ref_task("test", "worker", ("source", "src")),
        ]
    )


@pytest.fixture
def store(three_step_pipeline):
    """In-memory store holding the three-step pipeline and its Task in `ci`."""
    store = InMemoryStore(default_namespace="ci")
    store.add(three_step_pipeline)
    store.add(make_task("worker", [{"name": "source", "mountPath": "/workspace/source"}]))
    return store
