# =============================================================================
# WRAP RESOLVER API TESTS
# =============================================================================
# Tests for the FastAPI endpoints.
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest
import yaml
from fastapi.testclient import TestClient

from src.core.resolver import ResolutionTimeout, WrapResolver
from src.main_fastapi import app


@pytest.fixture
def client(store, config):
    """API client wired to the in-memory store."""
    with patch("src.main_fastapi.get_resolver", return_value=WrapResolver(store)), patch(
        "src.main_fastapi.get_config", return_value=config
    ):
        yield TestClient(app)


class TestHealthEndpoint:
    """Test health check endpoint."""

    def test_health_returns_ok(self, client):
        """Health endpoint should return status."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestResolverEndpoint:
    """Test identity endpoint."""

    def test_identity(self, client):
        """Identity lists name, config and selector."""
        data = client.get("/resolver").json()
        assert data["name"] == "wrapresolver"
        assert data["config"] == "wrapresolver-config"
        assert data["selector"] == {"resolution.tekton.dev/type": "wrap"}


class TestValidateEndpoint:
    """Test the validate endpoint."""

    def test_defaults_applied(self, client, params, config):
        """The wrapper default is filled in."""
        del params["wrapper"]
        response = client.post("/validate", json={"namespace": "ci", "params": params})
        assert response.status_code == 200
        assert response.json()["params"]["wrapper"] == config.default_wrapper

    def test_missing_params(self, client):
        """Missing params are a 400 listing the names."""
        response = client.post("/validate", json={"params": {}})
        assert response.status_code == 400
        assert "pipelineref" in response.json()["detail"]


class TestResolveEndpoint:
    """Test the resolve endpoint."""

    def test_resolve(self, client, params):
        """A valid request returns the rewritten YAML and annotations."""
        response = client.post("/resolve", json={"namespace": "ci", "params": params})
        assert response.status_code == 200
        body = response.json()
        assert body["annotations"] == {"PipelineRef": "demo"}
        assert yaml.safe_load(body["data"])["kind"] == "Pipeline"

    def test_missing_params(self, client):
        """Missing params are rejected with 400."""
        response = client.post("/resolve", json={"namespace": "ci", "params": {"pipelineref": "demo"}})
        assert response.status_code == 400

    def test_unknown_pipeline(self, client, params):
        """An unknown pipeline is a 404."""
        params["pipelineref"] = "ghost"
        response = client.post("/resolve", json={"namespace": "ci", "params": params})
        assert response.status_code == 404

    def test_transform_error(self, client, store, params):
        """A dangling task reference is a 422 naming the task."""
        pipeline = store.get_pipeline("ci", "demo")
        pipeline.spec.tasks[1].task_ref.name = "ghost"
        store.add(pipeline)
        response = client.post("/resolve", json={"namespace": "ci", "params": params})
        assert response.status_code == 422
        assert "build" in response.json()["detail"]

    def test_timeout(self, params, config):
        """A timed-out resolution is a 504."""
        resolver = MagicMock()
        resolver.resolve.side_effect = ResolutionTimeout(1.0)
        with patch("src.main_fastapi.get_resolver", return_value=resolver), patch(
            "src.main_fastapi.get_config", return_value=config
        ):
            response = TestClient(app).post("/resolve", json={"params": params})
        assert response.status_code == 504
