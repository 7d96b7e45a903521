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
# WRAP RESOLVER - FASTAPI INTERFACE
# -----------------------------------------------------------------------------
# Thin HTTP surface over WrapResolver for hosts that call resolvers remotely.
#
# Endpoints:
# - GET  /health    : Health check
# - GET  /resolver  : Resolver identity (name, config name, selector)
# - POST /validate  : Check request params without resolving
# - POST /resolve   : Resolve a request into a rewritten Pipeline
# -----------------------------------------------------------------------------

import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Load environment variables
from dotenv import load_dotenv

load_dotenv(PROJECT_ROOT / ".env")

from src.core.config import ResolverConfig, load_config
from src.core.params import MissingParameter
from src.core.resolver import ResolutionTimeout, WrapResolver
from src.core.transformer import TransformError
from src.infra.store import DirectoryStore, StoreLookupError

console = Console(stderr=True)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    console.print(
        Panel(
            f"[bold cyan]WRAP RESOLVER v{VERSION}[/bold cyan]\n"
            f"Store: {get_store_dir()}",
            border_style="cyan",
        )
    )
    yield
    console.print("[yellow]WRAP RESOLVER SHUTTING DOWN[/yellow]")


app = FastAPI(
    title="Wrap Resolver",
    description="Rewrites Pipelines to share workspaces through OCI images",
    version=VERSION,
    lifespan=lifespan,
)

# Resolver and config (lazy init)
_resolver: WrapResolver | None = None
_config: ResolverConfig | None = None


def get_store_dir() -> Path:
    return Path(os.getenv("WRAP_STORE_DIR", str(PROJECT_ROOT / "resources")))


def get_resolver() -> WrapResolver:
    global _resolver
    if _resolver is None:
        _resolver = WrapResolver(DirectoryStore(get_store_dir()))
    return _resolver


def get_config() -> ResolverConfig:
    global _config
    if _config is None:
        _config = load_config()
    return _config


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================


class ResolveRequest(BaseModel):
    namespace: str = "default"
    params: dict[str, str]


class ResolveResponse(BaseModel):
    data: str
    annotations: dict[str, str]


class ValidateResponse(BaseModel):
    valid: bool
    params: dict[str, str]


# =============================================================================
# ENDPOINTS
# =============================================================================


@app.get("/health")
async def health_check():
    """Health check for load balancers."""
    return {"status": "healthy", "service": "wrapresolver", "version": VERSION}


@app.get("/resolver")
async def resolver_identity():
    """Identity the host uses to route requests and find our config."""
    resolver = get_resolver()
    return {
        "name": resolver.get_name(),
        "config": resolver.get_config_name(),
        "selector": resolver.get_selector(),
    }


@app.post("/validate", response_model=ValidateResponse)
def validate(request: ResolveRequest):
    """Validate params and show them with defaults applied."""
    try:
        resolved = get_resolver().validate_params(request.params, get_config())
    except MissingParameter as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ValidateResponse(valid=True, params=resolved.model_dump())


@app.post("/resolve", response_model=ResolveResponse)
def resolve(request: ResolveRequest):
    """Resolve a request into a self-contained Pipeline document."""
    try:
        resource = get_resolver().resolve(request.namespace, request.params, get_config())
    except MissingParameter as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreLookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TransformError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ResolutionTimeout as e:
        raise HTTPException(status_code=504, detail=str(e))

    return ResolveResponse(data=resource.data.decode("utf-8"), annotations=resource.annotations)


# =============================================================================
# MAIN
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("WRAP_PORT", "8080"))
    uvicorn.run(app, host="0.0.0.0", port=port)
