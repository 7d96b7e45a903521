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
# RESOLVER CONFIGURATION
# -----------------------------------------------------------------------------
# Responsibility: Load the resolver's configuration resource (the
# wrapresolver-config map) into a validated, read-only model.
#
# The host normally hands us the map; for local runs it comes from
# wrapresolver-config.yaml at the project root.
# -----------------------------------------------------------------------------

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from rich.console import Console

console = Console(stderr=True)

CONFIG_PATH = Path(os.getenv(
    "WRAP_CONFIG_PATH", str(Path(__file__).parent.parent.parent / "wrapresolver-config.yaml")
))

# Bound on a single resolution, lookups included
DEFAULT_TIMEOUT_SECONDS = 60.0


class ResolverConfig(BaseModel):
    """
    The resolver configuration map.

    Keys use the dashed spelling of the config resource. Unknown keys are
    kept so operators can stage new settings without a code change.
    """

    default_wrapper: str | None = Field(default=None, alias="default-wrapper")
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0, alias="timeout-seconds")

    class Config:
        """Pydantic configuration: frozen, dashed keys, extras allowed."""

        populate_by_name = True
        extra = "allow"
        frozen = True

    @classmethod
    def from_mapping(cls, data: dict[str, Any] | None) -> "ResolverConfig":
        """Build from a raw string map (as a config resource delivers it)."""
        return cls.model_validate(data or {})


def load_config(config_path: Path = CONFIG_PATH) -> ResolverConfig:
    """
    Load resolver configuration from YAML.

    Args:
        config_path: Path to the configuration YAML file.

    Returns:
        ResolverConfig with validated settings; defaults if the file is absent.
    """
    if not config_path.exists():
        console.print(f"[yellow][CONFIG] {config_path.name} not found, using defaults[/yellow]")
        return ResolverConfig()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    config = ResolverConfig.from_mapping(data)
    console.print(f"[green][CONFIG] Loaded {config_path.name}[/green]")
    return config
