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
# PARAMETER VALIDATOR
# -----------------------------------------------------------------------------
# Responsibility: Turn the raw string map of a resolution request into a
# complete, immutable parameter set, or reject it listing everything missing.
#
# Pure: the configuration is passed in, never looked up.
# -----------------------------------------------------------------------------

from pydantic import BaseModel

from src.core.config import ResolverConfig

PIPELINE_REF_PARAM = "pipelineref"
WORKSPACES_PARAM = "workspaces"
TARGET_PARAM = "target"
WRAPPER_PARAM = "wrapper"


class MissingParameter(ValueError):
    """
    Raised when a request lacks required parameters.

    Lists every absent name, not just the first.
    """

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"missing required parameter(s): {', '.join(missing)}")
        self.missing = missing


class ResolvedParameters(BaseModel):
    """The fully populated parameter set of one request."""

    pipelineref: str
    workspaces: str
    target: str
    wrapper: str

    class Config:
        frozen = True

    @property
    def workspace_names(self) -> list[str]:
        """Distinct pipeline-scope workspace names, sorted."""
        return split_workspaces(self.workspaces)


def split_workspaces(value: str) -> list[str]:
    """Split a comma-separated workspace list, dropping blanks and duplicates."""
    return sorted({name.strip() for name in value.split(",") if name.strip()})


def _present(params: dict[str, str], name: str) -> bool:
    value = params.get(name)
    return value is not None and bool(str(value).strip())


def validate_params(params: dict[str, str], config: ResolverConfig) -> ResolvedParameters:
    """
    Validate request parameters and fill defaults from configuration.

    Args:
        params: Raw request parameters.
        config: The resolver configuration (source of `default-wrapper`).

    Returns:
        ResolvedParameters with every value populated.

    Raises:
        MissingParameter: If any required parameter has no value and no default.
    """
    populated = {name: str(value).strip() for name, value in params.items() if value is not None}
    missing: list[str] = []

    if not _present(populated, WRAPPER_PARAM):
        if config.default_wrapper:
            populated[WRAPPER_PARAM] = config.default_wrapper
        else:
            missing.append(WRAPPER_PARAM)

    if not _present(populated, PIPELINE_REF_PARAM):
        missing.append(PIPELINE_REF_PARAM)
    if not _present(populated, TARGET_PARAM):
        missing.append(TARGET_PARAM)
    if not _present(populated, WORKSPACES_PARAM) or not split_workspaces(
        populated[WORKSPACES_PARAM]
    ):
        missing.append(WORKSPACES_PARAM)

    if missing:
        raise MissingParameter(missing)

    return ResolvedParameters(
        pipelineref=populated[PIPELINE_REF_PARAM],
        workspaces=populated[WORKSPACES_PARAM],
        target=populated[TARGET_PARAM],
        wrapper=populated[WRAPPER_PARAM],
    )
