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
# SERIALIZER
# -----------------------------------------------------------------------------
# Responsibility: Render resolved resources to YAML, the interchange form the
# host hands back to the pipeline controller.
#
# Key order follows the models and multi-line scripts use block style, so the
# same pipeline always renders to the same bytes.
# -----------------------------------------------------------------------------

import yaml

from src.domain.models import ResourceModel


class _BlockStyleDumper(yaml.SafeDumper):
    """SafeDumper that writes multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    if "\n" in value:
        return dumper.represent_scalar("tag:yaml.org,2002:str", value, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", value)


_BlockStyleDumper.add_representer(str, _represent_str)


def to_yaml(resource: ResourceModel) -> str:
    """Render a resource as a YAML document."""
    return yaml.dump(
        resource.to_dict(),
        Dumper=_BlockStyleDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


def to_bytes(resource: ResourceModel) -> bytes:
    """Render a resource as UTF-8 YAML bytes."""
    return to_yaml(resource).encode("utf-8")
