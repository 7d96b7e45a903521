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
# WORKSPACE TARGET RESOLVER
# -----------------------------------------------------------------------------
# Responsibility: Expand the `target` template into one image reference per
# workspace. Pure string work: nothing here talks to a registry.
# -----------------------------------------------------------------------------

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from rich.console import Console

console = Console(stderr=True)

WORKSPACE_PLACEHOLDER = "{{workspace}}"


def resolve_targets(workspace_names: Iterable[str], target_template: str) -> Mapping[str, str]:
    """
    Compute the concrete image reference for every workspace.

    Args:
        workspace_names: Pipeline-scope workspace names (duplicates ignored).
        target_template: Image reference containing `{{workspace}}`.

    Returns:
        Read-only mapping of workspace name to image reference, in name order.
    """
    names = sorted(set(workspace_names))
    if len(names) > 1 and WORKSPACE_PLACEHOLDER not in target_template:
        console.print(
            f"[yellow][TARGETS] '{target_template}' has no {WORKSPACE_PLACEHOLDER} "
            f"placeholder; {len(names)} workspaces share one image[/yellow]"
        )

    targets = {name: target_template.replace(WORKSPACE_PLACEHOLDER, name) for name in names}
    return MappingProxyType(targets)
