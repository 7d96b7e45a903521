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
# SCRIPT GENERATOR
# -----------------------------------------------------------------------------
# Responsibility: Emit the shell that moves workspace content in and out of
# registry images, and wrap it into the generated import/export steps.
#
# All script text is built here so the transformer never formats shell.
# Output is a pure function of its inputs: same transfers, same bytes.
# -----------------------------------------------------------------------------

import shlex
from collections.abc import Sequence
from dataclasses import dataclass

from src.domain.models import Step

SHEBANG = "#!/busybox/sh -e"

# crane's debug image ships busybox, so the shebang above resolves
TRANSFER_IMAGE = "gcr.io/go-containerregistry/crane:debug"
TRANSFER_WORKDIR = "/"

IMPORT_STEP_NAME = "import-workspace"
EXPORT_STEP_NAME = "export-workspace"


@dataclass(frozen=True)
class WorkspaceTransfer:
    """
    One workspace moving through the registry for one task.

    `image` is the source image on import and the published image on export.
    `base_image` is only read on export: the image the new layer is appended to.
    """

    workspace: str
    mount_path: str
    image: str
    base_image: str | None = None


def _import_fragment(mount_path: str, source_image: str) -> str:
    return (
        f'echo "Extract workspace content from {source_image} in {mount_path}"\n'
        f"crane export {shlex.quote(source_image)} | tar -x -C {shlex.quote(mount_path)}\n"
    )


def _export_fragment(mount_path: str, target_image: str, base_image: str) -> str:
    return (
        f'echo "Export workspace content from {mount_path} to {target_image}"\n'
        f"(cd {shlex.quote(mount_path)} && tar -f - -c . | "
        f"crane append -b {shlex.quote(base_image)} -t {shlex.quote(target_image)} -f -)\n"
    )


def import_script(mount_path: str, source_image: str) -> str:
    """Script that pulls `source_image` and unpacks it into `mount_path`."""
    return f"{SHEBANG}\n{_import_fragment(mount_path, source_image)}"


def export_script(mount_path: str, target_image: str, base_image: str) -> str:
    """Script that packs `mount_path` as a layer on `base_image`, pushed as `target_image`."""
    return f"{SHEBANG}\n{_export_fragment(mount_path, target_image, base_image)}"


def combined_import_script(transfers: Sequence[WorkspaceTransfer]) -> str:
    """One import script covering every transfer, in the order given."""
    body = "".join(_import_fragment(t.mount_path, t.image) for t in transfers)
    return f"{SHEBANG}\n{body}"


def combined_export_script(transfers: Sequence[WorkspaceTransfer]) -> str:
    """
    One export script covering every transfer, in the order given.

    Raises:
        ValueError: If a transfer has no base image to append to.
    """
    fragments = []
    for t in transfers:
        if not t.base_image:
            raise ValueError(f"export of workspace {t.workspace!r} has no base image")
        fragments.append(_export_fragment(t.mount_path, t.image, t.base_image))
    return f"{SHEBANG}\n{''.join(fragments)}"


def _transfer_step(name: str, script: str) -> Step:
    return Step(name=name, image=TRANSFER_IMAGE, working_dir=TRANSFER_WORKDIR, script=script)


def import_step(transfers: Sequence[WorkspaceTransfer]) -> Step:
    """The generated step that restores workspaces before a task runs."""
    return _transfer_step(IMPORT_STEP_NAME, combined_import_script(transfers))


def export_step(transfers: Sequence[WorkspaceTransfer]) -> Step:
    """The generated step that publishes workspaces after a task runs."""
    return _transfer_step(EXPORT_STEP_NAME, combined_export_script(transfers))
