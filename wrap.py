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
# WRAP - COMMAND LINE
# -----------------------------------------------------------------------------
# Run the wrap resolver against manifests on disk, without a cluster.
#
#   python wrap.py resolve --store ./resources -n ci \
#       -p pipelineref=simple-pipeline -p workspaces=sources \
#       -p target=registry.example/ci-{{workspace}}:latest
#
# The rewritten Pipeline goes to stdout (or --output); logs go to stderr.
# -----------------------------------------------------------------------------

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel

from src.core.config import CONFIG_PATH, load_config
from src.core.params import MissingParameter, validate_params
from src.core.resolver import ResolutionTimeout, WrapResolver
from src.core.transformer import TransformError
from src.infra.store import DirectoryStore, StoreLookupError

console = Console(stderr=True)


def parse_params(items: tuple[str, ...]) -> dict[str, str]:
    """
    Parse key=value pairs from -p flags.

    Raises:
        click.BadParameter: If an item has no '='.
    """
    result = {}
    for item in items:
        if "=" not in item:
            raise click.BadParameter(f"{item!r} (expected key=value)", param_hint="-p/--param")
        key, value = item.split("=", 1)
        result[key.strip()] = value
    return result


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=CONFIG_PATH,
    show_default=True,
    help="Resolver configuration YAML",
)
@click.pass_context
def cli(ctx, config_path):
    """Wrap - rewrite Pipelines to share workspaces through OCI images."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(config_path)


@cli.command()
@click.option("-p", "--param", "params", multiple=True, help="Request parameter, key=value")
@click.pass_context
def validate(ctx, params):
    """Check request parameters and print them with defaults applied."""
    try:
        resolved = validate_params(parse_params(params), ctx.obj["config"])
    except MissingParameter as e:
        console.print(f"[red][WRAP] {e}[/red]")
        sys.exit(2)

    for name, value in resolved.model_dump().items():
        click.echo(f"{name}={value}")


@cli.command()
@click.option(
    "--store",
    "store_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    required=True,
    help="Directory of manifests, one subdirectory per namespace",
)
@click.option("-n", "--namespace", default="default", show_default=True)
@click.option("-p", "--param", "params", multiple=True, help="Request parameter, key=value")
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.pass_context
def resolve(ctx, store_dir, namespace, params, output):
    """Resolve a request and emit the rewritten Pipeline."""
    resolver = WrapResolver(DirectoryStore(store_dir))
    try:
        resource = resolver.resolve(namespace, parse_params(params), ctx.obj["config"])
    except MissingParameter as e:
        console.print(f"[red][WRAP] {e}[/red]")
        sys.exit(2)
    except (StoreLookupError, TransformError, ResolutionTimeout) as e:
        console.print(Panel(f"[bold red]{e}[/bold red]", title="RESOLUTION FAILED", border_style="red"))
        sys.exit(1)

    if output is None:
        click.echo(resource.data.decode("utf-8"), nl=False)
    else:
        output.write_bytes(resource.data)
        console.print(f"[green][WRAP] Wrote {output}[/green]")


if __name__ == "__main__":
    cli()
