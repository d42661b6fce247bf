"""
servicemock command-line interface entry point.

Example:
::
    # Show how a response definition renders
    servicemock render responses/not_found.yaml --default-status 404

    # Show the environment variables configuring servicemock
    servicemock config
"""

from __future__ import annotations

from pathlib import Path

import click

from servicemock.errors import ResponseParseError
from servicemock.response import MockResponse
from servicemock.settings import print_config, settings
from servicemock.streams import StreamFactory

__all__ = ["cli", "config", "render"]


@click.group()
@click.version_option(
    package_name="servicemock", message="servicemock version: %(version)s"
)
def cli():
    """servicemock CLI for inspecting mock endpoint responses."""


@cli.command(
    help=(
        "Build a mock response from a JSON or YAML definition file and print it. "
        "String bodies are resolved as references relative to --root."
    ),
)
@click.argument(
    "path",
    type=click.Path(file_okay=True, dir_okay=False, exists=True, path_type=Path),
)
@click.option(
    "--default-status",
    type=int,
    default=None,
    help=(
        "Status used when the definition has none. "
        f"Defaults to {settings.responses.default_status}."
    ),
)
@click.option(
    "--default-delay",
    type=int,
    default=None,
    help=(
        "Delay in milliseconds used when the definition has none. "
        f"Defaults to {settings.responses.default_delay}."
    ),
)
@click.option(
    "--root",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Directory that relative body references resolve against.",
)
def render(
    path: Path,
    default_status: int | None,
    default_delay: int | None,
    root: Path | None,
):
    factory = StreamFactory(root=root) if root is not None else None
    try:
        response = MockResponse.from_file(
            path,
            default_status=default_status,
            default_delay=default_delay,
            stream_factory=factory,
        )
    except ResponseParseError as err:
        cause = f": {err.__cause__}" if err.__cause__ else ""
        raise click.ClickException(f"{err}{cause}") from err

    click.echo(f"Status: {response}")
    click.echo(f"Delay: {response.delay}ms")
    click.echo(f"Percentile: {response.percentile}")
    for key, value in response.headers.items():
        click.echo(f"{key}: {value}")
    if response.body is not None:
        click.echo("")
        click.echo(response.body)


@cli.command(
    short_help="Show configuration settings.",
    help="Display environment variables for configuring servicemock behavior.",
)
def config():
    print_config()


if __name__ == "__main__":
    cli()
