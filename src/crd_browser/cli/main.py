"""Main CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from crd_browser import __version__
from crd_browser.cli.commands import browse, status
from crd_browser.cli.context import CLIContext
from crd_browser.logging.config import configure_logging

app = typer.Typer(
    name="crdb",
    help="Browse resource kinds and objects exposed by a resource browser backend.",
    add_completion=True,
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"crdb version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a config file (default: ~/.config/crdb/config.yaml).",
    ),
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        help="Backend base URL, overriding config and environment.",
    ),
) -> None:
    """crdb - explore cluster resource kinds and their objects."""
    configure_logging(verbose=verbose, debug=debug)
    ctx.obj = CLIContext(config_path=config, base_url=base_url)


app.command()(status.status)
app.command()(browse.resources)
app.command()(browse.namespaces)
app.command()(browse.objects)
app.command()(browse.get)


if __name__ == "__main__":
    app()
