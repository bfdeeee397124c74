"""Shared helpers for CLI commands: configuration, store lifetime, events."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from crd_browser.integrations.browser_api.client import BrowserAPIClient
from crd_browser.integrations.browser_api.config import BrowserConfig
from crd_browser.integrations.browser_api.exceptions import BrowserConfigError
from crd_browser.services.browser.events import StructlogEventSink
from crd_browser.services.browser.store import BrowserStore

console = Console()
err_console = Console(stderr=True)


@dataclass
class CLIContext:
    """Options collected by the top-level callback."""

    config_path: Path | None = None
    base_url: str | None = None


class CommandEventSink(StructlogEventSink):
    """Structlog sink that also remembers which events fired."""

    def __init__(self) -> None:
        super().__init__()
        self.seen: set[str] = set()

    def emit(self, event: str, **fields: Any) -> None:
        self.seen.add(event)
        super().emit(event, **fields)


def get_cli_context(ctx: typer.Context) -> CLIContext:
    obj = ctx.find_root().obj
    return obj if isinstance(obj, CLIContext) else CLIContext()


def load_config(ctx: typer.Context) -> BrowserConfig:
    """Resolve configuration for a command, exiting on invalid config."""
    options = get_cli_context(ctx)
    try:
        config = BrowserConfig.load(options.config_path)
    except BrowserConfigError as e:
        err_console.print(f"[red]Error:[/red] {escape(e.message)}")
        if e.details:
            err_console.print(f"[dim]{escape(e.details)}[/dim]")
        raise typer.Exit(1) from e

    if options.base_url:
        data = config.model_dump()
        data["connection"]["base_url"] = options.base_url
        try:
            config = BrowserConfig.model_validate(data)
        except ValidationError as e:
            err_console.print(f"[red]Error:[/red] Invalid --base-url: {escape(options.base_url)}")
            raise typer.Exit(1) from e
    return config


@asynccontextmanager
async def open_store(
    config: BrowserConfig,
    events: CommandEventSink | None = None,
) -> AsyncIterator[BrowserStore]:
    """Yield a store bound to a client that is closed on exit."""
    async with BrowserAPIClient(config) as client:
        yield BrowserStore(client, config=config, events=events)


def fail(message: str) -> typer.Exit:
    """Print an error and return the Exit to raise."""
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(1)
