"""Status command for the backend connection."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import structlog
import typer

from crd_browser import __version__
from crd_browser.cli.context import console, load_config
from crd_browser.cli.output import Table
from crd_browser.integrations.browser_api.client import BrowserAPIClient
from crd_browser.integrations.browser_api.config import BrowserConfig
from crd_browser.integrations.browser_api.exceptions import BrowserAPIError

logger = structlog.get_logger()


@dataclass
class BackendStatus:
    """What the backend reported about itself."""

    health: dict[str, Any] | None = None
    ready: bool = False
    error: str | None = None
    cache: dict[str, Any] | None = None


async def _check_backend(config: BrowserConfig) -> BackendStatus:
    async with BrowserAPIClient(config) as client:
        try:
            health = await client.check_health()
            ready = await client.check_ready()
        except BrowserAPIError as e:
            return BackendStatus(error=e.user_message)
        result = BackendStatus(health=health, ready=ready)
        # Older backends do not serve the cache summary.
        try:
            result.cache = await client.check_cache_status()
        except BrowserAPIError as e:
            logger.debug("Cache status unavailable", error=str(e))
    return result


def _cache_row(cache: dict[str, Any] | None) -> tuple[str, str]:
    if cache is None:
        return "[yellow]unavailable[/yellow]", ""
    if cache.get("preloadComplete"):
        state = "[green]preloaded[/green]"
    else:
        state = "[yellow]warming[/yellow]"
    details = (
        f"{cache.get('readyResources', 0)}/{cache.get('totalInformers', 0)} informers ready, "
        f"{cache.get('totalObjects', 0)} objects"
    )
    return state, details


def status(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show the effective configuration as well.",
    ),
) -> None:
    """Show backend health, readiness and cache state."""
    config = load_config(ctx)
    logger.info("Checking backend status", base_url=config.base_url)

    backend = asyncio.run(_check_backend(config))
    health = backend.health

    table = Table(title="Resource Browser Status")
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Details", style="dim")

    table.add_row("CLI Version", __version__, "crdb")
    if health is None:
        table.add_row("Backend", "[red]unreachable[/red]", backend.error or "")
    else:
        table.add_row(
            "Backend",
            f"[green]{health.get('status', 'ok')}[/green]",
            str(health.get("service", "")),
        )
        table.add_row(
            "Readiness",
            "[green]ready[/green]" if backend.ready else "[yellow]not ready[/yellow]",
            str(health.get("timestamp", "")),
        )
        table.add_row("Cache", *_cache_row(backend.cache))

    if verbose:
        table.add_row("Base URL", config.base_url, "connection.base_url")
        table.add_row("Catalog", config.catalog_path, "catalog_path")
        table.add_row(
            "Fallback namespaces",
            ", ".join(config.fallback_namespaces),
            "fallback_namespaces",
        )

    console.print(table)
    if health is None:
        raise typer.Exit(1)
