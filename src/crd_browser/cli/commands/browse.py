"""Catalog, namespace and object browsing commands."""

from __future__ import annotations

import asyncio
from typing import Any

import structlog
import typer

from crd_browser.cli.context import (
    CommandEventSink,
    console,
    err_console,
    fail,
    load_config,
    open_store,
)
from crd_browser.cli.output import OutputFormat, print_document, print_records
from crd_browser.integrations.browser_api.models import (
    CORE_GROUP_TOKEN,
    ResourceObject,
    object_metadata,
)
from crd_browser.services.browser.state import ALL_NAMESPACES
from crd_browser.services.browser.store import BrowserStore

logger = structlog.get_logger()

OutputOption = typer.Option(
    None,
    "--output",
    "-o",
    help="Output format: table, json or yaml. Defaults to the configured format.",
)
NamespaceOption = typer.Option(
    None,
    "--namespace",
    "-n",
    help="Only show objects in this namespace.",
)


def _resolve_format(requested: str | None, configured: OutputFormat) -> OutputFormat:
    fmt = requested or configured
    if fmt not in ("table", "json", "yaml"):
        raise fail(f"Unknown output format '{fmt}'. Use table, json or yaml.")
    return fmt  # type: ignore[return-value]


def _object_row(obj: ResourceObject) -> dict[str, Any]:
    metadata = object_metadata(obj)
    return {
        "name": metadata.get("name"),
        "namespace": metadata.get("namespace"),
        "created": metadata.get("creationTimestamp"),
    }


async def _open_kind(
    store: BrowserStore,
    group: str,
    version: str,
    name: str,
    namespace: str | None,
) -> None:
    """Load the catalog, select a kind and fetch its objects."""
    await store.load_catalog()
    if store.error:
        raise fail(store.error)
    try:
        store.select_by_key(group, version, name)
    except LookupError as e:
        raise fail(str(e)) from e
    store.set_scope(namespace)
    await asyncio.gather(store.load_objects(), store.load_resource_namespaces())
    if store.error:
        raise fail(store.error)


def resources(
    ctx: typer.Context,
    group: str | None = typer.Option(
        None,
        "--group",
        "-g",
        help="Only show kinds in this API group ('core' for the core group).",
    ),
    output: str | None = OutputOption,
) -> None:
    """List the resource kinds the backend exposes."""
    config = load_config(ctx)
    fmt = _resolve_format(output, config.output_format)

    async def _run() -> list[dict[str, Any]]:
        async with open_store(config) as store:
            await store.load_catalog()
            if store.error:
                raise fail(store.error)
            return [
                {
                    "group": kind.path_group,
                    "version": kind.version,
                    "name": kind.name,
                    "kind": kind.kind,
                    "namespaced": kind.namespaced,
                }
                for kind in store.sorted_resources()
                if group is None or kind.path_group == group
            ]

    rows = asyncio.run(_run())
    logger.debug("Listed resources", count=len(rows), group=group)
    print_records(
        console,
        rows,
        [
            ("name", "Name"),
            ("group", "Group"),
            ("version", "Version"),
            ("kind", "Kind"),
            ("namespaced", "Namespaced"),
        ],
        fmt,
        title="Resource Kinds",
    )


def namespaces(
    ctx: typer.Context,
    output: str | None = OutputOption,
) -> None:
    """List cluster namespaces."""
    config = load_config(ctx)
    fmt = _resolve_format(output, config.output_format)
    events = CommandEventSink()

    async def _run() -> list[str]:
        async with open_store(config, events) as store:
            await store.load_namespaces()
            return store.namespaces

    names = asyncio.run(_run())
    if "namespaces_fallback_used" in events.seen:
        err_console.print(
            "[yellow]Cluster namespaces unavailable; showing default namespaces.[/yellow]"
        )
    print_records(console, [{"name": ns} for ns in names], [("name", "Namespace")], fmt)


def objects(
    ctx: typer.Context,
    group: str = typer.Argument(..., help=f"API group, '{CORE_GROUP_TOKEN}' for the core group."),
    version: str = typer.Argument(..., help="API version, e.g. v1."),
    name: str = typer.Argument(..., help="Plural resource name, e.g. deployments."),
    namespace: str | None = NamespaceOption,
    output: str | None = OutputOption,
) -> None:
    """List objects of a resource kind."""
    config = load_config(ctx)
    fmt = _resolve_format(output, config.output_format)

    async def _run() -> tuple[list[ResourceObject], list[str], bool]:
        async with open_store(config) as store:
            await _open_kind(store, group, version, name, namespace)
            selected = store.selected
            return (
                store.objects,
                store.resource_namespaces,
                bool(selected and selected.namespaced),
            )

    found, in_namespaces, namespaced = asyncio.run(_run())
    columns = [("name", "Name")]
    if namespaced:
        columns.append(("namespace", "Namespace"))
    columns.append(("created", "Created"))
    print_records(
        console,
        [_object_row(obj) for obj in found],
        columns,
        fmt,
        title=f"{name} ({namespace or ALL_NAMESPACES})",
    )
    if fmt == "table" and in_namespaces:
        console.print(f"[dim]Namespaces with {name}: {', '.join(in_namespaces)}[/dim]")


def get(
    ctx: typer.Context,
    group: str = typer.Argument(..., help=f"API group, '{CORE_GROUP_TOKEN}' for the core group."),
    version: str = typer.Argument(..., help="API version, e.g. v1."),
    name: str = typer.Argument(..., help="Plural resource name, e.g. deployments."),
    object_name: str = typer.Argument(..., help="Name of the object to show."),
    namespace: str | None = NamespaceOption,
    output: str | None = OutputOption,
) -> None:
    """Show a single object as YAML or JSON."""
    config = load_config(ctx)
    fmt = _resolve_format(output, config.output_format)

    async def _run() -> ResourceObject | None:
        async with open_store(config) as store:
            await _open_kind(store, group, version, name, namespace)
            return store.find_object(object_name, namespace)

    found = asyncio.run(_run())
    if found is None:
        where = f" in namespace '{namespace}'" if namespace else ""
        raise fail(f"{name} '{object_name}' not found{where}")
    print_document(console, found, fmt)
