"""Render command results as a table, JSON or YAML."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any, Literal

import yaml
from rich.console import Console

from crd_browser.cli.output.table import Table

OutputFormat = Literal["table", "json", "yaml"]


def print_records(
    console: Console,
    records: Sequence[dict[str, Any]],
    columns: Sequence[tuple[str, str]],
    fmt: OutputFormat,
    *,
    title: str | None = None,
) -> None:
    """Print flat records.

    Args:
        console: Console to print to.
        records: Rows as dicts.
        columns: ``(key, header)`` pairs in display order.
        fmt: Output format.
        title: Table title (table format only).
    """
    if fmt == "json":
        console.print_json(json.dumps(list(records), default=str))
        return
    if fmt == "yaml":
        _print_yaml(console, list(records))
        return

    table = Table(title=title)
    for index, (_, header) in enumerate(columns):
        table.add_column(header, style="cyan" if index == 0 else None)
    for record in records:
        table.add_row(*(_cell(record.get(key)) for key, _ in columns))
    console.print(table)


def print_document(console: Console, document: Any, fmt: OutputFormat) -> None:
    """Print a single nested document. Tables fall back to YAML."""
    if fmt == "json":
        console.print_json(json.dumps(document, default=str))
        return
    _print_yaml(console, document)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def _print_yaml(console: Console, data: Any) -> None:
    console.print(
        yaml.safe_dump(data, sort_keys=False),
        end="",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
