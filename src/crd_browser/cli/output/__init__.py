"""CLI output helpers.

All commands render through these helpers so that ``--output`` behaves
the same everywhere.

Usage:
    from crd_browser.cli.output import Table, print_document

    table = Table(title="Resources")
    table.add_column("Name", style="cyan")
    table.add_row("pods")
    console.print(table)
"""

from crd_browser.cli.output.formatters import OutputFormat, print_document, print_records
from crd_browser.cli.output.table import Table

__all__ = ["OutputFormat", "Table", "print_document", "print_records"]
