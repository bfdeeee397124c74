"""Rich table with CLI defaults."""

from __future__ import annotations

from typing import Any

from rich.table import Table as RichTable


class Table(RichTable):
    """Rich Table whose columns wrap long values instead of truncating.

    Object names and API groups are often longer than the terminal allows;
    folding keeps them readable and copyable.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("header_style", "bold")
        super().__init__(*args, **kwargs)

    def add_column(self, *args: Any, **kwargs: Any) -> None:
        """Add a column, defaulting ``overflow`` to ``"fold"``."""
        kwargs.setdefault("overflow", "fold")
        super().add_column(*args, **kwargs)
