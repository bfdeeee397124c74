"""Base manager for the browser state layer.

Provides the shared infrastructure every manager needs: the API client,
the shared session state, the event sink, in-flight bookkeeping for the
loading flag and the selection tickets used to drop stale responses.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from crd_browser.integrations.browser_api.exceptions import BrowserAPIError
from crd_browser.logging.config import get_logger
from crd_browser.services.browser.events import EventSink, safe_emit

if TYPE_CHECKING:
    from crd_browser.integrations.browser_api.client import BrowserAPIClient
    from crd_browser.integrations.browser_api.models import ResourceKey
    from crd_browser.services.browser.state import CatalogState, NamespaceScope


@dataclass(frozen=True)
class SelectionTicket:
    """Selection identity captured when a fetch is issued."""

    generation: int
    key: ResourceKey | None
    scope: NamespaceScope


class BrowserBaseManager:
    """Base class for browser state managers.

    Subclasses set ``_entity_name`` for structured log context.

    Example:
        >>> class CatalogManager(BrowserBaseManager):
        ...     _entity_name = "catalog"
    """

    _entity_name: str = ""

    def __init__(
        self,
        client: BrowserAPIClient,
        state: CatalogState,
        events: EventSink,
    ) -> None:
        """Initialize the manager.

        Args:
            client: Browser API client.
            state: Session state shared with the other managers.
            events: Sink for state transitions and failures.
        """
        self._client = client
        self._state = state
        self._events = events
        self._log = get_logger(__name__, entity=self._entity_name)

    def _emit(self, event: str, **fields: Any) -> None:
        safe_emit(self._events, event, entity=self._entity_name, **fields)

    @contextmanager
    def _blocking(self) -> Iterator[None]:
        """Count the enclosed fetch towards the loading flag."""
        self._state.pending += 1
        try:
            yield
        finally:
            self._state.pending -= 1

    def _ticket(self) -> SelectionTicket:
        selected = self._state.selected
        return SelectionTicket(
            generation=self._state.generation,
            key=selected.key if selected is not None else None,
            scope=self._state.scope,
        )

    def _is_current(self, ticket: SelectionTicket, *, match_scope: bool = False) -> bool:
        """Check a ticket against the live selection.

        Args:
            ticket: Identity captured when the fetch was issued.
            match_scope: Also require the namespace scope to be unchanged.

        Returns:
            True if a response for ``ticket`` may still be committed.
        """
        current = self._ticket()
        if current.generation != ticket.generation or current.key != ticket.key:
            return False
        return not match_scope or current.scope == ticket.scope

    def _discard(self, ticket: SelectionTicket, operation: str) -> None:
        self._emit(
            "stale_response_discarded",
            operation=operation,
            issued_generation=ticket.generation,
            current_generation=self._state.generation,
        )

    @staticmethod
    def _describe_error(error: BrowserAPIError) -> str:
        return error.user_message
