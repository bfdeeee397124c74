"""Cluster namespace registry."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from crd_browser.integrations.browser_api.config import DEFAULT_FALLBACK_NAMESPACES
from crd_browser.integrations.browser_api.exceptions import BrowserAPIError
from crd_browser.services.browser.base import BrowserBaseManager

if TYPE_CHECKING:
    from crd_browser.integrations.browser_api.client import BrowserAPIClient
    from crd_browser.services.browser.events import EventSink
    from crd_browser.services.browser.state import CatalogState


class NamespaceManager(BrowserBaseManager):
    """Manager for the cluster-wide namespace list.

    The namespace list only feeds the scope picker, so a failed fetch is
    never reported as an error. A fixed fallback list keeps the picker
    usable when the cluster cannot be reached.
    """

    _entity_name = "namespaces"

    def __init__(
        self,
        client: BrowserAPIClient,
        state: CatalogState,
        events: EventSink,
        fallback: Sequence[str] = DEFAULT_FALLBACK_NAMESPACES,
    ) -> None:
        super().__init__(client, state, events)
        self._fallback = list(fallback)

    @property
    def fallback(self) -> list[str]:
        """Namespaces used when the list cannot be fetched."""
        return list(self._fallback)

    async def load_namespaces(self) -> None:
        """Fetch namespaces, substituting the fallback list on failure."""
        self._log.debug("loading_namespaces")
        try:
            namespaces = await self._client.list_namespaces()
        except BrowserAPIError as e:
            self._state.namespaces = self.fallback
            self._emit(
                "namespaces_fallback_used",
                error=str(e),
                namespaces=self._state.namespaces,
            )
            return

        self._state.namespaces = list(namespaces)
        self._emit("namespaces_loaded", count=len(namespaces))
