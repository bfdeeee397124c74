"""Namespaces that hold objects of the selected kind."""

from __future__ import annotations

from crd_browser.integrations.browser_api.exceptions import BrowserAPIError
from crd_browser.services.browser.base import BrowserBaseManager


class ResourceNamespaceManager(BrowserBaseManager):
    """Manager for the per-kind namespace list.

    The list only populates the namespace filter, so every failure is
    absorbed here: the list becomes empty and no error is reported.
    """

    _entity_name = "resource_namespaces"

    async def load_resource_namespaces(self) -> None:
        """Fetch the namespaces relevant to the selected kind."""
        selected = self._state.selected
        if selected is None:
            self._log.debug("load_resource_namespaces_skipped", reason="no_selection")
            return

        ticket = self._ticket()
        try:
            namespaces = await self._client.list_resource_namespaces(selected)
        except BrowserAPIError as e:
            if not self._is_current(ticket):
                self._discard(ticket, "load_resource_namespaces")
                return
            self._state.resource_namespaces = []
            self._emit(
                "resource_namespaces_load_failed",
                resource=selected.name,
                error=str(e),
            )
            return

        if not self._is_current(ticket):
            self._discard(ticket, "load_resource_namespaces")
            return

        self._state.resource_namespaces = list(namespaces)
        self._emit(
            "resource_namespaces_loaded",
            resource=selected.name,
            count=len(namespaces),
        )
