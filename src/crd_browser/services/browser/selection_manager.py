"""Selection controller: the selected kind and the namespace scope."""

from __future__ import annotations

from typing import TYPE_CHECKING

from crd_browser.integrations.browser_api.models import ResourceKind
from crd_browser.services.browser.base import BrowserBaseManager
from crd_browser.services.browser.state import ALL_NAMESPACES, ErrorOrigin

if TYPE_CHECKING:
    from crd_browser.integrations.browser_api.client import BrowserAPIClient
    from crd_browser.services.browser.events import EventSink
    from crd_browser.services.browser.object_manager import ObjectManager
    from crd_browser.services.browser.state import CatalogState, NamespaceScope


class SelectionManager(BrowserBaseManager):
    """Manager for the selected resource kind and namespace scope.

    ``select`` is the only way to change the selected kind. It resets the
    selection-dependent state but issues no fetches; callers sequence the
    object and namespace loads themselves.
    """

    _entity_name = "selection"

    def __init__(
        self,
        client: BrowserAPIClient,
        state: CatalogState,
        events: EventSink,
        objects: ObjectManager,
    ) -> None:
        super().__init__(client, state, events)
        self._objects = objects

    def select(self, kind: ResourceKind) -> None:
        """Select a kind and reset everything derived from the old one.

        Args:
            kind: The resource kind to browse.

        Raises:
            TypeError: If ``kind`` is not a ResourceKind.
        """
        if not isinstance(kind, ResourceKind):
            raise TypeError(f"select() expects a ResourceKind, got {type(kind).__name__}")

        state = self._state
        state.generation += 1
        state.selected = kind
        state.objects = []
        state.resource_namespaces = []
        state.scope = ALL_NAMESPACES
        state.clear_error(ErrorOrigin.OBJECTS)
        self._emit(
            "resource_selected",
            group=kind.group,
            version=kind.version,
            resource=kind.name,
            generation=state.generation,
        )

    def set_scope(self, scope: NamespaceScope | None) -> None:
        """Change the namespace scope. Empty or None means all namespaces."""
        new_scope = scope or ALL_NAMESPACES
        previous = self._state.scope
        self._state.scope = new_scope
        self._emit("scope_changed", previous=previous, scope=new_scope)

    async def set_scope_and_reload(self, scope: NamespaceScope | None) -> None:
        """Change the namespace scope and re-fetch objects for it."""
        self.set_scope(scope)
        await self._objects.load_objects()
