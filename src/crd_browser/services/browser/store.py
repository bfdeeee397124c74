"""Browser store: the state layer handed to the view layer.

The store owns one CatalogState and one manager per data source. It is
built explicitly and passed to whatever renders it; there is no
module-level instance. All reads go through the properties below, which
return copies, and all writes go through the intent methods.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from crd_browser.integrations.browser_api.config import DEFAULT_FALLBACK_NAMESPACES
from crd_browser.services.browser.catalog_manager import CatalogManager
from crd_browser.services.browser.events import StructlogEventSink
from crd_browser.services.browser.namespace_manager import NamespaceManager
from crd_browser.services.browser.object_manager import ObjectManager
from crd_browser.services.browser.resource_namespace_manager import (
    ResourceNamespaceManager,
)
from crd_browser.services.browser.selection_manager import SelectionManager
from crd_browser.services.browser.state import CatalogState

if TYPE_CHECKING:
    from crd_browser.integrations.browser_api.client import BrowserAPIClient
    from crd_browser.integrations.browser_api.config import BrowserConfig
    from crd_browser.integrations.browser_api.models import ResourceKind, ResourceObject
    from crd_browser.services.browser.events import EventSink
    from crd_browser.services.browser.state import NamespaceScope

logger = structlog.get_logger()


class BrowserStore:
    """Resource catalog and object browsing state for one session.

    Example:
        ```python
        async with BrowserAPIClient(config) as client:
            store = BrowserStore(client, config=config)
            await store.refresh()
            await store.open_resource(store.sorted_resources()[0])
            print(store.objects)
        ```

    Args:
        client: Browser API client used for every fetch.
        config: Optional configuration; supplies the fallback namespaces.
        events: Sink for state transitions and failures. Defaults to a
            structlog-backed sink.
    """

    def __init__(
        self,
        client: BrowserAPIClient,
        *,
        config: BrowserConfig | None = None,
        events: EventSink | None = None,
    ) -> None:
        self._client = client
        self._state = CatalogState()
        self._events: EventSink = events if events is not None else StructlogEventSink()

        fallback = config.fallback_namespaces if config else DEFAULT_FALLBACK_NAMESPACES
        self._catalog = CatalogManager(client, self._state, self._events)
        self._namespaces = NamespaceManager(client, self._state, self._events, fallback)
        self._objects = ObjectManager(client, self._state, self._events)
        self._resource_namespaces = ResourceNamespaceManager(client, self._state, self._events)
        self._selection = SelectionManager(client, self._state, self._events, self._objects)

    # =========================================================================
    # Intents
    # =========================================================================

    async def load_catalog(self) -> None:
        """Fetch the resource kind catalog."""
        await self._catalog.load_catalog()

    async def load_namespaces(self) -> None:
        """Fetch the cluster namespace list (falls back on failure)."""
        await self._namespaces.load_namespaces()

    def select(self, kind: ResourceKind) -> None:
        """Select a resource kind, clearing objects and resetting the scope."""
        self._selection.select(kind)

    def select_by_key(self, group: str, version: str, name: str) -> ResourceKind:
        """Select a catalog kind by its (group, version, name).

        ``group`` may be the ``core`` path token.

        Raises:
            LookupError: If the kind is not in the loaded catalog.
        """
        kind = self._catalog.find_kind(group, version, name)
        if kind is None:
            raise LookupError(f"Resource kind {group}/{version}/{name} is not in the catalog")
        self._selection.select(kind)
        return kind

    def set_scope(self, scope: NamespaceScope | None) -> None:
        """Change the namespace scope without re-fetching."""
        self._selection.set_scope(scope)

    async def set_scope_and_reload(self, scope: NamespaceScope | None) -> None:
        """Change the namespace scope and re-fetch objects."""
        await self._selection.set_scope_and_reload(scope)

    async def load_objects(self) -> None:
        """Fetch objects for the selected kind and scope."""
        await self._objects.load_objects()

    async def load_resource_namespaces(self) -> None:
        """Fetch the namespaces relevant to the selected kind."""
        await self._resource_namespaces.load_resource_namespaces()

    async def open_resource(self, kind: ResourceKind) -> None:
        """Select ``kind`` and load its objects and namespaces concurrently."""
        self._selection.select(kind)
        await asyncio.gather(
            self._objects.load_objects(),
            self._resource_namespaces.load_resource_namespaces(),
        )

    async def refresh(self) -> None:
        """Reload the catalog and the namespace list concurrently."""
        await asyncio.gather(
            self._catalog.load_catalog(),
            self._namespaces.load_namespaces(),
        )

    # =========================================================================
    # Read-only views
    # =========================================================================

    def sorted_resources(self) -> list[ResourceKind]:
        """Catalog ordered by (group, name); see CatalogManager."""
        return self._catalog.sorted_resources()

    def find_object(self, name: str, namespace: str | None = None) -> ResourceObject | None:
        """Find a loaded object of the selected kind by name."""
        return self._objects.find_object(name, namespace)

    @property
    def resources(self) -> list[ResourceKind]:
        return list(self._state.resources)

    @property
    def namespaces(self) -> list[str]:
        return list(self._state.namespaces)

    @property
    def selected(self) -> ResourceKind | None:
        return self._state.selected

    @property
    def objects(self) -> list[ResourceObject]:
        return list(self._state.objects)

    @property
    def resource_namespaces(self) -> list[str]:
        return list(self._state.resource_namespaces)

    @property
    def scope(self) -> NamespaceScope:
        return self._state.scope

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> str | None:
        return self._state.error

    @property
    def generation(self) -> int:
        """Selection generation; increases on every ``select``."""
        return self._state.generation

    @property
    def fallback_namespaces(self) -> list[str]:
        return self._namespaces.fallback
