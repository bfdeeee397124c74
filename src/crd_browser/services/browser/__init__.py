"""Resource catalog and object browsing state layer."""

from crd_browser.services.browser.catalog_manager import CatalogManager
from crd_browser.services.browser.events import (
    EventSink,
    NullEventSink,
    StructlogEventSink,
)
from crd_browser.services.browser.namespace_manager import NamespaceManager
from crd_browser.services.browser.object_manager import ObjectManager
from crd_browser.services.browser.resource_namespace_manager import (
    ResourceNamespaceManager,
)
from crd_browser.services.browser.selection_manager import SelectionManager
from crd_browser.services.browser.state import (
    ALL_NAMESPACES,
    CatalogState,
    ErrorOrigin,
    NamespaceScope,
)
from crd_browser.services.browser.store import BrowserStore

__all__ = [
    "ALL_NAMESPACES",
    "BrowserStore",
    "CatalogManager",
    "CatalogState",
    "ErrorOrigin",
    "EventSink",
    "NamespaceManager",
    "NamespaceScope",
    "NullEventSink",
    "ObjectManager",
    "ResourceNamespaceManager",
    "SelectionManager",
    "StructlogEventSink",
]
