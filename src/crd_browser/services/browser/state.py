"""Session state shared by the browser managers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from crd_browser.integrations.browser_api.models import ResourceKind, ResourceObject

ALL_NAMESPACES = "all"

NamespaceScope = str


class ErrorOrigin(Enum):
    """Which data source set the current error message."""

    CATALOG = "catalog"
    OBJECTS = "objects"


@dataclass
class CatalogState:
    """Aggregate state of one browsing session.

    Created once per session with empty defaults. Managers mutate it in
    place; the view layer only reads it through BrowserStore.
    """

    resources: list[ResourceKind] = field(default_factory=list)
    namespaces: list[str] = field(default_factory=list)
    selected: ResourceKind | None = None
    objects: list[ResourceObject] = field(default_factory=list)
    resource_namespaces: list[str] = field(default_factory=list)
    scope: NamespaceScope = ALL_NAMESPACES
    # One message per failing data source; the catalog error wins in `error`.
    errors: dict[ErrorOrigin, str] = field(default_factory=dict)
    # Bumped on every selection change; fetches compare against it on resume.
    generation: int = 0
    # In-flight fetches the view blocks on.
    pending: int = 0

    @property
    def loading(self) -> bool:
        """True while at least one blocking fetch is outstanding."""
        return self.pending > 0

    @property
    def error_origin(self) -> ErrorOrigin | None:
        """Origin of the message reported by ``error``."""
        for origin in ErrorOrigin:
            if origin in self.errors:
                return origin
        return None

    @property
    def error(self) -> str | None:
        """User-visible error, catalog failures first."""
        origin = self.error_origin
        return self.errors[origin] if origin is not None else None

    def set_error(self, message: str, origin: ErrorOrigin) -> None:
        self.errors[origin] = message

    def clear_error(self, origin: ErrorOrigin) -> None:
        """Clear the error raised by ``origin``, leaving the others."""
        self.errors.pop(origin, None)
