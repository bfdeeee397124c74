"""Resource catalog manager.

Loads the full list of resource kinds and produces the ordered catalog
view the resource picker renders.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import ValidationError

from crd_browser.integrations.browser_api.exceptions import BrowserAPIError
from crd_browser.integrations.browser_api.models import (
    ResourceKey,
    ResourceKind,
)
from crd_browser.services.browser.base import BrowserBaseManager
from crd_browser.services.browser.state import ErrorOrigin


def catalog_sort_key(kind: ResourceKind) -> tuple[str, str]:
    """Ordering key for the catalog view: group, then name."""
    return (kind.group, kind.name)


def unique_kinds(kinds: Iterable[ResourceKind]) -> list[ResourceKind]:
    """Drop repeated (group, version, name) entries, keeping the first."""
    seen: set[ResourceKey] = set()
    result: list[ResourceKind] = []
    for kind in kinds:
        if kind.key in seen:
            continue
        seen.add(kind.key)
        result.append(kind)
    return result


class CatalogManager(BrowserBaseManager):
    """Manager for the resource kind catalog."""

    _entity_name = "catalog"

    async def load_catalog(self) -> None:
        """Fetch the catalog and replace ``resources`` in one step.

        On failure (transport or malformed payload) the previous catalog is
        kept and a catalog error is set.
        """
        self._log.debug("loading_catalog")
        with self._blocking():
            try:
                kinds = await self._client.list_resource_kinds()
            except BrowserAPIError as e:
                message = f"Failed to load resource catalog: {self._describe_error(e)}"
                self._state.set_error(message, ErrorOrigin.CATALOG)
                self._emit(
                    "catalog_load_failed",
                    error=str(e),
                    kept=len(self._state.resources),
                )
                return

            resources = unique_kinds(kinds)
            self._state.resources = resources
            self._state.clear_error(ErrorOrigin.CATALOG)
            self._emit(
                "catalog_loaded",
                count=len(resources),
                duplicates=len(kinds) - len(resources),
            )

    def sorted_resources(self) -> list[ResourceKind]:
        """Return the catalog ordered by (group, name).

        A fresh list is built on every call. Ties keep insertion order.
        Never raises: an unusable ``resources`` value yields an empty list.
        """
        resources = self._state.resources
        if not isinstance(resources, (list, tuple)):
            return []
        try:
            return sorted(resources, key=catalog_sort_key)
        except (AttributeError, TypeError):
            return []

    def find_kind(self, group: str, version: str, name: str) -> ResourceKind | None:
        """Look up a kind in the current catalog.

        ``group`` may be given as the ``core`` path token.
        """
        try:
            wanted = ResourceKind.from_path(group, version, name).key
        except ValidationError:
            return None
        for kind in self._state.resources:
            if kind.key == wanted:
                return kind
        return None
