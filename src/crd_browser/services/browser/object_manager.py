"""Object browser for the selected resource kind."""

from __future__ import annotations

from crd_browser.integrations.browser_api.exceptions import (
    BrowserAPIError,
    MalformedPayloadError,
)
from crd_browser.integrations.browser_api.models import (
    ResourceObject,
    object_name,
    object_namespace,
)
from crd_browser.services.browser.base import BrowserBaseManager
from crd_browser.services.browser.state import ALL_NAMESPACES, ErrorOrigin


class ObjectManager(BrowserBaseManager):
    """Manager for the object instances of the selected kind.

    Objects are fetched for the (kind, scope) pair active when the request
    is issued. A response that arrives after the selection or the scope
    changed is dropped.
    """

    _entity_name = "objects"

    async def load_objects(self) -> None:
        """Fetch objects for the current selection and scope.

        Does nothing when no kind is selected. A malformed payload counts as
        an empty list. A transport failure clears ``objects`` and sets an
        error naming the kind; catalog and namespace state are untouched.
        """
        selected = self._state.selected
        if selected is None:
            self._log.debug("load_objects_skipped", reason="no_selection")
            return

        ticket = self._ticket()
        namespace = None if ticket.scope == ALL_NAMESPACES else ticket.scope
        self._log.debug(
            "loading_objects",
            resource=selected.name,
            group_version=selected.group_version,
            namespace=namespace,
        )

        with self._blocking():
            try:
                objects = await self._client.list_objects(selected, namespace)
            except MalformedPayloadError as e:
                if not self._is_current(ticket, match_scope=True):
                    self._discard(ticket, "load_objects")
                    return
                objects = []
                self._emit("objects_payload_malformed", resource=selected.name, error=str(e))
            except BrowserAPIError as e:
                if not self._is_current(ticket, match_scope=True):
                    self._discard(ticket, "load_objects")
                    return
                message = (
                    f"Failed to load {selected.name} ({selected.group_version}): "
                    f"{self._describe_error(e)}"
                )
                self._state.objects = []
                self._state.set_error(message, ErrorOrigin.OBJECTS)
                self._emit(
                    "objects_load_failed",
                    resource=selected.name,
                    namespace=namespace,
                    error=str(e),
                )
                return

            if not self._is_current(ticket, match_scope=True):
                self._discard(ticket, "load_objects")
                return

            self._state.objects = list(objects)
            self._state.clear_error(ErrorOrigin.OBJECTS)
            self._emit(
                "objects_loaded",
                resource=selected.name,
                namespace=namespace,
                count=len(objects),
            )

    def find_object(self, name: str, namespace: str | None = None) -> ResourceObject | None:
        """Find a loaded object by name.

        Args:
            name: ``metadata.name`` of the object.
            namespace: Required namespace; None matches any.

        Returns:
            The first matching object, or None.
        """
        for obj in self._state.objects:
            if object_name(obj) != name:
                continue
            if namespace is not None and object_namespace(obj) != namespace:
                continue
            return obj
        return None
