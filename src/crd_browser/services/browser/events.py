"""Observability hook for browser state transitions.

Managers report transitions and failures to an injected sink instead of
printing. The default sink forwards to structlog.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import structlog

from crd_browser.logging.config import get_logger

logger = structlog.get_logger()

# Events that describe a degraded or failed data source.
FAILURE_EVENTS = frozenset(
    {
        "catalog_load_failed",
        "namespaces_fallback_used",
        "objects_load_failed",
        "resource_namespaces_load_failed",
    }
)


@runtime_checkable
class EventSink(Protocol):
    """Receiver for state-layer events."""

    def emit(self, event: str, **fields: Any) -> None:
        """Record one event with structured fields."""
        ...


class StructlogEventSink:
    """Event sink that writes events to a structlog logger.

    Failure events are logged at warning level, everything else at debug.
    """

    def __init__(self, log: Any = None) -> None:
        self._log = log if log is not None else get_logger(__name__, component="browser_store")

    def emit(self, event: str, **fields: Any) -> None:
        if event in FAILURE_EVENTS:
            self._log.warning(event, **fields)
        else:
            self._log.debug(event, **fields)


class NullEventSink:
    """Event sink that discards everything."""

    def emit(self, event: str, **fields: Any) -> None:
        return None


def safe_emit(sink: EventSink, event: str, **fields: Any) -> None:
    """Emit through ``sink`` without letting a faulty sink escape."""
    try:
        sink.emit(event, **fields)
    except Exception:
        logger.exception("event_sink_failed", event=event)
