"""Observer registry used by the selector to announce state changes.

Handlers are kept per event name in registration order and invoked
synchronously. A failing handler propagates its exception to the emitter.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

logger = logging.getLogger(__name__)


class SelectionEvent(str, Enum):
    """Events emitted by ``FileSelector``."""

    UPDATE = "update"


EventName = SelectionEvent | str
Handler = Callable[..., object]


def _event_key(event: EventName) -> str:
    if isinstance(event, SelectionEvent):
        return event.value
    return str(event)


class EventBus:
    """Map of event name to ordered handler lists.

    Unknown event names are accepted; their handler list is created on first
    registration.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {}

    def on(self, event: EventName, handler: Handler) -> None:
        """Register ``handler`` for ``event``; duplicates register twice."""
        self._handlers.setdefault(_event_key(event), []).append(handler)

    def off(self, event: EventName, handler: Handler | None = None) -> None:
        """Remove the first registration of ``handler``, or every handler when omitted."""
        key = _event_key(event)
        if handler is None:
            self._handlers[key] = []
            return
        handlers = self._handlers.get(key)
        if not handlers:
            return
        for idx, registered in enumerate(handlers):
            if registered == handler:
                del handlers[idx]
                return

    def emit(self, event: EventName, *args: object) -> None:
        """Invoke handlers for ``event`` in registration order."""
        key = _event_key(event)
        handlers = self._handlers.get(key)
        if not handlers:
            return
        logger.debug("emitting %r to %d handler(s)", key, len(handlers))
        # Handlers may register or remove handlers while running.
        for handler in list(handlers):
            handler(*args)

    def clear(self) -> None:
        """Drop every registered handler for every event."""
        self._handlers.clear()


__all__ = [
    "EventBus",
    "EventName",
    "Handler",
    "SelectionEvent",
]
