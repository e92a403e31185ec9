"""Session-scoped publish/subscribe registry for cross-layer notifications."""
from __future__ import annotations

import inspect
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

FORCE_LOGOUT = "forceLogout"

EventHandler = Callable[..., Any]


class EventEmitter:
    """Tracks handlers per event name and fans out emitted events."""

    def __init__(self) -> None:
        self._channels: dict[str, list[EventHandler]] = {}

    def on(self, event: str, handler: EventHandler) -> Callable[[], None]:
        """Register ``handler`` and return a callable that unregisters it."""

        self._channels.setdefault(event, []).append(handler)
        return lambda: self.off(event, handler)

    def off(self, event: str, handler: EventHandler) -> None:
        handlers = self._channels.get(event)
        if not handlers:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            return
        if not handlers:
            self._channels.pop(event, None)

    def listener_count(self, event: str) -> int:
        return len(self._channels.get(event, ()))

    async def emit_async(self, event: str, *args: Any) -> None:
        """Call every handler in registration order, awaiting coroutine handlers."""

        for handler in list(self._channels.get(event, ())):
            result = handler(*args)
            if inspect.isawaitable(result):
                await result

    def clear(self) -> None:
        self._channels.clear()


__all__ = ["EventEmitter", "EventHandler", "FORCE_LOGOUT"]
