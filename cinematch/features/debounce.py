"""Collapse bursts of triggers into one deferred coroutine call."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class Debouncer:
    """Runs ``func`` once, ``delay`` seconds after the last :meth:`trigger`.

    Each trigger cancels the pending timer and schedules a fresh one, so a
    burst of triggers produces exactly one call with the latest arguments.
    """

    def __init__(self, delay: float, func: Callable[..., Awaitable[Any]]) -> None:
        self.delay = delay
        self._func = func
        self._handle: asyncio.TimerHandle | None = None
        self._args: tuple[Any, ...] = ()
        self._task: asyncio.Task[Any] | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, *args: Any) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._args = args
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def _fire(self) -> None:
        self._handle = None
        self._task = asyncio.ensure_future(self._run(self._args))

    async def _run(self, args: tuple[Any, ...]) -> None:
        try:
            await self._func(*args)
        except Exception:
            logger.exception("Debounced call %s failed", getattr(self._func, "__qualname__", self._func))

    async def flush(self) -> None:
        """Run a pending call now instead of waiting for the timer."""

        if self._handle is None:
            if self._task is not None and not self._task.done():
                await self._task
            return
        self._handle.cancel()
        self._handle = None
        await self._run(self._args)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


__all__ = ["Debouncer"]
