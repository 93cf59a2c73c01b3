# src/taskboard/tasks/task_scheduler.py

from __future__ import annotations

"""
Deferred-action scheduler on the asyncio event loop.

- call_later() arms a loop timer and returns a cancellable handle,
- when the timer fires the action is started as an asyncio.Task,
- running actions are tracked so shutdown can await them (drain()).

Cancelling the handle only disarms the timer. An action that already started
keeps running; callers that care check their own state when the action runs.
"""

import asyncio
import logging

from ..core.ports import DeferredAction

logger = logging.getLogger(__name__)


class TimerCall:
    """ScheduledCall backed by an asyncio.TimerHandle."""

    __slots__ = ("_handle", "_fired")

    def __init__(self) -> None:
        self._handle: asyncio.TimerHandle | None = None
        self._fired = False

    def cancel(self) -> None:
        if self._handle is not None and not self._fired:
            self._handle.cancel()

    def cancelled(self) -> bool:
        return self._handle is not None and self._handle.cancelled()

    @property
    def fired(self) -> bool:
        return self._fired


class AsyncioScheduler:
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._running: set[asyncio.Task[None]] = set()

    def call_later(self, delay: float, action: DeferredAction) -> TimerCall:
        loop = self._loop or asyncio.get_running_loop()
        call = TimerCall()
        call._handle = loop.call_later(max(0.0, float(delay)), self._fire, call, action)
        return call

    def _fire(self, call: TimerCall, action: DeferredAction) -> None:
        call._fired = True
        task = asyncio.ensure_future(action())
        self._running.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task[None]) -> None:
        self._running.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Deferred action crashed", exc_info=exc)

    @property
    def running(self) -> int:
        return len(self._running)

    async def drain(self) -> None:
        """Wait for actions that already fired. Armed timers are left alone."""
        while self._running:
            await asyncio.gather(*list(self._running), return_exceptions=True)
