# src/taskboard/tasks/pending_registry.py

from __future__ import annotations

"""
Pending-delete registry.

One entry per task id whose deletion is scheduled but not yet settled:
- the restore snapshot,
- the handle of the scheduled commit,
- when the delete was requested.

The registry owns the timer: begin() schedules it, cancel() stops it.
"""

import logging
import time
from collections.abc import Awaitable, Callable

from ..core.ports import Scheduler
from .task_errors import AlreadyPending, NotPending
from .task_models import PendingDelete, Task

logger = logging.getLogger(__name__)

DEFAULT_UNDO_WINDOW_SECONDS = 10.0


class PendingDeleteRegistry:
    def __init__(
        self,
        scheduler: Scheduler,
        *,
        window_seconds: float = DEFAULT_UNDO_WINDOW_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._scheduler = scheduler
        self._window = max(0.0, float(window_seconds))
        self._clock = clock
        self._entries: dict[str, PendingDelete] = {}

    @property
    def window_seconds(self) -> float:
        return self._window

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._entries

    def ids(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def get(self, task_id: str) -> PendingDelete | None:
        return self._entries.get(task_id)

    def begin(
        self,
        task_id: str,
        snapshot: Task,
        on_expire: Callable[[], Awaitable[None]],
        *,
        delay: float | None = None,
    ) -> PendingDelete:
        """Schedule on_expire and record the pending delete; the entry carries the timer handle."""
        if task_id in self._entries:
            raise AlreadyPending(task_id)

        delay_s = self._window if delay is None else max(0.0, float(delay))
        handle = self._scheduler.call_later(delay_s, on_expire)
        entry = PendingDelete(
            task_id=task_id,
            snapshot=snapshot,
            handle=handle,
            created_at=self._clock(),
        )
        self._entries[task_id] = entry
        logger.debug("Pending delete registered id=%s delay=%.1fs", task_id, delay_s)
        return entry

    def cancel(self, task_id: str) -> Task:
        entry = self._entries.pop(task_id, None)
        if entry is None:
            raise NotPending(task_id)
        entry.handle.cancel()
        logger.debug("Pending delete cancelled id=%s in_flight=%s", task_id, entry.in_flight)
        return entry.snapshot

    def complete(self, task_id: str, entry: PendingDelete | None = None) -> bool:
        """
        Drop the entry after the commit settled.

        With `entry`, only that exact delete is dropped: a newer delete of the same
        task (undo, then delete again) stays registered.
        Returns False when there is nothing to drop (undo won the race); that is not an error.
        """
        current = self._entries.get(task_id)
        if current is None or (entry is not None and current is not entry):
            return False
        del self._entries[task_id]
        logger.debug("Pending delete completed id=%s", task_id)
        return True

    def mark_in_flight(self, task_id: str) -> PendingDelete | None:
        entry = self._entries.get(task_id)
        if entry is not None:
            entry.in_flight = True
        return entry

    def stop_timer(self, task_id: str) -> bool:
        """Cancel the scheduled commit but keep the entry (the caller commits right away)."""
        entry = self._entries.get(task_id)
        if entry is None:
            return False
        entry.handle.cancel()
        return True
