# src/taskboard/tasks/notification_queue.py

from __future__ import annotations

import logging

from .task_errors import AlreadyPending
from .task_models import NotificationItem, Task

logger = logging.getLogger(__name__)


class NotificationQueue:
    """Ordered "<title> deleted. Undo" notices, at most one per pending delete."""

    def __init__(self) -> None:
        self._items: dict[str, NotificationItem] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._items

    def ids(self) -> tuple[str, ...]:
        return tuple(self._items)

    def enqueue(self, task_id: str, task: Task) -> NotificationItem:
        if task_id in self._items:
            raise AlreadyPending(task_id)
        item = NotificationItem(id=task_id, task=task)
        self._items[task_id] = item
        return item

    def dequeue(self, task_id: str) -> None:
        if self._items.pop(task_id, None) is not None:
            logger.debug("Notification removed id=%s", task_id)

    def list(self) -> tuple[NotificationItem, ...]:
        return tuple(self._items.values())

    def latest(self) -> NotificationItem | None:
        if not self._items:
            return None
        return next(reversed(self._items.values()))
