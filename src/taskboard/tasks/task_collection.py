# src/taskboard/tasks/task_collection.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .task_errors import TaskConflict, TaskNotFound
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskCollection:
    """
    In-memory set of currently visible tasks, in display order.

    Only the undo-delete controller removes or re-inserts tasks; create/update
    flows go through replace(). No locking: every mutation runs on the event loop.
    """

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: dict[str, Task] = {}
        for task in tasks:
            self.insert(task)

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(self.list())

    def get(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    def list(self) -> tuple[Task, ...]:
        return tuple(self._tasks.values())

    def remove(self, task_id: str) -> Task:
        try:
            task = self._tasks.pop(task_id)
        except KeyError:
            raise TaskNotFound(task_id) from None
        logger.debug("Task removed from list id=%s", task_id)
        return task

    def insert(self, task: Task) -> None:
        """Append a task. Restored tasks land at the end, not at their old position."""
        if task.id in self._tasks:
            raise TaskConflict(task.id)
        self._tasks[task.id] = task
        logger.debug("Task inserted id=%s", task.id)

    def replace(self, task: Task) -> None:
        # dict keeps the original position for an existing key.
        self._tasks[task.id] = task

    def reset(self, tasks: Iterable[Task]) -> None:
        fresh: dict[str, Task] = {}
        for task in tasks:
            if task.id in fresh:
                logger.warning("Duplicate task id=%s in reload; keeping the last one", task.id)
            fresh[task.id] = task
        self._tasks = fresh
        logger.info("Task list loaded: %d tasks", len(fresh))
