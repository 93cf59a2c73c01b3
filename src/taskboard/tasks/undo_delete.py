# src/taskboard/tasks/undo_delete.py

from __future__ import annotations

"""
Undo-delete controller.

Per task id the lifecycle is:

    VISIBLE -> PENDING_REMOVAL -> committed (gone)
                               -> restored (VISIBLE again)

request_delete() and undo() are synchronous, so each transition finishes within
one turn of the event loop and nothing can observe it half-applied. The commit
is the only step that suspends (on the external delete call).

Undo can arrive while the commit request is already on the wire. The local
state is restored, but the external delete may still land. That window is
bounded by one request round-trip and is logged, not prevented.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable

from ..core.ports import TaskApi
from .notification_queue import NotificationQueue
from .pending_registry import PendingDeleteRegistry
from .task_collection import TaskCollection
from .task_errors import AlreadyPending, CommitFailed, TaskConflict
from .task_models import DeleteResult, DeleteState, NotificationItem, PendingDelete, Task

logger = logging.getLogger(__name__)

ErrorReporter = Callable[[CommitFailed], None]
CommitListener = Callable[[Task], None]


class UndoDeleteController:
    def __init__(
        self,
        tasks: TaskCollection,
        registry: PendingDeleteRegistry,
        notifications: NotificationQueue,
        api: TaskApi,
        *,
        on_error: ErrorReporter | None = None,
        on_commit: CommitListener | None = None,
    ) -> None:
        self._tasks = tasks
        self._registry = registry
        self._notifications = notifications
        self._api = api
        self.on_error = on_error
        self.on_commit = on_commit

    # ---- UI-facing operations ----

    def request_delete(self, task_id: str) -> PendingDelete:
        """Hide the task now and schedule its permanent deletion."""
        if task_id in self._registry:
            raise AlreadyPending(task_id)

        task = self._tasks.remove(task_id)
        try:
            entry = self._registry.begin(task_id, task, lambda: self._commit(task_id))
        except Exception:
            self._tasks.insert(task)
            raise
        self._notifications.enqueue(task_id, task)

        logger.info(
            "Task %s hidden, delete scheduled in %.1fs (%s)",
            task_id,
            self._registry.window_seconds,
            task.title,
        )
        return entry

    def undo(self, task: Task | str) -> Task:
        """Cancel a pending delete and put the task back at the end of the list."""
        task_id = task if isinstance(task, str) else task.id

        entry = self._registry.get(task_id)
        raced = entry is not None and entry.in_flight

        snapshot = self._registry.cancel(task_id)
        self._restore(snapshot)
        self._notifications.dequeue(task_id)

        if raced:
            logger.warning(
                "Undo for task %s arrived while its delete request was in flight; "
                "the server may still delete it",
                task_id,
            )
        else:
            logger.info("Task %s restored by undo", task_id)
        return snapshot

    def dismiss(self, task_id: str) -> None:
        """Hide the notice only. The scheduled delete still runs."""
        self._notifications.dequeue(task_id)

    def notifications(self) -> tuple[NotificationItem, ...]:
        return self._notifications.list()

    def latest_notification(self) -> NotificationItem | None:
        return self._notifications.latest()

    # ---- queries ----

    def state_of(self, task_id: str) -> DeleteState:
        if task_id in self._registry:
            return DeleteState.PENDING_REMOVAL
        if task_id in self._tasks:
            return DeleteState.VISIBLE
        return DeleteState.ABSENT

    def pending_ids(self) -> tuple[str, ...]:
        return self._registry.ids()

    @property
    def window_seconds(self) -> float:
        return self._registry.window_seconds

    # ---- collection maintenance ----

    def add(self, task: Task) -> None:
        """Append a newly created task to the visible list."""
        if task.id in self._registry:
            raise AlreadyPending(task.id)
        self._tasks.insert(task)
        logger.info("Task %s added (%s)", task.id, task.title)

    def update(self, task: Task) -> None:
        """Swap in a saved copy of a task; a task hidden by a pending delete stays hidden."""
        if task.id in self._registry:
            raise AlreadyPending(task.id)
        self._tasks.replace(task)
        logger.info("Task %s updated", task.id)

    def reload(self, tasks: Iterable[Task]) -> int:
        """Replace the visible list with fetched tasks, keeping pending deletes hidden."""
        pending = set(self._registry.ids())
        visible = [t for t in tasks if t.id not in pending]
        self._tasks.reset(visible)
        return len(visible)

    async def flush(self) -> None:
        """
        Commit every pending delete now (shutdown path).

        Deletes whose timer already fired are in flight and are not sent twice.
        """
        task_ids = []
        for task_id in self._registry.ids():
            entry = self._registry.get(task_id)
            if entry is not None and not entry.in_flight:
                task_ids.append(task_id)
        if not task_ids:
            return
        logger.info("Flushing %d pending delete(s)", len(task_ids))
        for task_id in task_ids:
            self._registry.stop_timer(task_id)
        await asyncio.gather(*(self._commit(task_id) for task_id in task_ids))

    # ---- commit ----

    async def _commit(self, task_id: str) -> None:
        entry = self._registry.mark_in_flight(task_id)
        if entry is None:
            logger.debug("Commit skipped for task %s: no longer pending", task_id)
            return

        try:
            result = await self._api.delete_task(task_id)
        except Exception as e:
            logger.exception("Delete request raised for task %s", task_id)
            result = DeleteResult.failure(message=str(e) or e.__class__.__name__)

        if result.ok:
            self._on_success(entry)
        else:
            self._on_failure(entry, result)

    def _on_success(self, entry: PendingDelete) -> None:
        task_id = entry.task_id
        if not self._registry.complete(task_id, entry):
            # Undone while in flight; any newer delete of the task keeps its own notice.
            logger.warning(
                "Task %s was deleted on the server after undo restored it locally",
                task_id,
            )
            return

        self._notifications.dequeue(task_id)
        logger.info("Task %s deleted", task_id)
        if self.on_commit is not None:
            try:
                self.on_commit(entry.snapshot)
            except Exception:
                logger.exception("on_commit listener failed task_id=%s", task_id)

    def _on_failure(self, entry: PendingDelete, result: DeleteResult) -> None:
        task_id = entry.task_id
        if not self._registry.complete(task_id, entry):
            # Undo already put the task back while the request was in flight.
            logger.info(
                "Delete of task %s failed after undo (%s); nothing to roll back",
                task_id,
                result.message or result.status,
            )
            return

        self._notifications.dequeue(task_id)
        self._restore(entry.snapshot)
        error = CommitFailed(task_id, status=result.status, message=result.message)
        logger.warning("%s; task restored", error)
        if self.on_error is not None:
            try:
                self.on_error(error)
            except Exception:
                logger.exception("on_error reporter failed task_id=%s", task_id)

    def _restore(self, snapshot: Task) -> None:
        try:
            self._tasks.insert(snapshot)
        except TaskConflict:
            logger.warning(
                "Task %s reappeared in the list while pending; keeping the visible copy",
                snapshot.id,
            )
