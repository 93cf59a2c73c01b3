# src/taskboard/tasks/task_errors.py

from __future__ import annotations


class TaskError(Exception):
    """Base class for task subsystem errors. Always carries the task id."""

    def __init__(self, task_id: str, message: str | None = None) -> None:
        self.task_id = task_id
        super().__init__(message or f"{self.__class__.__name__}: {task_id}")


class TaskNotFound(TaskError):
    def __init__(self, task_id: str) -> None:
        super().__init__(task_id, f"Task {task_id} is not in the visible list.")


class TaskConflict(TaskError):
    def __init__(self, task_id: str) -> None:
        super().__init__(task_id, f"Task {task_id} is already in the visible list.")


class AlreadyPending(TaskError):
    def __init__(self, task_id: str) -> None:
        super().__init__(task_id, f"Task {task_id} already has a pending delete.")


class NotPending(TaskError):
    def __init__(self, task_id: str) -> None:
        super().__init__(task_id, f"Task {task_id} has no pending delete.")


class CommitFailed(TaskError):
    """The external delete did not succeed; the task has been rolled back."""

    def __init__(self, task_id: str, *, status: int | None = None, message: str = "") -> None:
        self.status = status
        self.reason = message
        detail = message or "delete request failed"
        if status is not None:
            detail = f"{detail} (status={status})"
        super().__init__(task_id, f"Could not delete task {task_id}: {detail}")


class TaskSaveFailed(TaskError):
    """Creating or updating a task on the backend did not succeed; nothing changed locally."""

    def __init__(self, task_id: str, *, status: int | None = None, message: str = "") -> None:
        self.status = status
        self.reason = message
        detail = message or "request failed"
        if status is not None:
            detail = f"{detail} (status={status})"
        label = f"task {task_id}" if task_id else "new task"
        super().__init__(task_id, f"Could not save {label}: {detail}")
