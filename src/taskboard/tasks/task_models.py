# src/taskboard/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Any, Protocol


class TaskStatus(StrEnum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    EXPIRED = "expired"

    @classmethod
    def from_api(cls, raw: str | None) -> TaskStatus:
        if not raw:
            return cls.PENDING
        try:
            return cls(raw)
        except ValueError:
            return cls.PENDING


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_api(cls, raw: str | None) -> TaskPriority:
        if not raw:
            return cls.MEDIUM
        try:
            return cls(raw)
        except ValueError:
            return cls.MEDIUM


class DeleteState(str, Enum):
    """Where a task id currently sits in the delete lifecycle."""

    VISIBLE = "visible"
    PENDING_REMOVAL = "pending_removal"
    ABSENT = "absent"


@dataclass(slots=True, frozen=True)
class Task:
    """
    A task as rendered in the list.

    Frozen: the same object doubles as the restore snapshot while a delete is pending.
    """

    id: str
    title: str
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    category: str = ""
    user_id: str | None = None
    description: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    due_time: str | None = None
    estimated_time: float | None = None
    is_on_calendar: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Task:
        """Build a Task from the API's camelCase payload."""
        raw_id = data.get("id", data.get("_id"))
        if raw_id is None or str(raw_id).strip() == "":
            raise ValueError("task payload has no id")

        estimated = data.get("estimatedTime")
        try:
            estimated_time = float(estimated) if estimated is not None else None
        except (TypeError, ValueError):
            estimated_time = None

        return cls(
            id=str(raw_id),
            title=str(data.get("title") or ""),
            status=TaskStatus.from_api(data.get("status")),
            priority=TaskPriority.from_api(data.get("priority")),
            # "label" is the older name for category.
            category=str(data.get("category") or data.get("label") or ""),
            user_id=data.get("userId"),
            description=data.get("description"),
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
            due_time=data.get("dueTime"),
            estimated_time=estimated_time,
            is_on_calendar=bool(data.get("isOnCalendar", False)),
        )

    def to_api(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
            "priority": self.priority.value,
            "category": self.category,
            "isOnCalendar": self.is_on_calendar,
        }
        optional = {
            "userId": self.user_id,
            "description": self.description,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "dueTime": self.due_time,
            "estimatedTime": self.estimated_time,
        }
        out.update({k: v for k, v in optional.items() if v is not None})
        return out


class ScheduledCall(Protocol):
    """Handle for a one-shot deferred action. cancel() after firing is a no-op."""

    def cancel(self) -> None: ...
    def cancelled(self) -> bool: ...


@dataclass(slots=True)
class PendingDelete:
    task_id: str
    snapshot: Task
    handle: ScheduledCall
    created_at: float
    # Set once the commit has sent its external request.
    in_flight: bool = False


@dataclass(slots=True, frozen=True)
class NotificationItem:
    id: str
    task: Task


@dataclass(slots=True, frozen=True)
class DeleteResult:
    """Outcome of the external delete call."""

    ok: bool
    status: int | None = None
    message: str = ""

    @classmethod
    def success(cls, status: int | None = 200) -> DeleteResult:
        return cls(ok=True, status=status)

    @classmethod
    def failure(cls, message: str, status: int | None = None) -> DeleteResult:
        return cls(ok=False, status=status, message=message)
