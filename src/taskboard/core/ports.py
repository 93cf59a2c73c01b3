# src/taskboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task subsystem.

The controller depends on Protocols instead of concrete implementations.
This keeps the task API transport and the timer source swappable, and lets tests
drive time deterministically.
"""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import DeleteResult, ScheduledCall, Task

DeferredAction = Callable[[], Awaitable[None]]


class Scheduler(Protocol):
    """
    Runs a one-shot async action after a delay.

    The returned handle cancels the action if it has not fired yet;
    cancelling after it fired is a no-op and cannot stop an action already running.
    """

    def call_later(self, delay: float, action: DeferredAction) -> ScheduledCall: ...


class TaskApi(Protocol):
    """
    External task endpoint.

    delete_task() reports failures as a DeleteResult instead of raising;
    the controller still treats an exception as a failed delete.
    create_task() and update_task() take API-shaped (camelCase) fields, return the
    stored task and raise TaskError subclasses on failure.
    """

    async def fetch_tasks(self) -> list[Task]: ...
    async def create_task(self, fields: dict[str, Any]) -> Task: ...
    async def update_task(self, task_id: str, changes: dict[str, Any]) -> Task: ...
    async def delete_task(self, task_id: str) -> DeleteResult: ...
    async def aclose(self) -> None: ...
