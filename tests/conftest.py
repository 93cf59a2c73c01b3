# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskboard.tasks.notification_queue import NotificationQueue
from taskboard.tasks.pending_registry import PendingDeleteRegistry
from taskboard.tasks.task_collection import TaskCollection
from taskboard.tasks.task_errors import CommitFailed
from taskboard.tasks.task_models import Task, TaskPriority, TaskStatus
from taskboard.tasks.undo_delete import UndoDeleteController

from .fakes import FakeScheduler, FakeTaskApi

WINDOW = 10.0


def make_tasks() -> list[Task]:
    return [
        Task(
            id="t1",
            title="Write report",
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            category="work",
            user_id="u1",
            description="Quarterly numbers",
            due_time="2024-05-01T17:00:00.000Z",
            estimated_time=2.5,
        ),
        Task(id="t2", title="Review pull requests", category="work", user_id="u1"),
        Task(id="t3", title="Book dentist appointment", priority=TaskPriority.LOW, category="personal"),
    ]


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and commands.

    A SimpleNamespace keeps tests away from the real env-driven config.
    """
    return SimpleNamespace(
        app_name="taskboard-test",
        log_level="DEBUG",
        api_base_url="",
        api_timeout_seconds=1.0,
        undo_window_seconds=WINDOW,
        data_dir=tmp_path / "data",
        offline_store_path=tmp_path / "data" / "tasks.json",
    )


@pytest.fixture()
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture()
def api() -> FakeTaskApi:
    return FakeTaskApi(tasks=make_tasks())


@pytest.fixture()
def tasks() -> TaskCollection:
    return TaskCollection(make_tasks())


@pytest.fixture()
def registry(scheduler: FakeScheduler) -> PendingDeleteRegistry:
    return PendingDeleteRegistry(scheduler, window_seconds=WINDOW, clock=scheduler.clock)


@pytest.fixture()
def notifications() -> NotificationQueue:
    return NotificationQueue()


@pytest.fixture()
def errors() -> list[CommitFailed]:
    return []


@pytest.fixture()
def committed() -> list[Task]:
    return []


@pytest.fixture()
def controller(
    tasks: TaskCollection,
    registry: PendingDeleteRegistry,
    notifications: NotificationQueue,
    api: FakeTaskApi,
    errors: list[CommitFailed],
    committed: list[Task],
) -> UndoDeleteController:
    return UndoDeleteController(
        tasks,
        registry,
        notifications,
        api,
        on_error=errors.append,
        on_commit=committed.append,
    )
