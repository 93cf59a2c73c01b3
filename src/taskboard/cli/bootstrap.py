# src/taskboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the task API (HTTP backend or offline JSON store),
- wires collection, registry, notification queue and controller into AppState.
"""

from __future__ import annotations

import logging

from ..api.client import HttpTaskApi
from ..api.offline import OfflineTaskApi
from ..config import get_settings
from ..core.ports import TaskApi
from ..core.state import AppState
from ..tasks.notification_queue import NotificationQueue
from ..tasks.pending_registry import PendingDeleteRegistry
from ..tasks.task_collection import TaskCollection
from ..tasks.task_scheduler import AsyncioScheduler
from ..tasks.undo_delete import UndoDeleteController

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.offline_store_path.parent.mkdir(parents=True, exist_ok=True)


def create_task_api(settings) -> TaskApi:
    base_url = (getattr(settings, "api_base_url", "") or "").strip()
    if base_url:
        logger.info("Using task API at %s", base_url)
        return HttpTaskApi(base_url, timeout_seconds=settings.api_timeout_seconds)
    logger.info("No task API configured; offline store %s", settings.offline_store_path)
    return OfflineTaskApi(settings.offline_store_path)


def create_initial_state(*, settings=None, api: TaskApi | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Settings and the API stay injectable so tests can avoid config reads and network.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if api is None:
        api = create_task_api(settings)

    scheduler = AsyncioScheduler()
    tasks = TaskCollection()
    registry = PendingDeleteRegistry(scheduler, window_seconds=settings.undo_window_seconds)
    controller = UndoDeleteController(tasks, registry, NotificationQueue(), api)

    return AppState(
        settings=settings,
        api=api,
        tasks=tasks,
        undo=controller,
        scheduler=scheduler,
    )


async def load_tasks(state: AppState) -> int:
    """Fetch tasks from the API into the visible list. Returns how many are visible."""
    fetched = await state.api.fetch_tasks()
    return state.undo.reload(fetched)


async def shutdown(state: AppState) -> None:
    """Commit pending deletes, wait for in-flight ones, close the API client."""
    try:
        await state.undo.flush()
        await state.scheduler.drain()
    finally:
        await state.api.aclose()
