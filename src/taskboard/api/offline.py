# src/taskboard/api/offline.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import uuid
from pathlib import Path
from typing import Any

from ..tasks.task_errors import TaskConflict, TaskNotFound, TaskSaveFailed
from ..tasks.task_models import DeleteResult, Task, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

DEMO_TASKS = (
    Task(id="t1", title="Write report", status=TaskStatus.IN_PROGRESS, priority=TaskPriority.HIGH, category="work"),
    Task(id="t2", title="Review pull requests", category="work"),
    Task(id="t3", title="Book dentist appointment", priority=TaskPriority.LOW, category="personal"),
    Task(id="t4", title="Plan sprint", status=TaskStatus.COMPLETED, category="work"),
)


class OfflineTaskApi:
    """
    Local stand-in for the task backend, used when no API URL is configured.

    Tasks live in a JSON file (a list of API-shaped dicts). The file is seeded
    with a few demo tasks on first run and rewritten atomically on every change.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._tasks: dict[str, Task] = {t.id: t for t in self._load()}

    def _load(self) -> list[Task]:
        if not self._path.exists():
            logger.info("Offline task store %s not found; seeding demo tasks", self._path)
            return list(DEMO_TASKS)
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed to read offline task store %s", self._path)
            return []
        if not isinstance(data, list):
            logger.warning("Offline task store %s is not a list; ignoring it", self._path)
            return []

        out: list[Task] = []
        for item in data:
            if not isinstance(item, dict):
                continue
            try:
                out.append(Task.from_api(item))
            except ValueError:
                logger.warning("Skipping stored task without id: %r", item)
        return out

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        payload = [t.to_api() for t in self._tasks.values()]
        tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)

    async def fetch_tasks(self) -> list[Task]:
        return list(self._tasks.values())

    async def create_task(self, fields: dict[str, Any]) -> Task:
        task_id = str(fields.get("id") or f"t{uuid.uuid4().hex[:8]}")
        if task_id in self._tasks:
            raise TaskConflict(task_id)
        task = Task.from_api({**fields, "id": task_id})
        self._persist(task_id, task, None)
        logger.debug("Offline task created id=%s", task_id)
        return task

    async def update_task(self, task_id: str, changes: dict[str, Any]) -> Task:
        current = self._tasks.get(task_id)
        if current is None:
            raise TaskNotFound(task_id)
        task = Task.from_api({**current.to_api(), **changes, "id": task_id})
        self._persist(task_id, task, current)
        logger.debug("Offline task updated id=%s fields=%s", task_id, sorted(changes))
        return task

    def _persist(self, task_id: str, task: Task, previous: Task | None) -> None:
        self._tasks[task_id] = task
        try:
            self._save()
        except OSError as e:
            if previous is None:
                del self._tasks[task_id]
            else:
                self._tasks[task_id] = previous
            logger.exception("Failed to persist offline change of task %s", task_id)
            raise TaskSaveFailed(task_id, status=500, message=str(e)) from e

    async def delete_task(self, task_id: str) -> DeleteResult:
        if task_id not in self._tasks:
            return DeleteResult.failure(message=f"Task with ID {task_id} not found", status=404)
        removed = self._tasks.pop(task_id)
        try:
            self._save()
        except OSError as e:
            self._tasks[task_id] = removed
            logger.exception("Failed to persist offline delete of task %s", task_id)
            return DeleteResult.failure(message=str(e), status=500)
        return DeleteResult.success()

    async def aclose(self) -> None:
        return
