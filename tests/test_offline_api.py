# tests/test_offline_api.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from taskboard.api.offline import DEMO_TASKS, OfflineTaskApi
from taskboard.tasks.task_errors import TaskConflict, TaskNotFound
from taskboard.tasks.task_models import TaskStatus


@pytest.mark.asyncio
async def test_seeds_demo_tasks_and_persists_deletes(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    api = OfflineTaskApi(path)

    tasks = await api.fetch_tasks()
    assert [t.id for t in tasks] == [t.id for t in DEMO_TASKS]

    result = await api.delete_task("t1")
    assert result.ok

    stored = json.loads(path.read_text("utf-8"))
    assert "t1" not in [item["id"] for item in stored]

    reopened = OfflineTaskApi(path)
    assert "t1" not in [t.id for t in await reopened.fetch_tasks()]


@pytest.mark.asyncio
async def test_delete_unknown_task_is_a_404_failure(tmp_path: Path) -> None:
    api = OfflineTaskApi(tmp_path / "tasks.json")

    result = await api.delete_task("missing")

    assert not result.ok
    assert result.status == 404


@pytest.mark.asyncio
async def test_reads_existing_store_and_skips_bad_rows(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps([{"id": "a", "title": "A"}, {"title": "no id"}, 3]), "utf-8")

    tasks = await OfflineTaskApi(path).fetch_tasks()

    assert [t.id for t in tasks] == ["a"]


@pytest.mark.asyncio
async def test_create_and_update_are_persisted(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    api = OfflineTaskApi(path)

    created = await api.create_task({"title": "Water plants", "status": "pending", "priority": "low"})
    assert created.id.startswith("t")
    assert created.id not in [t.id for t in DEMO_TASKS]

    updated = await api.update_task("t2", {"title": "Review open pull requests", "status": "completed"})
    assert updated.title == "Review open pull requests"
    assert updated.status == TaskStatus.COMPLETED
    assert updated.category == "work"

    reopened = {t.id: t for t in await OfflineTaskApi(path).fetch_tasks()}
    assert reopened[created.id].title == "Water plants"
    assert reopened["t2"].title == "Review open pull requests"
    assert list(reopened)[-1] == created.id


@pytest.mark.asyncio
async def test_update_unknown_and_create_duplicate_are_rejected(tmp_path: Path) -> None:
    api = OfflineTaskApi(tmp_path / "tasks.json")

    with pytest.raises(TaskNotFound):
        await api.update_task("missing", {"title": "x"})
    with pytest.raises(TaskConflict):
        await api.create_task({"id": "t1", "title": "Write report again"})
