# tests/test_commands.py

from __future__ import annotations

import inspect

import pytest

from taskboard.cli.bootstrap import create_initial_state, load_tasks, shutdown
from taskboard.cli.commands import CommandRegistry, parse_changes, registry
from taskboard.tasks.task_errors import TaskSaveFailed
from taskboard.tasks.task_models import TaskPriority, TaskStatus

from .conftest import make_tasks
from .fakes import FakeTaskApi


@pytest.fixture()
def state(settings):
    return create_initial_state(settings=settings, api=FakeTaskApi(tasks=make_tasks()))


def test_command_registry_routes_and_aliases(state) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    def handler(state, args):
        called.append(args)
        return "ok"

    reg.register("ping", handler, "ping", aliases=["p"])

    assert reg.handle(state, "/ping a b") == "ok"
    assert reg.handle(state, "/P") == "ok"
    assert called == [["a", "b"], []]
    assert "/ping - ping" in reg.build_help()


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


@pytest.mark.asyncio
async def test_delete_and_undo_through_commands(state) -> None:
    await load_tasks(state)

    reply = registry.handle(state, "/delete t1")
    assert "Write report deleted" in reply
    assert "t1" not in state.tasks
    assert "Write report deleted. [t1]" in registry.handle(state, "/notices")

    assert registry.handle(state, "/undo") == "Restored: Write report"
    assert "t1" in state.tasks
    assert registry.handle(state, "/undo") == "Nothing to undo."

    await shutdown(state)


@pytest.mark.asyncio
async def test_contract_errors_become_replies(state) -> None:
    await load_tasks(state)

    registry.handle(state, "/delete t3")
    assert "already has a pending delete" in registry.handle(state, "/delete t3")
    assert "has no pending delete" in registry.handle(state, "/undo t2")
    assert "not in the visible list" in registry.handle(state, "/delete zzz")

    await shutdown(state)


@pytest.mark.asyncio
async def test_reload_command_is_async(state) -> None:
    reply = registry.handle(state, "/reload")
    assert inspect.isawaitable(reply)
    assert await reply == "Reloaded 3 task(s)."
    assert "Write report" in registry.handle(state, "/list")

    await shutdown(state)


@pytest.mark.asyncio
async def test_shutdown_flushes_pending_deletes(state) -> None:
    await load_tasks(state)
    registry.handle(state, "/delete t2")
    assert "Pending deletes: 1" in registry.handle(state, "/status")

    await shutdown(state)

    assert state.api.calls == ["t2"]
    assert state.api.closed
    assert state.undo.pending_ids() == ()


@pytest.mark.asyncio
async def test_add_command_creates_and_appends_task(state) -> None:
    await load_tasks(state)

    reply = await registry.handle(state, "/add Water the plants")

    assert reply.startswith("Added: n1")
    assert state.api.saves == [
        ("create", {"title": "Water the plants", "status": "pending", "priority": "medium", "category": ""})
    ]
    assert [t.id for t in state.tasks.list()][-1] == "n1"
    assert state.tasks.get("n1").title == "Water the plants"

    assert await registry.handle(state, "/add") == "Usage: /add <title>"
    await shutdown(state)


@pytest.mark.asyncio
async def test_edit_command_updates_task_in_place(state) -> None:
    await load_tasks(state)

    reply = await registry.handle(state, '/edit t2 title="Review open pull requests" status=completed priority=HIGH')

    assert reply.startswith("Updated: t2")
    assert state.api.saves == [
        ("t2", {"title": "Review open pull requests", "status": "completed", "priority": "high"})
    ]
    assert [t.id for t in state.tasks.list()] == ["t1", "t2", "t3"]
    edited = state.tasks.get("t2")
    assert edited.title == "Review open pull requests"
    assert edited.status == TaskStatus.COMPLETED
    assert edited.priority == TaskPriority.HIGH

    await shutdown(state)


@pytest.mark.asyncio
async def test_edit_rejects_hidden_unknown_and_bad_fields(state) -> None:
    await load_tasks(state)
    registry.handle(state, "/delete t1")

    assert "not in the visible list" in await registry.handle(state, "/edit t1 title=x")
    assert "not in the visible list" in await registry.handle(state, "/edit zzz title=x")
    assert "Unknown status" in await registry.handle(state, "/edit t2 status=someday")
    assert "Expected key=value" in await registry.handle(state, "/edit t2 owner=me")
    assert (await registry.handle(state, "/edit t2")).startswith("Usage:")
    assert state.api.saves == []

    await shutdown(state)


@pytest.mark.asyncio
async def test_save_failure_becomes_reply_and_changes_nothing(state) -> None:
    await load_tasks(state)
    state.api.save_error = TaskSaveFailed("", status=503, message="maintenance")

    reply = await registry.handle(state, "/add Something new")

    assert reply == "Could not save new task: maintenance (status=503)"
    assert len(state.tasks) == 3

    await shutdown(state)


def test_parse_changes_accepts_quoted_values() -> None:
    assert parse_changes(['category="deep', 'work"', "description=notes"]) == {
        "category": "deep work",
        "description": "notes",
    }
    with pytest.raises(ValueError):
        parse_changes(["title="])
