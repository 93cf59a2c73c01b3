# src/taskboard/cli/commands.py

from __future__ import annotations

import inspect
import logging
import shlex
from collections.abc import Awaitable, Callable

from ..core.state import AppState
from ..tasks.task_errors import TaskError, TaskNotFound
from ..tasks.task_models import Task, TaskPriority, TaskStatus

CommandReply = str | Awaitable[str]
CommandHandler = Callable[[AppState, list[str]], CommandReply]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /delete, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> CommandReply | None:
        """
        Handle a string like "/command args".

        Returns a reply (a string, or an awaitable for commands that hit the API),
        or None if the line is not a command. Task contract errors become replies,
        including ones raised while an awaitable reply runs.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            reply = handler(state, args)
        except TaskError as e:
            logger.info("/%s rejected: %s", name, e)
            return str(e)
        if inspect.isawaitable(reply):
            return _await_reply(name, reply)
        return reply

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


async def _await_reply(name: str, reply: Awaitable[str]) -> str:
    try:
        return await reply
    except TaskError as e:
        logger.info("/%s rejected: %s", name, e)
        return str(e)


registry = CommandRegistry()


def format_task(task: Task) -> str:
    return f"{task.id:<10} {task.status.value:<12} {task.priority.value:<7} {task.title}"


def format_notices(state: AppState) -> str:
    notices = state.undo.notifications()
    if not notices:
        return "No pending deletes."
    lines = [f"Pending deletes ({len(notices)}), /undo <id> to restore:"]
    for item in notices:
        lines.append(f"  {item.task.title} deleted. [{item.id}]")
    return "\n".join(lines)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    base_url = getattr(settings, "api_base_url", "") or ""
    source = base_url if base_url else f"offline ({getattr(settings, 'offline_store_path', '?')})"
    return (
        "Status:\n"
        f"  Task API: {source}\n"
        f"  Undo window: {state.undo.window_seconds:.0f}s\n"
        f"  Visible tasks: {len(state.tasks)}\n"
        f"  Pending deletes: {len(state.undo.pending_ids())}"
    )


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = state.tasks.list()
    if not tasks:
        return "No tasks."
    header = f"{'ID':<10} {'STATUS':<12} {'PRIO':<7} TITLE"
    return "\n".join([header, *(format_task(t) for t in tasks)])


def cmd_delete(state: AppState, args: list[str]) -> str:
    """
    /delete <id>  -> hide the task and schedule its deletion
    """
    if not args:
        return "Usage: /delete <task id>"
    entry = state.undo.request_delete(args[0])
    return (
        f"{entry.snapshot.title} deleted. "
        f"Use /undo {entry.task_id} within {state.undo.window_seconds:.0f}s to restore it."
    )


def cmd_undo(state: AppState, args: list[str]) -> str:
    """
    /undo       -> restore the most recently deleted task
    /undo <id>  -> restore a specific task
    """
    if args:
        task_id = args[0]
    else:
        latest = state.undo.latest_notification()
        if latest is None:
            return "Nothing to undo."
        task_id = latest.id
    task = state.undo.undo(task_id)
    return f"Restored: {task.title}"


def cmd_dismiss(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /dismiss <task id>"
    state.undo.dismiss(args[0])
    return f"Notice for {args[0]} dismissed (the delete still goes through)."


def cmd_notices(state: AppState, args: list[str]) -> str:
    return format_notices(state)


async def cmd_reload(state: AppState, args: list[str]) -> str:
    fetched = await state.api.fetch_tasks()
    visible = state.undo.reload(fetched)
    return f"Reloaded {visible} task(s)."


EDITABLE_FIELDS = ("title", "status", "priority", "category", "description")


def parse_changes(args: list[str]) -> dict[str, str]:
    """
    Parse key=value pairs; values may be quoted: title="Write final report".
    Raises ValueError with a user-facing message.
    """
    try:
        tokens = shlex.split(" ".join(args))
    except ValueError as e:
        raise ValueError(f"Cannot parse arguments: {e}") from e

    changes: dict[str, str] = {}
    for token in tokens:
        key, sep, value = token.partition("=")
        key = key.strip().lower()
        if not sep or key not in EDITABLE_FIELDS:
            raise ValueError(f"Expected key=value with key in: {', '.join(EDITABLE_FIELDS)}")
        if key in ("status", "priority"):
            allowed = [m.value for m in (TaskStatus if key == "status" else TaskPriority)]
            value = value.strip().lower()
            if value not in allowed:
                raise ValueError(f"Unknown {key} {value!r}. Use one of: {', '.join(allowed)}")
        elif key == "title" and not value.strip():
            raise ValueError("Title cannot be empty.")
        changes[key] = value
    return changes


async def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <title...>  -> create a task (pending, medium priority) and show it
    """
    title = " ".join(args).strip()
    if not title:
        return "Usage: /add <title>"
    task = await state.api.create_task(
        {
            "title": title,
            "status": TaskStatus.PENDING.value,
            "priority": TaskPriority.MEDIUM.value,
            "category": "",
        }
    )
    state.undo.add(task)
    return f"Added: {format_task(task)}"


async def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id> key=value ...  -> update fields of a visible task
    """
    if len(args) < 2:
        return f"Usage: /edit <task id> key=value ... (keys: {', '.join(EDITABLE_FIELDS)})"
    task_id = args[0]
    if task_id not in state.tasks:
        raise TaskNotFound(task_id)
    try:
        changes = parse_changes(args[1:])
    except ValueError as e:
        return str(e)

    task = await state.api.update_task(task_id, changes)
    state.undo.update(task)
    return f"Updated: {format_task(task)}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show API source, undo window and counts.")
registry.register("list", cmd_list, help_text="List visible tasks.", aliases=["ls"])
registry.register("delete", cmd_delete, help_text="Delete a task (undoable): /delete <id>.", aliases=["rm"])
registry.register("undo", cmd_undo, help_text="Undo a delete: /undo [id].")
registry.register("dismiss", cmd_dismiss, help_text="Hide a delete notice: /dismiss <id>.")
registry.register("notices", cmd_notices, help_text="Show pending delete notices.")
registry.register("reload", cmd_reload, help_text="Fetch tasks from the API again.")
registry.register("add", cmd_add, help_text="Create a task: /add <title>.", aliases=["new"])
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <id> title=... status=... priority=...")
