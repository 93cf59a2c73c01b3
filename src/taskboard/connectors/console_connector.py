# src/taskboard/connectors/console_connector.py

from __future__ import annotations

import asyncio
import inspect
import logging
from datetime import datetime

from ..cli.commands import format_notices
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_errors import CommitFailed
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def _on_commit(task: Task) -> None:
    _print_ts(f"[DELETE] {task.title} deleted permanently.")


def _on_error(error: CommitFailed) -> None:
    _print_ts(f"[DELETE] {error} The task is back in the list.")


async def run_console_loop(state: AppState) -> None:
    """
    Read slash commands from stdin until /exit or EOF.

    input() runs in a worker thread so timers and delete requests keep running
    on the event loop while the prompt waits.
    """
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Use /help for commands, /list to see tasks, /exit to quit.\n")

    state.undo.on_commit = _on_commit
    state.undo.on_error = _on_error

    while True:
        try:
            line = (await asyncio.to_thread(input, ">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not line:
            continue

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, line)
            if reply is not None and inspect.isawaitable(reply):
                reply = await reply
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "Not a command. Use /help to list available commands."

        _print_ts(str(reply))

        if state.undo.notifications() and not line.lower().startswith("/notices"):
            print(format_notices(state), flush=True)

    logger.info("Console connector finished.")
