# src/taskboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads tasks, then runs the console REPL
on the asyncio loop. On exit, pending deletes are committed before the API
client is closed.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state, load_tasks, shutdown
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    state = create_initial_state(settings=settings)
    try:
        try:
            count = await load_tasks(state)
            logger.info("Loaded %d tasks.", count)
        except Exception:
            logger.exception("Failed to load tasks; starting with an empty list.")

        await run_console_loop(state)
    finally:
        pending = len(state.undo.pending_ids())
        if pending:
            logger.info("Committing %d pending delete(s) before exit...", pending)
        await shutdown(state)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    logger.info("Bye.")


if __name__ == "__main__":
    main()
