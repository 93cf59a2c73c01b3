# src/taskboard/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_collection import TaskCollection
from ..tasks.task_scheduler import AsyncioScheduler
from ..tasks.undo_delete import UndoDeleteController
from .ports import TaskApi


@dataclass
class AppState:
    # Settings object (real Settings or a test stand-in with the same attributes).
    settings: Any

    api: TaskApi
    tasks: TaskCollection
    undo: UndoDeleteController
    scheduler: AsyncioScheduler
