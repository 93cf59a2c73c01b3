"""taskboard: task list client with undoable, deferred deletes."""

__version__ = "0.1.0"
