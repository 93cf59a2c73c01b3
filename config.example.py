# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKBOARD_APP_NAME": "App display name (default: taskboard).",
    "TASKBOARD_LOG_LEVEL": "Console logging level (default: INFO).",
    # Task API
    "TASKBOARD_API_BASE_URL": "Task backend base URL, e.g. http://localhost:3000 (empty => offline mode).",
    "TASKBOARD_API_TIMEOUT_SECONDS": "HTTP timeout for task API requests (default: 10).",
    # Delete / undo
    "TASKBOARD_UNDO_WINDOW_SECONDS": "How long a delete can be undone before it is sent (default: 10).",
    # Paths (gitignored)
    "TASKBOARD_DATA_DIR": "Local data directory for logs and the offline store (default: .local/taskboard).",
    "TASKBOARD_OFFLINE_STORE_PATH": "Offline task JSON path (default: <data_dir>/tasks.json).",
}
