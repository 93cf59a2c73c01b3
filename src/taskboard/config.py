# src/taskboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets or network access required at import time.
- An empty API URL is valid and means "offline mode" (local JSON task store).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TASKBOARD"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except ImportError:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_float(name: str, default: float, *, minimum: float = 0.0) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return max(minimum, float(raw))
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Task API ----
    api_base_url: str
    api_timeout_seconds: float

    # ---- Delete / undo ----
    undo_window_seconds: float

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    offline_store_path: Path

    @property
    def offline(self) -> bool:
        return not self.api_base_url

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskboard").strip() or "taskboard"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        api_base_url = _env(_k("API_BASE_URL"), "").strip().rstrip("/")
        api_timeout_seconds = _env_float(_k("API_TIMEOUT_SECONDS"), 10.0, minimum=0.1)

        undo_window_seconds = _env_float(_k("UNDO_WINDOW_SECONDS"), 10.0)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskboard"))
        offline_store_path = _env_path(_k("OFFLINE_STORE_PATH"), data_dir / "tasks.json")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            api_base_url=api_base_url,
            api_timeout_seconds=api_timeout_seconds,
            undo_window_seconds=undo_window_seconds,
            data_dir=data_dir,
            offline_store_path=offline_store_path,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env; use config_local.py only for safe overrides.
try:
    import config_local as _config_local  # type: ignore
except ImportError:
    _config_local = None

if _config_local is not None:
    if hasattr(_config_local, "API_BASE_URL"):
        object.__setattr__(SETTINGS, "api_base_url", str(_config_local.API_BASE_URL).rstrip("/"))
    if hasattr(_config_local, "UNDO_WINDOW_SECONDS"):
        object.__setattr__(SETTINGS, "undo_window_seconds", float(_config_local.UNDO_WINDOW_SECONDS))


def get_settings() -> Settings:
    return SETTINGS
