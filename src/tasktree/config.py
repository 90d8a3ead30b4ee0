# src/tasktree/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every value has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKTREE"

STORAGE_BACKENDS = ("json", "sqlite", "memory")
DEFAULT_PAGE_SIZE = 20


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
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

    # ---- Storage ----
    storage_backend: str
    data_dir: Path
    tasks_path: Path
    tasks_db_path: Path
    storage_key: str

    # ---- Engine / listing ----
    page_size: int
    require_children_done: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasktree") or "tasktree"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        storage_backend = _env(_k("STORAGE"), "json").strip().lower()
        if storage_backend not in STORAGE_BACKENDS:
            storage_backend = "json"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tasktree"))
        tasks_path = _env_path(_k("TASKS_PATH"), data_dir / "tasks.json")
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")
        storage_key = _env(_k("STORAGE_KEY"), "tasks").strip() or "tasks"

        page_size = _env_int(_k("PAGE_SIZE"), DEFAULT_PAGE_SIZE)
        if page_size < 1:
            page_size = DEFAULT_PAGE_SIZE

        require_children_done = _env_bool(_k("REQUIRE_CHILDREN_DONE"), False)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            storage_backend=storage_backend,
            data_dir=data_dir,
            tasks_path=tasks_path,
            tasks_db_path=tasks_db_path,
            storage_key=storage_key,
            page_size=page_size,
            require_children_done=require_children_done,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
