# src/tasktree/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the snapshot store named by settings,
- restores the engine from it and wires everything into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.engine import TaskTree
from ..core.ports import SnapshotStore
from ..core.state import AppState
from ..storage import JsonFileStore, MemoryStore, SqliteKeyValueStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def build_store(settings) -> SnapshotStore:
    backend = str(getattr(settings, "storage_backend", "json")).lower()
    if backend == "memory":
        return MemoryStore()
    if backend == "sqlite":
        return SqliteKeyValueStore(
            settings.tasks_db_path, key=getattr(settings, "storage_key", "tasks")
        )
    return JsonFileStore(settings.tasks_path)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = build_store(settings)
    logger.info("Using %s snapshot store", type(store).__name__)

    engine = TaskTree.from_store(
        store,
        require_children_done=bool(getattr(settings, "require_children_done", False)),
    )
    return AppState(settings=settings, engine=engine)
