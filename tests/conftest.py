# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasktree.core.engine import TaskTree
from tasktree.core.state import AppState

from .fakes import RecordingStore, SequentialIds


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasktree-test",
        log_level="DEBUG",
        storage_backend="memory",
        data_dir=tmp_path,
        tasks_path=tmp_path / "tasks.json",
        tasks_db_path=tmp_path / "tasks.sqlite3",
        storage_key="tasks",
        page_size=20,
        require_children_done=False,
    )


@pytest.fixture()
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture()
def engine(store: RecordingStore) -> TaskTree:
    return TaskTree(store, id_factory=SequentialIds())


@pytest.fixture()
def state(settings: SimpleNamespace, engine: TaskTree) -> AppState:
    return AppState(settings=settings, engine=engine)
