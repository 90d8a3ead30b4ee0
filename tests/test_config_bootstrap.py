# tests/test_config_bootstrap.py

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from tasktree.cli.bootstrap import build_store, create_initial_state
from tasktree.config import Settings
from tasktree.logging_setup import _ConsoleNoiseFilter, setup_logging
from tasktree.storage import JsonFileStore, MemoryStore, SqliteKeyValueStore


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in (
        "TASKTREE_STORAGE",
        "TASKTREE_DATA_DIR",
        "TASKTREE_TASKS_PATH",
        "TASKTREE_TASKS_DB_PATH",
        "TASKTREE_STORAGE_KEY",
        "TASKTREE_PAGE_SIZE",
        "TASKTREE_REQUIRE_CHILDREN_DONE",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_settings_defaults(clean_env: pytest.MonkeyPatch) -> None:
    s = Settings.from_env()
    assert s.storage_backend == "json"
    assert s.data_dir == Path(".local/tasktree")
    assert s.tasks_path == Path(".local/tasktree/tasks.json")
    assert s.page_size == 20
    assert s.require_children_done is False


def test_settings_from_env(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("TASKTREE_STORAGE", "SQLite")
    clean_env.setenv("TASKTREE_DATA_DIR", str(tmp_path))
    clean_env.setenv("TASKTREE_PAGE_SIZE", "5")
    clean_env.setenv("TASKTREE_REQUIRE_CHILDREN_DONE", "yes")

    s = Settings.from_env()
    assert s.storage_backend == "sqlite"
    assert s.tasks_db_path == tmp_path / "tasks.sqlite3"
    assert s.page_size == 5
    assert s.require_children_done is True


@pytest.mark.parametrize("raw", ["0", "-3", "lots"])
def test_settings_bad_page_size_falls_back(clean_env: pytest.MonkeyPatch, raw: str) -> None:
    clean_env.setenv("TASKTREE_PAGE_SIZE", raw)
    assert Settings.from_env().page_size == 20


def test_unknown_backend_falls_back_to_json(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("TASKTREE_STORAGE", "redis")
    assert Settings.from_env().storage_backend == "json"


@pytest.mark.parametrize(
    ("backend", "expected"),
    [("json", JsonFileStore), ("sqlite", SqliteKeyValueStore), ("memory", MemoryStore)],
)
def test_build_store(settings: SimpleNamespace, backend: str, expected: type) -> None:
    settings.storage_backend = backend
    assert isinstance(build_store(settings), expected)


def test_create_initial_state_restores_from_json(settings: SimpleNamespace) -> None:
    settings.storage_backend = "json"
    first = create_initial_state(settings=settings)
    task = first.engine.create_task("persisted")

    second = create_initial_state(settings=settings)
    assert [t.id for t in second.engine] == [task.id]
    assert second.page == 1


def test_setup_logging_writes_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging(log_dir=tmp_path / "logs")
        logging.getLogger("tasktree.test").info("hello from test")
        for h in root.handlers:
            h.flush()
        text = (tmp_path / "logs" / "tasktree.log").read_text("utf-8")
        assert "hello from test" in text
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)


def test_console_filter_keeps_own_logs_and_third_party_errors() -> None:
    def record(name: str, level: int) -> logging.LogRecord:
        return logging.LogRecord(name, level, __file__, 1, "msg", None, None)

    f = _ConsoleNoiseFilter()
    assert f.filter(record("tasktree.core.engine", logging.DEBUG))
    assert not f.filter(record("py.warnings", logging.WARNING))
    assert not f.filter(record("urllib3", logging.WARNING))
    assert f.filter(record("urllib3", logging.ERROR))
