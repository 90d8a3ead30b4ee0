# src/tasktree/storage/sqlite_kv.py

from __future__ import annotations

import contextlib
import json
import logging
import sqlite3
from pathlib import Path

from ..core.ports import Snapshot

logger = logging.getLogger(__name__)


class SqliteKeyValueStore:
    """
    SQLite-backed key-value slot.

    The whole snapshot is stored as JSON text under one key, the same way a
    browser keeps it in a single localStorage entry.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3", *, key: str = "tasks") -> None:
        self._db_path = Path(db_path)
        self._key = key
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SqliteKeyValueStore ready db=%s key=%s", self._db_path, self._key)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        with contextlib.suppress(sqlite3.DatabaseError):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def load(self) -> Snapshot | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (self._key,)).fetchone()
        finally:
            conn.close()

        if row is None:
            return None
        try:
            data = json.loads(row[0])
        except ValueError:
            logger.exception("Stored snapshot under key=%s is not valid JSON", self._key)
            return None
        if not isinstance(data, list):
            logger.warning("Ignoring snapshot under key=%s: not a JSON array", self._key)
            return None
        return data

    def save(self, snapshot: Snapshot) -> None:
        value = json.dumps(snapshot, ensure_ascii=False)
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO kv(key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (self._key, value),
            )
            conn.commit()
            logger.debug("Saved task snapshot: %d records key=%s", len(snapshot), self._key)
        finally:
            conn.close()
