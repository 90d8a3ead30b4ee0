# src/tasktree/storage/json_file.py

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from ..core.ports import Snapshot

logger = logging.getLogger(__name__)


class JsonFileStore:
    """
    Snapshot kept as a JSON array in a single file.

    Writes go to a temp file first and are moved into place with os.replace,
    so a crash never leaves a half-written snapshot behind.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Snapshot | None:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed to read task snapshot from %s", self._path)
            return None
        if not isinstance(data, list):
            logger.warning("Ignoring task snapshot in %s: not a JSON array", self._path)
            return None
        logger.info("Loaded task snapshot: %d records from %s", len(data), self._path)
        return data

    def save(self, snapshot: Snapshot) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(".tmp")
            tmp.write_text(json.dumps(snapshot, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
            logger.debug("Saved task snapshot: %d records to %s", len(snapshot), self._path)
        except OSError:
            logger.exception("Failed to save task snapshot to %s", self._path)
