# src/tasktree/storage/memory.py

from __future__ import annotations

import copy

from ..core.ports import Snapshot


class MemoryStore:
    """Keeps the last snapshot in process memory. Nothing survives a restart."""

    def __init__(self, initial: Snapshot | None = None) -> None:
        self._snapshot = copy.deepcopy(initial) if initial is not None else None
        self.save_count = 0

    def load(self) -> Snapshot | None:
        return copy.deepcopy(self._snapshot)

    def save(self, snapshot: Snapshot) -> None:
        self._snapshot = copy.deepcopy(snapshot)
        self.save_count += 1
