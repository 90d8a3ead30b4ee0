# src/tasktree/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the engine.

The engine depends on a Protocol instead of a concrete store, so the storage
medium (JSON file, SQLite, memory) stays swappable and tests stay simple.
"""

from typing import Any, Protocol

Snapshot = list[dict[str, Any]]
# Serialized task collection: [{"id", "name", "status", "parentId"?, "expanded"}, ...]


class SnapshotStore(Protocol):
    """Durable slot holding the latest snapshot of the task collection."""

    def load(self) -> Snapshot | None: ...
    def save(self, snapshot: Snapshot) -> None: ...
