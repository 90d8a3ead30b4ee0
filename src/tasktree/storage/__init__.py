"""
Snapshot stores (implementations of core.ports.SnapshotStore).

- json_file.py: JSON array in a file
- sqlite_kv.py: JSON text in a SQLite key-value table
- memory.py: in-process, for tests and throwaway sessions
"""

from .json_file import JsonFileStore
from .memory import MemoryStore
from .sqlite_kv import SqliteKeyValueStore

__all__ = ["JsonFileStore", "MemoryStore", "SqliteKeyValueStore"]
