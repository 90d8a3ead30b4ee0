"""Hierarchical task list: a task-tree engine with pluggable snapshot storage."""

from .core import (
    StatusFilter,
    Task,
    TaskStatus,
    TaskTree,
    TaskTreeError,
)

__all__ = ["StatusFilter", "Task", "TaskStatus", "TaskTree", "TaskTreeError"]

__version__ = "0.1.0"
