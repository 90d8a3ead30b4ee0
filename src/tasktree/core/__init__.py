"""
Task tree core.

Components:
- models.py: data structures (Task, TaskStatus, StatusFilter)
- errors.py: error kinds reported to callers
- ports.py: SnapshotStore protocol used for persistence
- engine.py: TaskTree, the mutation/query engine
"""

from .engine import TaskTree, paginate
from .errors import (
    ChildrenIncomplete,
    CircularDependency,
    EmptyName,
    ParentNotFound,
    TaskNotFound,
    TaskTreeError,
)
from .models import StatusFilter, Task, TaskStatus

__all__ = [
    "ChildrenIncomplete",
    "CircularDependency",
    "EmptyName",
    "ParentNotFound",
    "StatusFilter",
    "Task",
    "TaskNotFound",
    "TaskStatus",
    "TaskTree",
    "TaskTreeError",
    "paginate",
]
