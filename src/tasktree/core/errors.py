# src/tasktree/core/errors.py

"""
Errors raised by the TaskTree engine.

All of them are recoverable and meant to be shown to the user. `blocking`
tells the presentation layer whether to show an alert or a transient note.
"""

from __future__ import annotations


class TaskTreeError(Exception):
    blocking = False


class EmptyName(TaskTreeError):
    def __init__(self) -> None:
        super().__init__("Task name cannot be empty!")


class TaskNotFound(TaskTreeError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task {task_id} not found.")
        self.task_id = task_id


class CircularDependency(TaskTreeError):
    blocking = True

    def __init__(self, parent_id: str | None) -> None:
        super().__init__("Cannot set this parent task as it creates a circular dependency.")
        self.parent_id = parent_id


class ParentNotFound(TaskTreeError):
    blocking = True

    def __init__(self, task_id: str) -> None:
        super().__init__("Selected parent task does not exist.")
        self.task_id = task_id


class ChildrenIncomplete(TaskTreeError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task {task_id} still has unfinished subtasks.")
        self.task_id = task_id
