# src/tasktree/core/models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """
    Task completion status.

    Values are the literal tags found in stored snapshots and must not change.
    COMPLETE is what a root task (or a promoted parent) becomes; children toggle
    between IN_PROGRESS and DONE.
    """

    IN_PROGRESS = "IN PROGRESS"
    DONE = "DONE"
    COMPLETE = "COMPLETE"

    @classmethod
    def from_wire(cls, raw: Any) -> TaskStatus:
        if not raw:
            return cls.IN_PROGRESS
        try:
            return cls(raw)
        except ValueError:
            return cls.IN_PROGRESS


class StatusFilter(StrEnum):
    ALL = "ALL"
    IN_PROGRESS = "IN PROGRESS"
    COMPLETE = "COMPLETE"

    def matches(self, status: TaskStatus) -> bool:
        if self is StatusFilter.ALL:
            return True
        return status.value == self.value


@dataclass(slots=True)
class Task:
    id: str
    name: str
    status: TaskStatus = TaskStatus.IN_PROGRESS
    parent_id: str | None = None
    expanded: bool = False

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def to_dict(self) -> dict[str, Any]:
        # Roots carry no "parentId" key at all.
        out: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
        }
        if self.parent_id is not None:
            out["parentId"] = self.parent_id
        out["expanded"] = self.expanded
        return out

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        """
        Build a Task from one snapshot record.

        Raises ValueError when the record has no usable id or name. Older
        snapshots stored the expand flag as "showNoTaskMessage".
        """
        task_id = raw.get("id")
        name = raw.get("name")
        if not isinstance(task_id, str) or not task_id:
            raise ValueError("record has no id")
        if not isinstance(name, str):
            raise ValueError(f"record {task_id} has no name")

        parent_id = raw.get("parentId")
        if not isinstance(parent_id, str) or not parent_id:
            parent_id = None

        expanded = raw.get("expanded")
        if expanded is None:
            expanded = raw.get("showNoTaskMessage", False)

        return cls(
            id=task_id,
            name=name,
            status=TaskStatus.from_wire(raw.get("status")),
            parent_id=parent_id,
            expanded=expanded if isinstance(expanded, bool) else False,
        )
