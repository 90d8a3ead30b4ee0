# src/tasktree/core/engine.py

from __future__ import annotations

import logging
import math
import threading
import uuid
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import replace
from typing import Any

from .errors import (
    ChildrenIncomplete,
    CircularDependency,
    EmptyName,
    ParentNotFound,
    TaskNotFound,
)
from .models import StatusFilter, Task, TaskStatus
from .ports import Snapshot, SnapshotStore

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def paginate(tasks: Sequence[Task], page_number: int, page_size: int) -> list[Task]:
    """Return page `page_number` (1-based) of `tasks`; out-of-range pages are empty."""
    if page_number < 1 or page_size < 1:
        return []
    start = (page_number - 1) * page_size
    return list(tasks[start : start + page_size])


class TaskTree:
    """
    In-memory task tree.

    Owns an ordered list of Task records. The list order is the display order
    inside a sibling group. Every successful mutation hands a fresh snapshot
    to the injected store (if any).

    Returned tasks are copies; mutate only through the engine.

    Thread-safety:
    - one re-entrant lock around every public operation
    """

    def __init__(
        self,
        store: SnapshotStore | None = None,
        *,
        id_factory: Callable[[], str] = _new_id,
        require_children_done: bool = False,
    ) -> None:
        self._tasks: list[Task] = []
        self._store = store
        self._id_factory = id_factory
        self._require_children_done = require_children_done
        self._lock = threading.RLock()

    @classmethod
    def from_store(cls, store: SnapshotStore, **kwargs: Any) -> TaskTree:
        """Build an engine and restore it from whatever `store` currently holds."""
        tree = cls(store, **kwargs)
        snapshot = store.load()
        if snapshot:
            tree.restore(snapshot)
        logger.info("TaskTree ready tasks=%d", len(tree))
        return tree

    # ---- low-level helpers ----

    def _find(self, task_id: str | None) -> Task | None:
        if task_id is None:
            return None
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def _require(self, task_id: str) -> Task:
        task = self._find(task_id)
        if task is None:
            raise TaskNotFound(task_id)
        return task

    def _children(self, parent_id: str) -> list[Task]:
        return [t for t in self._tasks if t.parent_id == parent_id]

    def _has_circular_dependency(self, task_id: str, parent_id: str | None) -> bool:
        if parent_id is None:
            return False
        if task_id == parent_id:
            return True

        seen: set[str] = set()
        parent = self._find(parent_id)
        while parent is not None:
            if parent.id == task_id or parent.id in seen:
                return True
            seen.add(parent.id)
            parent = self._find(parent.parent_id)
        return False

    def _all_children_done(self, parent_id: str) -> bool:
        return all(t.status is TaskStatus.DONE for t in self._children(parent_id))

    def _persist(self) -> None:
        if self._store is None:
            return
        self._store.save(self.snapshot())

    # ---- mutations ----

    def create_task(self, name: str, parent_id: str | None = None) -> Task:
        if not name or not name.strip():
            raise EmptyName()

        with self._lock:
            task_id = self._id_factory()
            if self._has_circular_dependency(task_id, parent_id):
                raise CircularDependency(parent_id)

            if parent_id is not None and self._find(parent_id) is None:
                raise ParentNotFound(parent_id)

            if self._find(task_id) is not None:
                raise RuntimeError(f"id factory returned an existing id: {task_id}")

            task = Task(id=task_id, name=name, parent_id=parent_id)
            self._tasks.append(task)
            logger.debug("Task created id=%s parent=%s", task_id, parent_id)
            self._persist()
            return replace(task)

    def rename_task(self, task_id: str, new_name: str) -> None:
        # Unlike create_task, an empty name is accepted here.
        with self._lock:
            task = self._require(task_id)
            task.name = new_name
            logger.debug("Task renamed id=%s", task_id)
            self._persist()

    def toggle_expanded(self, task_id: str) -> None:
        with self._lock:
            task = self._require(task_id)
            task.expanded = not task.expanded
            self._persist()

    def delete_task(self, task_id: str) -> None:
        """Remove exactly one task. Its children stay, pointing at a missing parent."""
        with self._lock:
            task = self._require(task_id)
            self._tasks.remove(task)
            logger.debug("Task deleted id=%s", task_id)
            self._persist()

    def toggle_status(self, task_id: str) -> None:
        """
        Flip a task's completion state and promote its parent if that finished it.

        Roots always become COMPLETE (there is no way back through this call).
        Children toggle between DONE and IN_PROGRESS. Afterwards only the direct
        parent is re-checked: it becomes COMPLETE when all of its children are
        DONE. Grandparents are left alone.
        """
        with self._lock:
            task = self._require(task_id)

            if self._require_children_done and not self._all_children_done(task.id):
                raise ChildrenIncomplete(task_id)

            if task.is_root:
                task.status = TaskStatus.COMPLETE
            elif task.status is TaskStatus.DONE:
                task.status = TaskStatus.IN_PROGRESS
            else:
                task.status = TaskStatus.DONE

            parent_id = task.parent_id
            if parent_id is not None and self._all_children_done(parent_id):
                parent = self._find(parent_id)
                if parent is not None:
                    parent.status = TaskStatus.COMPLETE
                    logger.debug("Parent completed id=%s", parent_id)

            logger.debug("Task status id=%s status=%s", task_id, task.status.value)
            self._persist()

    # ---- queries ----

    def get(self, task_id: str) -> Task:
        with self._lock:
            return replace(self._require(task_id))

    def all_children_done(self, parent_id: str) -> bool:
        """True if every direct child of `parent_id` is DONE (vacuously true without children)."""
        with self._lock:
            return self._all_children_done(parent_id)

    def has_children(self, task_id: str) -> bool:
        with self._lock:
            return any(t.parent_id == task_id for t in self._tasks)

    def children(
        self, parent_id: str, status_filter: StatusFilter = StatusFilter.ALL
    ) -> list[Task]:
        with self._lock:
            return [
                replace(t) for t in self._children(parent_id) if status_filter.matches(t.status)
            ]

    def query(
        self, status_filter: StatusFilter = StatusFilter.ALL, root_only: bool = False
    ) -> list[Task]:
        with self._lock:
            return [
                replace(t)
                for t in self._tasks
                if status_filter.matches(t.status) and (not root_only or t.is_root)
            ]

    def count_in_progress(self) -> int:
        with self._lock:
            return sum(1 for t in self._tasks if t.status is TaskStatus.IN_PROGRESS)

    def count_roots(self) -> int:
        with self._lock:
            return sum(1 for t in self._tasks if t.is_root)

    def count_roots_in_progress(self) -> int:
        with self._lock:
            return sum(
                1 for t in self._tasks if t.is_root and t.status is TaskStatus.IN_PROGRESS
            )

    def total_pages(self, page_size: int) -> int:
        if page_size < 1:
            return 0
        with self._lock:
            return math.ceil(self.count_roots() / page_size)

    @staticmethod
    def paginate(tasks: Sequence[Task], page_number: int, page_size: int) -> list[Task]:
        return paginate(tasks, page_number, page_size)

    # ---- snapshot / restore ----

    def snapshot(self) -> Snapshot:
        with self._lock:
            return [t.to_dict() for t in self._tasks]

    def restore(self, snapshot: Iterable[Any]) -> None:
        """
        Replace the whole collection with the records in `snapshot`.

        Malformed records and repeated ids are skipped (logged). Nothing is
        persisted: the snapshot came from the store in the first place.
        """
        restored: list[Task] = []
        seen: set[str] = set()
        skipped = 0

        for raw in snapshot:
            if not isinstance(raw, dict):
                skipped += 1
                logger.warning("Skipping non-object snapshot record: %r", raw)
                continue
            try:
                task = Task.from_dict(raw)
            except ValueError as e:
                skipped += 1
                logger.warning("Skipping snapshot record: %s", e)
                continue
            if task.id in seen:
                skipped += 1
                logger.warning("Skipping duplicate task id=%s", task.id)
                continue
            seen.add(task.id)
            restored.append(task)

        with self._lock:
            self._tasks = restored
        logger.info("Restored %d tasks (skipped %d)", len(restored), skipped)

    # ---- container protocol ----

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        with self._lock:
            items = [replace(t) for t in self._tasks]
        return iter(items)

    def __contains__(self, task_id: object) -> bool:
        with self._lock:
            return any(t.id == task_id for t in self._tasks)
