# src/tasktree/cli/render.py

from __future__ import annotations

from ..core.models import Task, TaskStatus
from ..core.state import AppState

SHORT_ID_LEN = 8
INDENT = "    "


def short_id(task_id: str) -> str:
    return task_id[:SHORT_ID_LEN]


def _checkbox(task: Task) -> str:
    return "[x]" if task.status in (TaskStatus.DONE, TaskStatus.COMPLETE) else "[ ]"


def _task_lines(state: AppState, task: Task, depth: int) -> list[str]:
    engine = state.engine
    marker = "-" if task.expanded else "+"
    lines = [
        f"{INDENT * depth}{marker} {_checkbox(task)} {task.name} "
        f"({task.status.value}) #{short_id(task.id)}"
    ]
    if not task.expanded:
        return lines

    if not engine.has_children(task.id):
        lines.append(f"{INDENT * (depth + 1)}No Task")
        return lines

    # Children are filtered like roots but never paginated.
    for child in engine.children(task.id, state.status_filter):
        lines.extend(_task_lines(state, child, depth + 1))
    return lines


def render_counter(state: AppState) -> str:
    engine = state.engine
    return f"{engine.count_roots_in_progress()}/{engine.count_roots()}"


def render_board(state: AppState) -> str:
    """Current page of root tasks with expanded subtrees, plus counters."""
    engine = state.engine
    state.clamp_page()

    roots = engine.query(state.status_filter, root_only=True)
    page = engine.paginate(roots, state.page, state.page_size)

    lines = [f"Tasks left: {render_counter(state)}  Filter: {state.status_filter.value}"]
    if not page:
        lines.append("(no tasks)")
    for task in page:
        lines.extend(_task_lines(state, task, 0))
    lines.append(f"Page {state.page} of {engine.total_pages(state.page_size)}")
    return "\n".join(lines)
