# src/tasktree/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.errors import TaskTreeError
from ..core.models import StatusFilter
from ..core.state import AppState
from .render import render_board, render_counter, short_id

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

FILTER_ALIASES = {
    "all": StatusFilter.ALL,
    "progress": StatusFilter.IN_PROGRESS,
    "in-progress": StatusFilter.IN_PROGRESS,
    "ip": StatusFilter.IN_PROGRESS,
    "complete": StatusFilter.COMPLETE,
}

logger = logging.getLogger(__name__)


def format_error(err: TaskTreeError) -> str:
    """Blocking errors are shown as alerts, the rest as short notes."""
    if err.blocking:
        return f"[ALERT] {err}"
    return f"[!] {err}"


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Engine errors are turned into replies; anything else propagates.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except TaskTreeError as e:
            logger.debug("Command /%s failed: %s", name, e)
            return format_error(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Plain text (no slash) adds a root task.")
        return "\n".join(lines)


registry = CommandRegistry()


def resolve_ref(state: AppState, ref: str) -> str:
    """
    Turn a user-typed reference into a task id.

    Accepts a full id or a unique id prefix (optionally with a leading '#').
    Anything else is returned unchanged and left for the engine to reject.
    """
    ref = ref.lstrip("#")
    ids = [t.id for t in state.engine]
    if ref in ids:
        return ref
    matches = [i for i in ids if i.startswith(ref)]
    if len(matches) == 1:
        return matches[0]
    return ref


def add_root_task(state: AppState, name: str) -> str:
    task = state.engine.create_task(name)
    return f'New Task "{task.name}" created! #{short_id(task.id)}'


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    return add_root_task(state, " ".join(args))


def cmd_sub(state: AppState, args: list[str]) -> str:
    """
    /sub <parent> <name>  -> add a subtask under <parent>
    """
    if not args:
        return "Usage: /sub <parent> <name>"
    parent_id = resolve_ref(state, args[0])
    task = state.engine.create_task(" ".join(args[1:]), parent_id)
    return f'New Task "{task.name}" created under #{short_id(parent_id)}! #{short_id(task.id)}'


def cmd_rename(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /rename <task> <new name>"
    task_id = resolve_ref(state, args[0])
    state.engine.rename_task(task_id, " ".join(args[1:]))
    return f"Task #{short_id(task_id)} renamed."


def cmd_toggle(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /toggle <task>"
    task_id = resolve_ref(state, args[0])
    state.engine.toggle_status(task_id)
    task = state.engine.get(task_id)
    return f'Task "{task.name}" is now {task.status.value}.'


def cmd_expand(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /expand <task>"
    task_id = resolve_ref(state, args[0])
    state.engine.toggle_expanded(task_id)
    return render_board(state)


def cmd_delete(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /delete <task>"
    task_id = resolve_ref(state, args[0])
    task = state.engine.get(task_id)
    orphans = len(state.engine.children(task_id))
    state.engine.delete_task(task_id)
    if orphans and emit:
        emit(f"{orphans} subtask(s) of #{short_id(task_id)} are now detached.")
    return f'Task "{task.name}" deleted!'


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_board(state)


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter             -> show current filter
    /filter all|progress|complete
    """
    if not args:
        return f"Filter is {state.status_filter.value}. Use /filter all|progress|complete."

    chosen = FILTER_ALIASES.get(args[0].lower())
    if chosen is None:
        return "Usage: /filter all|progress|complete"
    state.status_filter = chosen
    state.page = 1
    return render_board(state)


def cmd_page(state: AppState, args: list[str]) -> str:
    """
    /page next | /page prev | /page <n>
    """
    if not args:
        return f"Page {state.page} of {state.engine.total_pages(state.page_size)}."

    arg = args[0].lower()
    total = state.engine.total_pages(state.page_size)
    if arg in ("next", "n"):
        if state.page < total:
            state.page += 1
    elif arg in ("prev", "p"):
        if state.page > 1:
            state.page -= 1
    else:
        try:
            state.page = int(arg)
        except ValueError:
            return "Usage: /page next | /page prev | /page <n>"
    return render_board(state)


def cmd_count(state: AppState, args: list[str]) -> str:
    return (
        f"In progress (all tasks): {state.engine.count_in_progress()}\n"
        f"Root tasks left: {render_counter(state)}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a root task: /add <name>.", aliases=["a"])
registry.register("sub", cmd_sub, help_text="Add a subtask: /sub <parent> <name>.")
registry.register("rename", cmd_rename, help_text="Rename: /rename <task> <new name>.")
registry.register(
    "toggle", cmd_toggle, help_text="Toggle completion: /toggle <task>.", aliases=["t"]
)
registry.register(
    "expand", cmd_expand, help_text="Show/hide subtasks: /expand <task>.", aliases=["e"]
)
registry.register("delete", cmd_delete, help_text="Delete one task: /delete <task>.", aliases=["rm"])
registry.register("list", cmd_list, help_text="Show the current page.", aliases=["ls"])
registry.register(
    "filter", cmd_filter, help_text="Status filter: /filter all | progress | complete."
)
registry.register("page", cmd_page, help_text="Paging: /page next | prev | <n>.")
registry.register("count", cmd_count, help_text="Show in-progress counters.")
