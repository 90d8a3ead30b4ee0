# src/tasktree/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import add_root_task, format_error
from ..cli.commands import registry as command_registry
from ..cli.render import render_board
from ..core.errors import TaskTreeError
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(state: AppState, line: str, emit=None) -> str:
    """One REPL step: slash commands go to the registry, plain text adds a root task."""
    reply = command_registry.handle(state, line, emit=emit)
    if reply is not None:
        return reply
    try:
        return add_root_task(state, line)
    except TaskTreeError as e:
        return format_error(e)


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts("Type a task name to add it. Use /help for commands. Use /exit to quit.\n")
    print(render_board(state))

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = input("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        reply = handle_line(state, user_input, emit=emit)
        print(reply)

        if reply.startswith("[ALERT]"):
            try:
                input("Press Enter to continue...")
            except (EOFError, KeyboardInterrupt):
                break

    logger.info("Console connector finished.")
