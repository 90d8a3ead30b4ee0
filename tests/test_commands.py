# tests/test_commands.py

from __future__ import annotations

from tasktree.cli.commands import CommandRegistry, registry, resolve_ref
from tasktree.connectors.console_connector import handle_line
from tasktree.core.models import StatusFilter, TaskStatus
from tasktree.core.state import AppState


def test_command_registry_routes_2_and_3_params(state: AppState) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", emit=lambda _: None) == "h3"
    assert called == {"h2": 1, "h3": 1}


def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert reg.handle(state, "/").startswith("Empty command")
    assert reg.handle(state, "/nope").startswith("Unknown command")


def test_plain_text_adds_root_task(state: AppState) -> None:
    reply = handle_line(state, "Buy milk")
    assert reply.startswith('New Task "Buy milk" created!')
    assert [t.name for t in state.engine.query(root_only=True)] == ["Buy milk"]


def test_sub_and_toggle_by_prefix(state: AppState) -> None:
    registry.handle(state, "/add Project")
    root = state.engine.query(root_only=True)[0]

    reply = registry.handle(state, f"/sub #{root.id} Step one")
    assert reply is not None and "Step one" in reply
    child = state.engine.children(root.id)[0]

    assert resolve_ref(state, child.id) == child.id
    reply = registry.handle(state, f"/toggle {child.id}")
    assert reply == 'Task "Step one" is now DONE.'
    assert state.engine.get(root.id).status is TaskStatus.COMPLETE


def test_resolve_ref_requires_unique_prefix(state: AppState) -> None:
    state.engine.create_task("one")
    state.engine.create_task("two")
    # Sequential ids "t1" and "t2" share the prefix "t".
    assert resolve_ref(state, "t") == "t"
    assert resolve_ref(state, "#t2") == "t2"


def test_errors_become_replies(state: AppState) -> None:
    assert registry.handle(state, "/add   ") == "[!] Task name cannot be empty!"
    assert registry.handle(state, "/toggle ghost") == "[!] Task ghost not found."
    assert registry.handle(state, "/sub ghost Child") == (
        "[ALERT] Selected parent task does not exist."
    )
    assert len(state.engine) == 0


def test_delete_reports_detached_children(state: AppState) -> None:
    parent = state.engine.create_task("P")
    state.engine.create_task("C", parent.id)
    notes: list[str] = []

    reply = registry.handle(state, f"/delete {parent.id}", emit=notes.append)

    assert reply == 'Task "P" deleted!'
    assert notes and "detached" in notes[0]
    assert len(state.engine) == 1


def test_list_renders_expanded_children(state: AppState) -> None:
    a = state.engine.create_task("A")
    state.engine.create_task("B", a.id)
    empty = state.engine.create_task("Empty")
    state.engine.toggle_expanded(a.id)
    state.engine.toggle_expanded(empty.id)

    board = registry.handle(state, "/list")
    assert board is not None
    lines = board.splitlines()
    assert lines[0].startswith("Tasks left: 2/2")
    assert lines[1].startswith("- [ ] A (IN PROGRESS)")
    assert lines[2].startswith("    + [ ] B (IN PROGRESS)")
    assert lines[3].startswith("- [ ] Empty")
    assert lines[4] == "    No Task"
    assert lines[-1] == "Page 1 of 1"


def test_filter_and_paging(state: AppState) -> None:
    state.settings.page_size = 2
    for name in ("a", "b", "c"):
        state.engine.create_task(name)

    board = registry.handle(state, "/page next")
    assert state.page == 2
    assert board is not None and board.endswith("Page 2 of 2")
    registry.handle(state, "/page next")
    assert state.page == 2

    registry.handle(state, "/toggle t1")
    registry.handle(state, "/filter complete")
    assert state.status_filter is StatusFilter.COMPLETE
    assert state.page == 1

    assert registry.handle(state, "/filter bogus") == "Usage: /filter all|progress|complete"


def test_count_command(state: AppState) -> None:
    a = state.engine.create_task("A")
    state.engine.create_task("B", a.id)
    state.engine.create_task("C")

    reply = registry.handle(state, "/count")
    assert reply == "In progress (all tasks): 3\nRoot tasks left: 2/2"


def test_filter_has_no_alias_for_done(state: AppState) -> None:
    assert registry.handle(state, "/filter done") == "Usage: /filter all|progress|complete"
    assert state.status_filter is StatusFilter.ALL
