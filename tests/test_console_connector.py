# tests/test_console_connector.py

from __future__ import annotations

import io

import pytest

from tasklist.cli.commands import InvalidTaskIdError
from tasklist.connectors.console_connector import PROMPT, WELCOME, run_console_loop
from tasklist.core.state import AppState


def _run(state: AppState, script: str) -> str:
    out = io.StringIO()
    run_console_loop(state, stdin=io.StringIO(script), stdout=out)
    return out.getvalue()


def test_console_runs_commands_until_quit(state: AppState) -> None:
    text = _run(
        state,
        "add project secrets\n"
        "add task secrets Eat more donuts.\n"
        "check 1\n"
        "show\n"
        "quit\n"
        "add project never\n",
    )

    assert text.startswith(WELCOME + "\n" + PROMPT)
    assert "secrets\n    [x] 1: Eat more donuts.\n" in text
    assert list(state.task_list.all_projects()) == ["secrets"]


def test_console_stops_on_eof(state: AppState) -> None:
    text = _run(state, "add project p\n")
    assert text.count(PROMPT) == 2
    assert list(state.task_list.all_projects()) == ["p"]


def test_console_skips_blank_lines(state: AppState) -> None:
    text = _run(state, "\n   \nquit\n")
    assert "I don't know" not in text


def test_console_soft_errors_keep_running(state: AppState) -> None:
    text = _run(state, "foobar\ncheck 5\nadd project p\nquit\n")

    assert 'I don\'t know what the command "foobar" is.' in text
    assert "No task with the given ID was found." in text
    assert list(state.task_list.all_projects()) == ["p"]


def test_console_propagates_hard_errors(state: AppState) -> None:
    out = io.StringIO()
    with pytest.raises(InvalidTaskIdError):
        run_console_loop(state, stdin=io.StringIO("check abc\nadd project p\n"), stdout=out)

    assert "Invalid task ID." in out.getvalue()
    # nothing after the failing line was executed
    assert dict(state.task_list.all_projects()) == {}
    # the lock is released on the way out
    assert not state.lock.locked()


def test_console_accepts_windows_line_endings(state: AppState) -> None:
    _run(state, "add project p\r\nquit\r\n")
    assert list(state.task_list.all_projects()) == ["p"]
