# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.cli.commands import CommandDispatcher
from tasklist.core.state import AppState
from tasklist.tasks.task_store import TaskList

from .fakes import OutputBuffer

TODAY = date(2024, 3, 15)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the connectors.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        console_enabled=True,
        http_enabled=False,
        http_host="127.0.0.1",
        http_port=0,
    )


@pytest.fixture()
def task_list() -> TaskList:
    """Store with a fixed clock so "today" is deterministic."""
    return TaskList(today=lambda: TODAY)


@pytest.fixture()
def state(settings: SimpleNamespace, task_list: TaskList) -> AppState:
    return AppState(settings=settings, task_list=task_list)


@pytest.fixture()
def output() -> OutputBuffer:
    return OutputBuffer()


@pytest.fixture()
def dispatcher(task_list: TaskList, output: OutputBuffer) -> CommandDispatcher:
    return CommandDispatcher(task_list, output.emit)
