# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from tasklist.cli.bootstrap import create_initial_state
from tasklist.config import Settings
from tasklist.tasks.task_store import TaskList


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in (
        "TASKLIST_APP_NAME",
        "TASKLIST_LOG_LEVEL",
        "TASKLIST_LOG_DIR",
        "TASKLIST_CONSOLE_ENABLED",
        "TASKLIST_HTTP_ENABLED",
        "TASKLIST_HTTP_HOST",
        "TASKLIST_HTTP_PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_settings_defaults(clean_env: pytest.MonkeyPatch) -> None:
    s = Settings.from_env()
    assert s.app_name == "tasklist"
    assert s.log_level == "WARNING"
    assert s.log_dir == Path(".local/tasklist")
    assert s.console_enabled is True
    assert s.http_enabled is False
    assert s.http_host == "127.0.0.1"
    assert s.http_port == 8080


def test_settings_from_env(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("TASKLIST_CONSOLE_ENABLED", "no")
    clean_env.setenv("TASKLIST_HTTP_ENABLED", "1")
    clean_env.setenv("TASKLIST_HTTP_PORT", "9001")
    clean_env.setenv("TASKLIST_LOG_DIR", str(tmp_path))

    s = Settings.from_env()
    assert s.console_enabled is False
    assert s.http_enabled is True
    assert s.http_port == 9001
    assert s.log_dir == tmp_path


def test_settings_bad_int_falls_back(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("TASKLIST_HTTP_PORT", "eighty")
    assert Settings.from_env().http_port == 8080


def test_create_initial_state_wires_empty_store(settings) -> None:
    state = create_initial_state(settings=settings)
    assert state.settings is settings
    assert isinstance(state.task_list, TaskList)
    assert dict(state.task_list.all_projects()) == {}
