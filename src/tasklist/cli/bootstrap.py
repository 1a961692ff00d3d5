# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it builds the single TaskList and the
AppState that both front-ends share.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskList

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    state = AppState(settings=settings, task_list=TaskList())
    logger.debug(
        "AppState created (console=%s http=%s)",
        getattr(settings, "console_enabled", True),
        getattr(settings, "http_enabled", False),
    )
    return state
