# src/tasklist/core/ports.py

"""
Ports (interfaces) used by the front-ends.

The console dispatcher and the HTTP layer depend on this Protocol instead of
the concrete TaskList.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date
from typing import Protocol

from ..tasks.task_models import Task

ProjectView = Mapping[str, Sequence[Task]]


class TaskRepo(Protocol):
    """Project/task storage: mutations report success as bool, queries return read-only views."""

    def add_project(self, name: str) -> None: ...

    def add_task(self, project: str, description: str) -> bool: ...

    def set_done(self, task_id: int, done: bool) -> bool: ...

    def add_deadline(self, task_id: int, deadline: date) -> bool: ...

    def all_projects(self) -> ProjectView: ...

    def tasks_due_today(self) -> ProjectView: ...

    def tasks_without_deadline(self) -> ProjectView: ...

    def tasks_by_deadline(self) -> Mapping[date, ProjectView]: ...
