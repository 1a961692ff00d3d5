# src/tasklist/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import date
from types import MappingProxyType

from ..core.ports import ProjectView
from .task_models import Task

logger = logging.getLogger(__name__)


def _freeze(groups: Mapping[str, list[Task]]) -> ProjectView:
    return MappingProxyType({name: tuple(tasks) for name, tasks in groups.items()})


class TaskList:
    """
    In-memory project/task store.

    Projects keep insertion order, and so do the tasks inside them.
    Task ids come from a counter owned by the store: the first task gets 1,
    ids are never reused.

    Every query returns read-only views (MappingProxyType over tuples of
    frozen Task values), so callers cannot reach internal lists.

    Thread-safety:
    - none; callers that share one instance across threads hold AppState.lock
    """

    def __init__(self, *, today: Callable[[], date] = date.today) -> None:
        self._projects: dict[str, list[Task]] = {}
        self._last_id = 0
        self._today = today

    # ---- low-level helpers ----

    def _next_id(self) -> int:
        self._last_id += 1
        return self._last_id

    def _locate(self, task_id: int) -> tuple[list[Task], int] | None:
        for tasks in self._projects.values():
            for idx, task in enumerate(tasks):
                if task.id == task_id:
                    return tasks, idx
        return None

    def _filter(self, keep: Callable[[Task], bool]) -> dict[str, list[Task]]:
        out: dict[str, list[Task]] = {}
        for name, tasks in self._projects.items():
            matching = [t for t in tasks if keep(t)]
            if matching:
                out[name] = matching
        return out

    # ---- mutations ----

    def add_project(self, name: str) -> None:
        """
        Register an empty project under the trimmed name.

        An existing project with the same name is replaced by an empty one.
        """
        key = name.strip()
        if key in self._projects:
            logger.info("Project %r re-created; %d task(s) dropped", key, len(self._projects[key]))
        self._projects[key] = []
        logger.debug("Project added name=%r", key)

    def add_task(self, project: str, description: str) -> bool:
        tasks = self._projects.get(project)
        if tasks is None:
            return False
        task = Task(id=self._next_id(), description=description)
        tasks.append(task)
        logger.debug("Task added id=%s project=%r", task.id, project)
        return True

    def set_done(self, task_id: int, done: bool) -> bool:
        found = self._locate(task_id)
        if found is None:
            return False
        tasks, idx = found
        tasks[idx] = replace(tasks[idx], done=done)
        logger.debug("Task id=%s done=%s", task_id, done)
        return True

    def add_deadline(self, task_id: int, deadline: date) -> bool:
        found = self._locate(task_id)
        if found is None:
            return False
        tasks, idx = found
        tasks[idx] = replace(tasks[idx], deadline=deadline)
        logger.debug("Task id=%s deadline=%s", task_id, deadline)
        return True

    # ---- queries ----

    def all_projects(self) -> ProjectView:
        return _freeze(self._projects)

    def tasks_due_today(self) -> ProjectView:
        """Tasks whose deadline is today's date (local clock), grouped by project."""
        today = self._today()
        return _freeze(self._filter(lambda t: t.deadline == today))

    def tasks_without_deadline(self) -> ProjectView:
        """Tasks with no deadline, keyed by project name in alphabetical order."""
        groups = self._filter(lambda t: t.deadline is None)
        return _freeze({name: groups[name] for name in sorted(groups)})

    def tasks_by_deadline(self) -> Mapping[date, ProjectView]:
        """
        Tasks with a deadline, grouped by date then by project.

        Dates iterate in ascending order. Inside one date, projects keep the
        order in which they were created (not alphabetical).
        """
        grouped: dict[date, dict[str, list[Task]]] = {}
        for name, tasks in self._projects.items():
            for task in tasks:
                if task.deadline is None:
                    continue
                grouped.setdefault(task.deadline, {}).setdefault(name, []).append(task)

        return MappingProxyType({day: _freeze(grouped[day]) for day in sorted(grouped)})
