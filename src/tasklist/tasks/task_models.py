# src/tasklist/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime

DEADLINE_PATTERN = "dd-MM-yyyy"
_DEADLINE_STRPTIME = "%d-%m-%Y"
_DEADLINE_RE = re.compile(r"\d{2}-\d{2}-\d{4}")


@dataclass(frozen=True, slots=True)
class Task:
    """
    A single task inside a project.

    Tasks are immutable values: the store swaps in an updated copy when
    `done` or `deadline` change, so anything handed out by a query stays
    a snapshot.
    """

    id: int
    description: str
    done: bool = False
    deadline: date | None = None


def parse_deadline(text: str) -> date:
    """
    Parse a deadline written as dd-MM-yyyy.

    Strict: exactly two digits for day and month, four for the year, and the
    date must exist on the calendar (31-02-2024 is rejected).
    Raises ValueError otherwise.
    """
    raw = (text or "").strip()
    if not _DEADLINE_RE.fullmatch(raw):
        raise ValueError(f"deadline {raw!r} does not match {DEADLINE_PATTERN}")
    return datetime.strptime(raw, _DEADLINE_STRPTIME).date()


def format_deadline(value: date) -> str:
    return f"{value.day:02d}-{value.month:02d}-{value.year:04d}"
