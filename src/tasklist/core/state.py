# src/tasklist/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from .ports import TaskRepo


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    # One store shared by the console and the HTTP API.
    task_list: TaskRepo

    # The store has no locking of its own; both front-ends take this lock per command/request.
    lock: threading.Lock = field(default_factory=threading.Lock)
