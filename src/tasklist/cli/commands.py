# src/tasklist/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date

from ..core.ports import ProjectView, TaskRepo
from ..tasks.task_models import DEADLINE_PATTERN, Task, format_deadline, parse_deadline

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[str], None]

logger = logging.getLogger(__name__)

_TASK_ID_RE = re.compile(r"-?\d+")

USAGE_ADD_PROJECT = "add project <project name>"
USAGE_ADD_TASK = "add task <project name> <task description>"
USAGE_CHECK = "check <task ID>"
USAGE_UNCHECK = "uncheck <task ID>"
USAGE_DEADLINE = f"deadline <task ID> <{DEADLINE_PATTERN}>"

MSG_UNKNOWN_PROJECT = "No project with the given name was found."
MSG_UNKNOWN_TASK = "No task with the given ID was found."
MSG_INVALID_TASK_ID = "Invalid task ID."
MSG_INVALID_DEADLINE = f"Invalid deadline format. Expected format: {DEADLINE_PATTERN}."


class CommandError(RuntimeError):
    """Input that cannot be interpreted at all. The message was already printed."""


class InvalidTaskIdError(CommandError):
    pass


class InvalidDeadlineError(CommandError):
    pass


def usage_message(usage: str) -> str:
    return f"Invalid command format. Expected format: {usage}"


def unknown_command_message(keyword: str) -> str:
    return f'I don\'t know what the command "{keyword}" is.'


@dataclass(frozen=True, slots=True)
class _Command:
    handler: CommandHandler
    usages: tuple[str, ...]


class CommandDispatcher:
    """
    Parses one console line into a store operation and writes the result.

    Two failure modes:
    - soft: unknown project/task id, missing arguments -> a message, state unchanged
    - hard: non-numeric task id, malformed date -> a message, then CommandError is raised
    """

    def __init__(self, task_list: TaskRepo, emit: CommandEmitter) -> None:
        self._tasks = task_list
        self._emit = emit
        self._commands: dict[str, _Command] = {}

        self.register("show", self._show, ["show"])
        self.register("today", self._today, ["today"])
        self.register("view-by-deadline", self._view_by_deadline, ["view-by-deadline"])
        self.register("add", self._add, [USAGE_ADD_PROJECT, USAGE_ADD_TASK])
        self.register("check", self._check, [USAGE_CHECK])
        self.register("uncheck", self._uncheck, [USAGE_UNCHECK])
        self.register("deadline", self._deadline, [USAGE_DEADLINE])
        self.register("help", self._help, ["help"])

    def register(self, name: str, handler: CommandHandler, usages: Sequence[str]) -> None:
        self._commands[name] = _Command(handler=handler, usages=tuple(usages))

    def execute(self, line: str) -> None:
        """Run a single command line such as "add task work Write report"."""
        keyword, _, rest = line.partition(" ")
        command = self._commands.get(keyword)
        if command is None:
            logger.debug("Unknown command %r", keyword)
            self._emit(unknown_command_message(keyword))
            return
        command.handler(rest)

    # ---- parsing helpers ----

    def _parse_task_id(self, token: str) -> int:
        try:
            if not _TASK_ID_RE.fullmatch(token.strip()):
                raise ValueError(f"not a task id: {token!r}")
            return int(token)
        except ValueError as exc:
            self._emit(MSG_INVALID_TASK_ID)
            logger.warning("Rejected task id %r", token)
            raise InvalidTaskIdError(MSG_INVALID_TASK_ID) from exc

    def _parse_deadline(self, text: str) -> date:
        try:
            return parse_deadline(text)
        except ValueError as exc:
            self._emit(MSG_INVALID_DEADLINE)
            logger.warning("Rejected deadline %r", text)
            raise InvalidDeadlineError(MSG_INVALID_DEADLINE) from exc

    # ---- rendering helpers ----

    def _print_checklist(self, projects: ProjectView) -> None:
        for name, tasks in projects.items():
            self._emit(name)
            for task in tasks:
                mark = "x" if task.done else " "
                self._emit(f"    [{mark}] {task.id}: {task.description}")
            self._emit("")

    def _print_groups(self, projects: Mapping[str, Sequence[Task]]) -> None:
        for name in sorted(projects):
            self._emit(f"     {name}:")
            for task in projects[name]:
                self._emit(f"       \t{task.id}: {task.description}")

    # ---- commands ----

    def _show(self, rest: str) -> None:
        self._print_checklist(self._tasks.all_projects())

    def _today(self, rest: str) -> None:
        self._print_checklist(self._tasks.tasks_due_today())

    def _view_by_deadline(self, rest: str) -> None:
        for day, projects in self._tasks.tasks_by_deadline().items():
            self._emit(f"{format_deadline(day)}:")
            self._print_groups(projects)

        no_deadline = self._tasks.tasks_without_deadline()
        if no_deadline:
            self._emit("No deadline:")
            self._print_groups(no_deadline)

    def _add(self, rest: str) -> None:
        """
        add project <name>
        add task <project> <description...>
        """
        subcommand, _, args = rest.partition(" ")

        if subcommand == "project":
            if not args.strip():
                self._emit(usage_message(USAGE_ADD_PROJECT))
                return
            self._tasks.add_project(args)
            return

        if subcommand == "task":
            project, _, description = args.partition(" ")
            if not project or not description.strip():
                self._emit(usage_message(USAGE_ADD_TASK))
                return
            if not self._tasks.add_task(project, description):
                self._emit(MSG_UNKNOWN_PROJECT)
            return

        self._emit(usage_message(f"{USAGE_ADD_PROJECT} or {USAGE_ADD_TASK}"))

    def _check(self, rest: str) -> None:
        self._set_done(rest, True, USAGE_CHECK)

    def _uncheck(self, rest: str) -> None:
        self._set_done(rest, False, USAGE_UNCHECK)

    def _set_done(self, rest: str, done: bool, usage: str) -> None:
        if not rest.strip():
            self._emit(usage_message(usage))
            return
        task_id = self._parse_task_id(rest)
        if not self._tasks.set_done(task_id, done):
            self._emit(MSG_UNKNOWN_TASK)

    def _deadline(self, rest: str) -> None:
        id_token, _, date_text = rest.partition(" ")
        if not rest.strip() or not date_text.strip():
            self._emit(usage_message(USAGE_DEADLINE))
            return
        task_id = self._parse_task_id(id_token)
        deadline = self._parse_deadline(date_text)
        if not self._tasks.add_deadline(task_id, deadline):
            self._emit(MSG_UNKNOWN_TASK)

    def _help(self, rest: str) -> None:
        self._emit("Commands:")
        for command in self._commands.values():
            for usage in command.usages:
                self._emit(f"  {usage}")
        self._emit("")
