# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from typing import TextIO

from ..cli.commands import CommandDispatcher
from ..core.state import AppState

logger = logging.getLogger(__name__)

QUIT = "quit"
WELCOME = "Welcome to TaskList! Type 'help' for available commands."
PROMPT = "> "


def run_console_loop(
    state: AppState,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> None:
    """
    Read commands line by line until "quit", EOF or Ctrl+C.

    CommandError raised by the dispatcher (bad task id, bad date) is NOT caught
    here: it ends the loop and propagates to the caller.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    def emit(text: str) -> None:
        print(text, file=stdout, flush=True)

    dispatcher = CommandDispatcher(state.task_list, emit)

    logger.info("Console connector started.")
    emit(WELCOME)

    while True:
        stdout.write(PROMPT)
        stdout.flush()
        try:
            line = stdin.readline()
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print(file=stdout)
            break

        if not line:
            logger.info("Console EOF received, exiting.")
            break

        command = line.rstrip("\r\n")
        if command == QUIT:
            logger.info("Console exit command received.")
            break

        if not command.strip():
            continue

        with state.lock:
            dispatcher.execute(command)

    logger.info("Console connector finished.")
