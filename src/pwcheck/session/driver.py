"""Line-oriented session loop feeding candidates into the dispatcher."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Literal, TextIO
from uuid import uuid4

import typer

from pwcheck.dispatch.pool import DispatchStats, TaskDispatcher
from pwcheck.utils.time_utils import now_utc

LOGGER = logging.getLogger(__name__)

BANNER_TITLE = "\n=== Validador de Contraseñas (con registro) ==="
BANNER_HINT = "Escribe '{exit_token}' para terminar.\n"

SessionEnd = Literal["exit_token", "eof"]


@dataclass(frozen=True, slots=True)
class SessionResult:
    """Return object for a finished session."""

    session_id: str
    started_ts: datetime
    finished_ts: datetime
    duration_sec: float
    ended_by: SessionEnd
    stats: DispatchStats


def _chars_equal_ignoring_case(left: str, right: str) -> bool:
    # Single-character case mappings only, so "ı" matches "i" and "İ" matches "I".
    if left == right:
        return True
    upper_left = left.upper()[:1]
    upper_right = right.upper()[:1]
    return upper_left == upper_right or upper_left.lower()[:1] == upper_right.lower()[:1]


def is_exit_token(line: str, exit_token: str = "exit") -> bool:
    """Return True when a line is the session terminator, ignoring case.

    Characters are compared pairwise through their upper and lower case forms,
    so dotless and dotted i variants match the ASCII token.
    """

    if len(line) != len(exit_token):
        return False
    return all(_chars_equal_ignoring_case(left, right) for left, right in zip(line, exit_token))


def strip_line_terminator(line: str) -> str:
    """Drop the trailing newline only; candidates are otherwise kept verbatim."""

    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


class SessionDriver:
    """Read one candidate per line until the exit token or end of input.

    Every non-terminating line is submitted as-is, including blank lines. When
    the loop ends the dispatcher is drained, so `run` returns only after every
    submitted candidate has been evaluated and logged.
    """

    def __init__(
        self,
        dispatcher: TaskDispatcher,
        input_stream: TextIO,
        *,
        exit_token: str = "exit",
        prompt: str = "Contraseña: ",
        show_banner: bool = True,
        output_stream: TextIO | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.input_stream = input_stream
        self.exit_token = exit_token
        self.prompt = prompt
        self.show_banner = show_banner
        self.output_stream = output_stream

    def _echo(self, message: str, nl: bool = True) -> None:
        typer.echo(message, nl=nl, file=self.output_stream)

    def run(self) -> SessionResult:
        session_id = f"session-{uuid4().hex[:12]}"
        started_ts = now_utc()
        started_mono = time.monotonic()
        ended_by: SessionEnd = "eof"

        LOGGER.info("session.start session_id=%s workers=%s", session_id, self.dispatcher.workers)
        if self.show_banner:
            self._echo(BANNER_TITLE)
            self._echo(BANNER_HINT.format(exit_token=self.exit_token))

        try:
            while True:
                if self.prompt:
                    self._echo(self.prompt, nl=False)
                line = self.input_stream.readline()
                if line == "":
                    break
                candidate = strip_line_terminator(line)
                if is_exit_token(candidate, self.exit_token):
                    ended_by = "exit_token"
                    break
                self.dispatcher.submit(candidate)
        finally:
            stats = self.dispatcher.shutdown_and_drain()

        if ended_by == "eof" and self.prompt:
            self._echo("")

        finished_ts = now_utc()
        duration_sec = time.monotonic() - started_mono
        LOGGER.info(
            "session.finish session_id=%s ended_by=%s submitted=%s duration_sec=%.2f",
            session_id,
            ended_by,
            stats.submitted,
            duration_sec,
        )
        return SessionResult(
            session_id=session_id,
            started_ts=started_ts,
            finished_ts=finished_ts,
            duration_sec=duration_sec,
            ended_by=ended_by,
            stats=stats,
        )
