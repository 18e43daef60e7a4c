"""Per-candidate validation task and its console side channel."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TextIO

import typer

from pwcheck.results.writer import LogWriteError, ResultLogger
from pwcheck.validate.reports import format_feedback
from pwcheck.validate.rules import Verdict, evaluate

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TaskOutcome:
    """What happened to one submitted candidate.

    `verdict` is None only when the task failed with an unexpected error.
    """

    candidate: str
    verdict: Verdict | None
    logged: bool
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.verdict is None


class ConsoleFeedback:
    """Write one verdict block per task without interleaving between workers."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream
        self._lock = threading.Lock()

    def emit(self, candidate: str, verdict: Verdict) -> None:
        block = format_feedback(candidate, verdict)
        with self._lock:
            # stream=None resolves to the current stdout at write time.
            typer.echo(block, nl=False, file=self.stream)


def run_validation_task(
    candidate: str,
    *,
    result_logger: ResultLogger,
    feedback: ConsoleFeedback,
) -> TaskOutcome:
    """Evaluate, print feedback, then append the record, in that order.

    A failed append is reported once on the error channel and the task still
    completes. Any other exception propagates to the dispatcher's task boundary.
    """

    verdict = evaluate(candidate)
    feedback.emit(candidate, verdict)
    try:
        result_logger.append(candidate, verdict.status_label)
    except LogWriteError as exc:
        LOGGER.error("result_log.append_failed path=%s error=%s", exc.path, exc.cause)
        return TaskOutcome(candidate=candidate, verdict=verdict, logged=False, error=str(exc))
    return TaskOutcome(candidate=candidate, verdict=verdict, logged=True)
