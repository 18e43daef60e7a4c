"""Bounded worker pool that validates and logs candidates concurrently."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from pwcheck.dispatch.task import ConsoleFeedback, TaskOutcome, run_validation_task
from pwcheck.results.writer import ResultLogger

LOGGER = logging.getLogger(__name__)


class DispatcherState(str, Enum):
    """Lifecycle of a dispatcher: RUNNING -> DRAINING -> TERMINATED."""

    RUNNING = "running"
    DRAINING = "draining"
    TERMINATED = "terminated"


class DispatcherClosedError(RuntimeError):
    """Raised when a candidate is submitted after draining has started."""


@dataclass(frozen=True, slots=True)
class DispatchStats:
    """Snapshot of dispatcher counters."""

    submitted: int = 0
    completed: int = 0
    valid: int = 0
    invalid: int = 0
    log_failures: int = 0
    task_failures: int = 0

    @property
    def pending(self) -> int:
        return self.submitted - self.completed

    def as_dict(self) -> dict[str, int]:
        return {
            "submitted": self.submitted,
            "completed": self.completed,
            "valid": self.valid,
            "invalid": self.invalid,
            "log_failures": self.log_failures,
            "task_failures": self.task_failures,
        }


class TaskDispatcher:
    """Fire-and-forget submission onto a fixed pool of worker threads.

    Each task runs evaluate -> console feedback -> result-log append. Failures
    are contained per task: a log-write error is counted and reported, and any
    other exception is logged with its traceback while the worker moves on to
    the next queued candidate.

    With `max_pending` set, `submit` blocks while that many tasks are queued or
    running. Otherwise admission never blocks.
    """

    def __init__(
        self,
        result_logger: ResultLogger,
        feedback: ConsoleFeedback | None = None,
        *,
        workers: int = 4,
        max_pending: int | None = None,
        thread_name_prefix: str = "pwcheck-worker",
        on_outcome: Callable[[TaskOutcome], None] | None = None,
    ) -> None:
        if workers < 1:
            raise ValueError("workers must be >= 1.")
        if max_pending is not None and max_pending < 1:
            raise ValueError("max_pending must be >= 1 when set.")

        self.result_logger = result_logger
        self.feedback = feedback or ConsoleFeedback()
        self.workers = workers
        self.max_pending = max_pending
        self.on_outcome = on_outcome

        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix=thread_name_prefix)
        self._admission = threading.BoundedSemaphore(max_pending) if max_pending is not None else None
        self._state = DispatcherState.RUNNING
        self._state_lock = threading.Lock()
        self._stats_lock = threading.Lock()
        self._counts = {
            "submitted": 0,
            "completed": 0,
            "valid": 0,
            "invalid": 0,
            "log_failures": 0,
            "task_failures": 0,
        }

    @property
    def state(self) -> DispatcherState:
        with self._state_lock:
            return self._state

    def stats(self) -> DispatchStats:
        with self._stats_lock:
            return DispatchStats(**self._counts)

    def submit(self, candidate: str) -> None:
        """Queue one candidate for validation and logging."""

        if self._admission is not None:
            self._admission.acquire()
        with self._state_lock:
            if self._state is not DispatcherState.RUNNING:
                if self._admission is not None:
                    self._admission.release()
                raise DispatcherClosedError(f"Dispatcher is {self._state.value}; submissions are closed.")
            with self._stats_lock:
                self._counts["submitted"] += 1
            self._executor.submit(self._run, candidate)

    def shutdown_and_drain(self) -> DispatchStats:
        """Stop admissions and block until every admitted task has finished."""

        with self._state_lock:
            if self._state is DispatcherState.TERMINATED:
                return self.stats()
            self._state = DispatcherState.DRAINING

        pending = self.stats().pending
        LOGGER.info("dispatcher.drain_start pending=%s workers=%s", pending, self.workers)
        self._executor.shutdown(wait=True)

        with self._state_lock:
            self._state = DispatcherState.TERMINATED
        final = self.stats()
        LOGGER.info(
            "dispatcher.drain_complete completed=%s valid=%s invalid=%s log_failures=%s task_failures=%s",
            final.completed,
            final.valid,
            final.invalid,
            final.log_failures,
            final.task_failures,
        )
        return final

    def __enter__(self) -> "TaskDispatcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown_and_drain()

    def _run(self, candidate: str) -> None:
        try:
            outcome = run_validation_task(
                candidate,
                result_logger=self.result_logger,
                feedback=self.feedback,
            )
        except Exception as exc:
            LOGGER.exception("dispatcher.task_failed thread=%s", threading.current_thread().name)
            outcome = TaskOutcome(
                candidate=candidate,
                verdict=None,
                logged=False,
                error=f"{type(exc).__name__}: {exc}",
            )
        finally:
            if self._admission is not None:
                self._admission.release()

        self._record(outcome)
        if self.on_outcome is not None:
            try:
                self.on_outcome(outcome)
            except Exception:
                LOGGER.exception("dispatcher.outcome_callback_failed")

    def _record(self, outcome: TaskOutcome) -> None:
        with self._stats_lock:
            self._counts["completed"] += 1
            if outcome.verdict is None:
                self._counts["task_failures"] += 1
                return
            if outcome.verdict.overall_valid:
                self._counts["valid"] += 1
            else:
                self._counts["invalid"] += 1
            if not outcome.logged:
                self._counts["log_failures"] += 1
