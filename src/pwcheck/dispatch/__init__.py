"""Worker pool and per-candidate task."""

from pwcheck.dispatch.pool import DispatchStats, DispatcherClosedError, DispatcherState, TaskDispatcher
from pwcheck.dispatch.task import ConsoleFeedback, TaskOutcome, run_validation_task

__all__ = [
    "DispatchStats",
    "DispatcherClosedError",
    "DispatcherState",
    "TaskDispatcher",
    "ConsoleFeedback",
    "TaskOutcome",
    "run_validation_task",
]
