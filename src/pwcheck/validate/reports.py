"""Console feedback and result-log line rendering for verdicts."""

from __future__ import annotations

from pwcheck.validate.rules import Verdict

FAILURE_HEADER = "   La validación falló:"


def format_status_line(candidate: str, status_label: str) -> str:
    """Return the console header for one candidate, without a line terminator."""

    return f' [{status_label}] "{candidate}"'


def format_feedback(candidate: str, verdict: Verdict) -> str:
    """Render the full console block for a verdict.

    Invalid verdicts list every failure message in rule order under a header.
    The block always ends with a newline so it can be written in one call.
    """

    lines = [format_status_line(candidate, verdict.status_label)]
    if not verdict.overall_valid:
        lines.append(FAILURE_HEADER)
        lines.extend(f" - {reason.message}" for reason in verdict.failures)
    return "\n".join(lines) + "\n"


def format_log_record(candidate: str, status_label: str) -> str:
    """Render one result-log line, including its terminator."""

    return f'[{status_label}] "{candidate}"\n'
