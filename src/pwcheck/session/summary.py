"""Session summary artifacts written after a drained run."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pwcheck.session.driver import SessionResult
from pwcheck.utils.paths import write_json_atomically


def session_summary_path(artifacts_root: Path, session_id: str) -> Path:
    """Return the summary JSON location for one session."""

    return artifacts_root / "session_summaries" / f"{session_id}_session_summary.json"


def build_session_summary(
    result: SessionResult,
    *,
    result_log_file: Path,
    workers: int,
    max_pending: int | None,
    records_written: int,
) -> dict[str, Any]:
    """Build the summary payload. Candidate text is never included."""

    return {
        "session_id": result.session_id,
        "started_ts": result.started_ts.isoformat(),
        "finished_ts": result.finished_ts.isoformat(),
        "duration_sec": round(result.duration_sec, 3),
        "ended_by": result.ended_by,
        "workers": workers,
        "max_pending": max_pending,
        "result_log_file": str(result_log_file),
        "records_written": records_written,
        **result.stats.as_dict(),
    }


def write_session_summary(payload: dict[str, Any], artifacts_root: Path) -> Path:
    """Persist a summary payload atomically and return its path."""

    return write_json_atomically(payload, session_summary_path(artifacts_root, str(payload["session_id"])))
