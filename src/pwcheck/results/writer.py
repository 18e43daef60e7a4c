"""Append-only result log shared by all dispatcher workers."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

from pwcheck.validate.reports import format_log_record

LOGGER = logging.getLogger(__name__)


class LogWriteError(RuntimeError):
    """Raised when a record cannot be appended to the result log."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"Error escribiendo al archivo de registro {path}: {cause}")
        self.path = path
        self.cause = cause


def encode_log_record(line: str) -> bytes:
    """Encode a record line to UTF-8 without ever failing.

    Surrogates from `surrogateescape` decoding are written back as the original
    bytes. Any other lone surrogate is written as a backslash escape.
    """

    try:
        return line.encode("utf-8", errors="surrogateescape")
    except UnicodeEncodeError:
        return line.encode("utf-8", errors="backslashreplace")


class ResultLogger:
    """Serialize `[status] "candidate"` records into a single append-only file.

    One lock guards the whole open-append-flush-close sequence, so concurrent
    callers never interleave partial lines. The file and its parent directory
    are created on first write; the file is never truncated or read back.
    """

    def __init__(self, path: Path, *, fsync: bool = False) -> None:
        self.path = Path(path)
        self.fsync = fsync
        self._lock = threading.Lock()
        self._records_written = 0

    @property
    def records_written(self) -> int:
        with self._lock:
            return self._records_written

    def append(self, candidate_text: str, status_label: str) -> None:
        """Append one record, raising `LogWriteError` if the sink is unusable."""

        payload = encode_log_record(format_log_record(candidate_text, status_label))
        with self._lock:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with self.path.open("ab") as handle:
                    handle.write(payload)
                    handle.flush()
                    if self.fsync:
                        os.fsync(handle.fileno())
            except OSError as exc:
                raise LogWriteError(self.path, exc) from exc
            self._records_written += 1
        LOGGER.debug("result_log.append path=%s status=%s", self.path, status_label)
