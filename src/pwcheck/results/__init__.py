"""Result log sink."""

from pwcheck.results.writer import LogWriteError, ResultLogger

__all__ = ["LogWriteError", "ResultLogger"]
