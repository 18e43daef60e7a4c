"""Session loop and summary helpers."""

from pwcheck.session.driver import SessionDriver, SessionResult, is_exit_token
from pwcheck.session.summary import build_session_summary, session_summary_path, write_session_summary

__all__ = [
    "SessionDriver",
    "SessionResult",
    "is_exit_token",
    "build_session_summary",
    "session_summary_path",
    "write_session_summary",
]
