"""Password rules, verdict model, and feedback rendering."""

from pwcheck.validate.reports import format_feedback, format_log_record, format_status_line
from pwcheck.validate.rules import (
    PASSWORD_RULES,
    FailureReason,
    PasswordRule,
    Verdict,
    VerdictStatus,
    evaluate,
    rule_messages,
)

__all__ = [
    "PASSWORD_RULES",
    "FailureReason",
    "PasswordRule",
    "Verdict",
    "VerdictStatus",
    "evaluate",
    "rule_messages",
    "format_feedback",
    "format_log_record",
    "format_status_line",
]
