"""Password rules and the verdict model.

Rules are evaluated over Unicode code points. Every character class is the
ASCII one, so any non-ASCII code point counts as a special character and never
as a letter or digit.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Callable

MIN_LENGTH = 8
MIN_UPPERCASE = 2
MIN_LOWERCASE = 3
MIN_DIGITS = 1

_ASCII_ALNUM = frozenset(string.ascii_letters + string.digits)
_ASCII_UPPER = frozenset(string.ascii_uppercase)
_ASCII_LOWER = frozenset(string.ascii_lowercase)
_ASCII_DIGITS = frozenset(string.digits)


class FailureReason(str, Enum):
    """Closed set of rule violations, each with a fixed feedback message."""

    TOO_SHORT = "too_short"
    MISSING_SPECIAL_CHAR = "missing_special_char"
    INSUFFICIENT_UPPERCASE = "insufficient_uppercase"
    INSUFFICIENT_LOWERCASE = "insufficient_lowercase"
    MISSING_DIGIT = "missing_digit"

    @property
    def message(self) -> str:
        return FAILURE_MESSAGES[self]


FAILURE_MESSAGES: dict[FailureReason, str] = {
    FailureReason.TOO_SHORT: "Debe tener al menos 8 caracteres de longitud.",
    FailureReason.MISSING_SPECIAL_CHAR: "Debe contener al menos un carácter especial.",
    FailureReason.INSUFFICIENT_UPPERCASE: "Debe contener al menos dos letras mayúsculas.",
    FailureReason.INSUFFICIENT_LOWERCASE: "Debe contener al menos tres letras minúsculas.",
    FailureReason.MISSING_DIGIT: "Debe contener al menos un dígito.",
}


class VerdictStatus(str, Enum):
    """Overall outcome tag shown on the console and written to the result log."""

    VALID = "valid"
    INVALID = "invalid"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


STATUS_LABELS: dict[VerdictStatus, str] = {
    VerdictStatus.VALID: "✔ VÁLIDA",
    VerdictStatus.INVALID: "✖ INVÁLIDA",
}


@dataclass(frozen=True, slots=True)
class Verdict:
    """Outcome of evaluating one candidate."""

    overall_valid: bool
    status: VerdictStatus
    failures: tuple[FailureReason, ...]

    def __post_init__(self) -> None:
        if self.overall_valid != (len(self.failures) == 0):
            raise ValueError("overall_valid must be True exactly when failures is empty.")
        expected = VerdictStatus.VALID if self.overall_valid else VerdictStatus.INVALID
        if self.status is not expected:
            raise ValueError(f"status must be {expected.name} when overall_valid={self.overall_valid}.")

    @property
    def status_label(self) -> str:
        return self.status.label

    @classmethod
    def from_failures(cls, failures: tuple[FailureReason, ...]) -> "Verdict":
        """Build a verdict whose validity and status follow from the failures."""

        valid = len(failures) == 0
        return cls(
            overall_valid=valid,
            status=VerdictStatus.VALID if valid else VerdictStatus.INVALID,
            failures=failures,
        )


def _count_in(candidate: str, charset: frozenset[str]) -> int:
    return sum(1 for char in candidate if char in charset)


def _has_min_length(candidate: str) -> bool:
    return len(candidate) >= MIN_LENGTH


def _has_special_char(candidate: str) -> bool:
    return any(char not in _ASCII_ALNUM for char in candidate)


def _has_min_uppercase(candidate: str) -> bool:
    return _count_in(candidate, _ASCII_UPPER) >= MIN_UPPERCASE


def _has_min_lowercase(candidate: str) -> bool:
    return _count_in(candidate, _ASCII_LOWER) >= MIN_LOWERCASE


def _has_digit(candidate: str) -> bool:
    return _count_in(candidate, _ASCII_DIGITS) >= MIN_DIGITS


@dataclass(frozen=True, slots=True)
class PasswordRule:
    """One predicate a candidate must satisfy, and the reason reported when it does not."""

    reason: FailureReason
    check: Callable[[str], bool]


# Evaluation order is the order failures are reported in.
PASSWORD_RULES: tuple[PasswordRule, ...] = (
    PasswordRule(FailureReason.TOO_SHORT, _has_min_length),
    PasswordRule(FailureReason.MISSING_SPECIAL_CHAR, _has_special_char),
    PasswordRule(FailureReason.INSUFFICIENT_UPPERCASE, _has_min_uppercase),
    PasswordRule(FailureReason.INSUFFICIENT_LOWERCASE, _has_min_lowercase),
    PasswordRule(FailureReason.MISSING_DIGIT, _has_digit),
)


def evaluate(candidate: str) -> Verdict:
    """Check a candidate against every rule and return its verdict.

    All rules run regardless of earlier failures. The function is pure and
    holds no shared state, so worker threads call it without locking.
    """

    failures = tuple(rule.reason for rule in PASSWORD_RULES if not rule.check(candidate))
    return Verdict.from_failures(failures)


def rule_messages() -> list[str]:
    """Return the fixed failure messages in evaluation order."""

    return [rule.reason.message for rule in PASSWORD_RULES]
