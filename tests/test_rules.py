from __future__ import annotations

import pytest

from pwcheck.validate.rules import (
    PASSWORD_RULES,
    FailureReason,
    Verdict,
    VerdictStatus,
    evaluate,
    rule_messages,
)

ALL_REASONS = (
    FailureReason.TOO_SHORT,
    FailureReason.MISSING_SPECIAL_CHAR,
    FailureReason.INSUFFICIENT_UPPERCASE,
    FailureReason.INSUFFICIENT_LOWERCASE,
    FailureReason.MISSING_DIGIT,
)


def test_single_uppercase_is_only_failure() -> None:
    verdict = evaluate("Password1!")

    assert not verdict.overall_valid
    assert verdict.status is VerdictStatus.INVALID
    assert verdict.failures == (FailureReason.INSUFFICIENT_UPPERCASE,)


def test_valid_candidate_has_no_failures() -> None:
    verdict = evaluate("PASSword1!")

    assert verdict.overall_valid
    assert verdict.status is VerdictStatus.VALID
    assert verdict.failures == ()
    assert verdict.status_label == "✔ VÁLIDA"


def test_empty_string_fails_every_rule_in_order() -> None:
    verdict = evaluate("")

    assert verdict.failures == ALL_REASONS
    assert verdict.status_label == "✖ INVÁLIDA"


def test_rule_order_matches_failure_order() -> None:
    assert tuple(rule.reason for rule in PASSWORD_RULES) == ALL_REASONS


@pytest.mark.parametrize("candidate", ["", "a", "Ab1!", "AAbbb1!"])
def test_short_candidates_report_too_short(candidate: str) -> None:
    assert FailureReason.TOO_SHORT in evaluate(candidate).failures


def test_length_boundary() -> None:
    assert FailureReason.TOO_SHORT in evaluate("ABcde1!").failures
    assert FailureReason.TOO_SHORT not in evaluate("ABcde1!x").failures


@pytest.mark.parametrize("candidate", ["abcdefgh", "ABCdef123", "12345678", "PASSword1"])
def test_alphanumeric_only_reports_missing_special(candidate: str) -> None:
    assert FailureReason.MISSING_SPECIAL_CHAR in evaluate(candidate).failures


@pytest.mark.parametrize("candidate", ["ABcde 12", "ABcde_12", "ABcdeñ12", "ABcde\t12"])
def test_space_underscore_and_non_ascii_count_as_special(candidate: str) -> None:
    assert FailureReason.MISSING_SPECIAL_CHAR not in evaluate(candidate).failures


@pytest.mark.parametrize(
    ("candidate", "expected_missing"),
    [
        ("abcdefg1!", True),
        ("Abcdefg1!", True),
        ("ABcdefg1!", False),
        ("ÁÉcdefg1!", True),
    ],
)
def test_uppercase_threshold(candidate: str, expected_missing: bool) -> None:
    assert (FailureReason.INSUFFICIENT_UPPERCASE in evaluate(candidate).failures) is expected_missing


@pytest.mark.parametrize(
    ("candidate", "expected_missing"),
    [
        ("ABCDEFG1!", True),
        ("ABCDEab1!", True),
        ("ABCDabc1!", False),
        ("ABCDéñü1!", True),
    ],
)
def test_lowercase_threshold(candidate: str, expected_missing: bool) -> None:
    assert (FailureReason.INSUFFICIENT_LOWERCASE in evaluate(candidate).failures) is expected_missing


def test_digit_rule_is_ascii_only() -> None:
    assert FailureReason.MISSING_DIGIT in evaluate("ABcdefgh!").failures
    assert FailureReason.MISSING_DIGIT in evaluate("ABcdefgh!٣").failures
    assert FailureReason.MISSING_DIGIT not in evaluate("ABcdefgh!3").failures


def test_all_rules_checked_without_short_circuit() -> None:
    verdict = evaluate("abc")

    assert verdict.failures == (
        FailureReason.TOO_SHORT,
        FailureReason.MISSING_SPECIAL_CHAR,
        FailureReason.INSUFFICIENT_UPPERCASE,
        FailureReason.MISSING_DIGIT,
    )


def test_length_counts_code_points() -> None:
    # Seven code points, more than eight UTF-8 bytes.
    assert FailureReason.TOO_SHORT in evaluate("ÁÉíóú1!").failures


def test_surrogate_escaped_input_does_not_raise() -> None:
    candidate = b"ABcde1\xff\xfe".decode("utf-8", errors="surrogateescape")

    verdict = evaluate(candidate)

    assert verdict.overall_valid
    assert verdict.failures == ()


def test_reevaluation_is_identical() -> None:
    assert evaluate("Password1!") == evaluate("Password1!")


def test_verdict_rejects_inconsistent_fields() -> None:
    with pytest.raises(ValueError):
        Verdict(overall_valid=True, status=VerdictStatus.VALID, failures=(FailureReason.MISSING_DIGIT,))
    with pytest.raises(ValueError):
        Verdict(overall_valid=False, status=VerdictStatus.VALID, failures=(FailureReason.MISSING_DIGIT,))


def test_rule_messages_in_order() -> None:
    assert rule_messages() == [
        "Debe tener al menos 8 caracteres de longitud.",
        "Debe contener al menos un carácter especial.",
        "Debe contener al menos dos letras mayúsculas.",
        "Debe contener al menos tres letras minúsculas.",
        "Debe contener al menos un dígito.",
    ]
