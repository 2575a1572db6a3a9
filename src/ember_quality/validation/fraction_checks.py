"""Fraction validator: mixed-number conversion and simplification status."""

from __future__ import annotations

import logging

from ember_quality.models.question import (
    FRACTION_FORMATS,
    MIXED_NUMBER_FORMATS,
    AnswerFormat,
    MathQuestion,
)
from ember_quality.models.validation import CheckResult, Severity
from ember_quality.validation.numbers import (
    FRACTION_PART_RE,
    FRACTION_RE,
    greatest_common_divisor,
    mixed_to_improper,
    split_mixed_number,
    to_mixed_number,
)

logger = logging.getLogger(__name__)


def validate_fractions(question: MathQuestion) -> list[CheckResult]:
    """Check fraction-format answers. Other formats yield no checks."""
    answer_format = question.answer_format
    if answer_format not in FRACTION_FORMATS:
        return []

    results: list[CheckResult] = []
    if answer_format in MIXED_NUMBER_FORMATS:
        results.append(
            check_mixed_number_conversion(question.working.computed_result, question.computed_answer)
        )

    if answer_format == AnswerFormat.MIXED_NUMBER_UNSIMPLIFIED.value:
        results.append(check_unsimplified(question.computed_answer))
    else:
        results.append(check_simplified(question.computed_answer))
    return results


def check_mixed_number_conversion(computed: str, displayed: str) -> CheckResult:
    """Verify that a displayed "W N/D" reconstructs the improper fraction N'/D'."""
    parts = split_mixed_number(displayed)
    if parts is None:
        return CheckResult(
            check_name="mixed_number_format",
            passed=False,
            details=f'Cannot parse mixed number format: "{displayed}"',
            severity=Severity.ERROR,
        )
    whole, numerator, denominator = parts

    improper = FRACTION_RE.search(computed or "")
    if improper is None:
        return CheckResult(
            check_name="mixed_number_conversion",
            passed=True,
            details="Could not fully verify conversion, format appears correct",
            severity=Severity.WARNING,
        )
    original_num, original_den = int(improper.group(1)), int(improper.group(2))

    valid = (
        mixed_to_improper(whole, numerator, denominator) == original_num
        and denominator == original_den
    )
    if valid:
        details = f"{computed} correctly converts to {displayed}"
    elif original_den == 0:
        details = f"Conversion error: {computed} has a zero denominator, got {displayed}"
    else:
        w, n, d = to_mixed_number(original_num, original_den)
        details = f"Conversion error: {computed} should be {w} {n}/{d}, got {displayed}"
    logger.debug("Mixed number conversion %s -> %s: %s", computed, displayed, valid)

    return CheckResult(
        check_name="mixed_number_conversion",
        passed=valid,
        details=details,
        severity=Severity.CRITICAL,
    )


def check_unsimplified(answer: str) -> CheckResult:
    """Report the GCD of an intentionally unsimplified answer.

    Informational only: this check always passes, even when the fraction
    turns out to be in lowest terms already.
    """
    match = FRACTION_PART_RE.search(answer)
    if match is None:
        return CheckResult(
            check_name="simplification_status",
            passed=True,
            details="No fraction component to check",
            severity=Severity.WARNING,
        )

    num, den = int(match.group(1)), int(match.group(2))
    gcd = greatest_common_divisor(num, den)
    if gcd > 1:
        details = f"Fraction {num}/{den} is unsimplified (GCD={gcd}), as expected for this format"
    else:
        details = (
            f"Fraction {num}/{den} is already in simplest form "
            "(might not be intentional for unsimplified format)"
        )
    return CheckResult(
        check_name="simplification_status",
        passed=True,
        details=details,
        severity=Severity.WARNING,
    )


def check_simplified(answer: str) -> CheckResult:
    """Require the fractional part of the answer to be in lowest terms."""
    match = FRACTION_PART_RE.search(answer)
    if match is None:
        return CheckResult(
            check_name="simplification_status",
            passed=True,
            details="No fraction to check",
            severity=Severity.WARNING,
        )

    num, den = int(match.group(1)), int(match.group(2))
    gcd = greatest_common_divisor(num, den)
    if gcd == 1:
        return CheckResult(
            check_name="simplification_status",
            passed=True,
            details=f"Fraction {num}/{den} is properly simplified",
            severity=Severity.WARNING,
        )
    if den == 0:
        details = f"Fraction {num}/{den} has a zero denominator"
    else:
        details = (
            f"Fraction {num}/{den} can be simplified further (GCD={gcd}). "
            f"Should be {num // gcd}/{den // gcd}"
        )
    return CheckResult(
        check_name="simplification_status",
        passed=False,
        details=details,
        severity=Severity.ERROR,
    )
