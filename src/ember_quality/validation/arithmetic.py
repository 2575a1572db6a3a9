"""Arithmetic validator.

Re-evaluates a question's verification expression and checks the result
against both the authored expected result and the displayed answer.
"""

from __future__ import annotations

import logging

from ember_quality.models.question import AnswerFormat, MathQuestion
from ember_quality.models.validation import CheckResult, Severity
from ember_quality.validation.expression import ExpressionError, evaluate_expression
from ember_quality.validation.numbers import (
    DEFAULT_TOLERANCE,
    format_number,
    parse_display_answer,
    parse_expected_result,
    values_match,
)

logger = logging.getLogger(__name__)

_KNOWN_FORMATS = {f.value for f in AnswerFormat}


def validate_arithmetic(
    question: MathQuestion,
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[CheckResult]:
    """Verify the computation behind a math question.

    Exact rational arithmetic is used when the result format is
    "fraction"; otherwise floats are compared within ``tolerance``.
    Expected failures are reported as checks and never raised.
    """
    verification = question.computational_verification
    if verification is None or not verification.expression:
        return [
            CheckResult(
                check_name="has_verification_expression",
                passed=False,
                details="No computational_verification.expression provided",
                severity=Severity.ERROR,
            )
        ]

    expression = verification.expression
    try:
        computed = evaluate_expression(expression, exact=verification.result_format == "fraction")
    except ExpressionError as exc:
        logger.debug("Expression %r failed to evaluate: %s", expression, exc)
        return [
            CheckResult(
                check_name="computation_execution",
                passed=False,
                details=f"Failed to evaluate expression: {exc}",
                severity=Severity.CRITICAL,
            )
        ]
    shown = format_number(computed)

    expected = parse_expected_result(verification.expected_result, verification.result_format)
    if expected is None:
        details = (
            f'Expression "{expression}" = {shown}, but expected result '
            f'"{verification.expected_result}" could not be parsed'
        )
        computation_ok = False
    else:
        computation_ok = values_match(computed, expected, tolerance)
        details = (
            f'Expression "{expression}" = {shown} ✓'
            if computation_ok
            else f'Expression "{expression}" = {shown}, but expected {format_number(expected)}'
        )
    results = [
        CheckResult(
            check_name="computation_verification",
            passed=computation_ok,
            details=details,
            severity=Severity.CRITICAL,
        )
    ]

    if question.answer_format not in _KNOWN_FORMATS:
        logger.warning(
            "Unknown answer format %r for question %s, parsing as decimal",
            question.answer_format, question.question_id or "<unnamed>",
        )
    displayed = parse_display_answer(question.computed_answer, question.answer_format)
    display_ok = values_match(computed, displayed, tolerance)
    results.append(
        CheckResult(
            check_name="display_answer_verification",
            passed=display_ok,
            details=(
                f'Computed result matches displayed answer "{question.computed_answer}"'
                if display_ok
                else f'Computed {shown} but displayed answer is "{question.computed_answer}"'
            ),
            severity=Severity.CRITICAL,
        )
    )
    return results
