"""Validation pipeline.

Runs the consistency checks on every question and the computational
checks (arithmetic, fractions) on mathematics questions, then turns the
failed checks into issues, warnings and, where possible, corrections.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from ember_quality.models.question import MathQuestion
from ember_quality.models.validation import (
    BatchValidationResult,
    CheckResult,
    Severity,
    ValidationIssue,
    ValidationResult,
    ValidationWarning,
)
from ember_quality.validation.arithmetic import validate_arithmetic
from ember_quality.validation.consistency import find_matching_option, validate_consistency
from ember_quality.validation.fraction_checks import validate_fractions
from ember_quality.validation.numbers import DEFAULT_TOLERANCE

logger = logging.getLogger(__name__)

COMPUTATIONAL_SUBJECT = "Mathematics"
MAX_BATCH_SIZE = 100

CHECK_FIELDS: dict[str, str] = {
    "answer_exists_in_options": "options",
    "correct_option_matches_computed": "correct_option",
    "suggested_correction": "correct_option",
    "computation_verification": "computational_verification.expression",
    "computation_execution": "computational_verification.expression",
    "display_answer_verification": "computed_answer",
    "mixed_number_conversion": "computed_answer",
    "mixed_number_format": "computed_answer",
    "simplification_status": "computed_answer",
    "required_fields_present": "multiple",
    "has_verification_expression": "computational_verification",
}

_SUGGESTED_OPTION_RE = re.compile(r'should be "([a-e])"')


class BatchSizeError(ValueError):
    """Raised when a batch is empty or larger than allowed."""


def validate_question(
    question: MathQuestion | Mapping[str, Any],
    tolerance: float = DEFAULT_TOLERANCE,
    computational_subject: str = COMPUTATIONAL_SUBJECT,
) -> ValidationResult:
    """Validate a single question through every applicable layer."""
    if not isinstance(question, MathQuestion):
        question = MathQuestion.model_validate(question)

    checks = validate_consistency(question)
    if question.subject == computational_subject:
        checks += validate_arithmetic(question, tolerance)
        checks += validate_fractions(question)

    blocking = [
        c for c in checks if not c.passed and c.severity in (Severity.CRITICAL, Severity.ERROR)
    ]
    # critical failures first
    blocking.sort(key=lambda c: c.severity != Severity.CRITICAL)
    errors = [_to_issue(c) for c in blocking]
    warnings = [
        ValidationWarning(code=c.check_name, message=c.details)
        for c in checks
        if not c.passed and c.severity == Severity.WARNING
    ]

    corrected = attempt_auto_correction(question, errors)

    result = ValidationResult(
        question_id=question.question_id,
        passed=not errors,
        checks=checks,
        errors=errors,
        warnings=warnings,
        corrected_data=corrected,
    )
    logger.debug(
        "Validated %s: passed=%s, %d checks, %d errors",
        result.question_id or "<unnamed>", result.passed, len(checks), len(errors),
    )
    return result


def validate_batch(
    questions: Iterable[MathQuestion | Mapping[str, Any]],
    max_batch_size: int = MAX_BATCH_SIZE,
    tolerance: float = DEFAULT_TOLERANCE,
    computational_subject: str = COMPUTATIONAL_SUBJECT,
) -> BatchValidationResult:
    """Validate several questions, applying auto-corrections where possible.

    Raises:
        BatchSizeError: If the batch is empty or exceeds ``max_batch_size``.
    """
    parsed = [q if isinstance(q, MathQuestion) else MathQuestion.model_validate(q) for q in questions]
    if not parsed:
        raise BatchSizeError("Batch must contain at least one question")
    if len(parsed) > max_batch_size:
        raise BatchSizeError(f"Batch of {len(parsed)} exceeds max_batch_size of {max_batch_size}")

    logger.info("Validating batch of %d questions", len(parsed))
    passed: list[MathQuestion] = []
    failed: list[ValidationResult] = []
    results: list[ValidationResult] = []
    auto_corrected = 0

    for question in parsed:
        result = validate_question(question, tolerance, computational_subject)
        results.append(result)
        if result.passed:
            passed.append(question)
        elif result.corrected_data:
            passed.append(question.model_copy(update=result.corrected_data))
            auto_corrected += 1
        else:
            failed.append(result)

    logger.info(
        "Batch done: %d passed (%d auto-corrected), %d failed",
        len(passed), auto_corrected, len(failed),
    )
    return BatchValidationResult(
        total=len(parsed),
        passed=passed,
        failed=failed,
        auto_corrected=auto_corrected,
        results=results,
    )


def attempt_auto_correction(
    question: MathQuestion,
    errors: list[ValidationIssue],
) -> dict[str, Any] | None:
    """Corrections that resolve every issue, or None.

    Only a wrong correct_option can be fixed, so any issue on another
    field leaves the question uncorrected.
    """
    if not any(e.auto_fixable for e in errors):
        return None
    if any(e.field != "correct_option" for e in errors):
        return None
    corrections: dict[str, Any] = {}
    for error in errors:
        if error.auto_fixable:
            key = find_matching_option(question)
            if key is not None:
                corrections["correct_option"] = key
    return corrections or None


def _to_issue(check: CheckResult) -> ValidationIssue:
    suggested = _SUGGESTED_OPTION_RE.search(check.details)
    return ValidationIssue(
        code=check.check_name.upper(),
        message=check.details,
        field=CHECK_FIELDS.get(check.check_name, check.check_name),
        auto_fixable=check.check_name == "suggested_correction" and suggested is not None,
        suggested_fix=f'Set correct_option to "{suggested.group(1)}"' if suggested else None,
    )
