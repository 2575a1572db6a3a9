"""Consistency validator: answer, options and correct_option agree."""

from __future__ import annotations

import re

from ember_quality.models.question import MathQuestion
from ember_quality.models.validation import CheckResult, Severity

OPTION_KEYS = ("a", "b", "c", "d", "e")
VERIFIED_STATUS = "VERIFIED"


def normalize_answer(answer: str) -> str:
    """Normalise an answer for comparison.

    Case and whitespace are ignored and trailing decimal zeros dropped,
    so "1  5/35" matches "1 5/35" and "2.50" matches "2.5".
    """
    text = re.sub(r"\s+", " ", answer.lower()).strip()
    text = re.sub(r"(\.\d*?)0+$", r"\1", text)
    return re.sub(r"\.$", "", text)


def find_matching_option(question: MathQuestion) -> str | None:
    """Key of the first option equal to the computed answer, if any."""
    target = normalize_answer(question.computed_answer)
    for key, value in question.options.items():
        if normalize_answer(value) == target:
            return key
    return None


def validate_consistency(question: MathQuestion) -> list[CheckResult]:
    results: list[CheckResult] = []
    answer = question.computed_answer
    option_values = list(question.options.values())

    matching_key = find_matching_option(question)
    in_options = matching_key is not None
    results.append(
        CheckResult(
            check_name="answer_exists_in_options",
            passed=in_options,
            details=(
                f'Computed answer "{answer}" found in options'
                if in_options
                else f'Computed answer "{answer}" NOT found in options: [{", ".join(option_values)}]'
            ),
            severity=Severity.CRITICAL,
        )
    )

    selected = question.options.get(question.correct_option, "")
    option_matches = normalize_answer(selected) == normalize_answer(answer)
    results.append(
        CheckResult(
            check_name="correct_option_matches_computed",
            passed=option_matches,
            details=(
                f'Option {question.correct_option} ("{selected}") matches computed answer'
                if option_matches
                else f'MISMATCH: Option {question.correct_option} is "{selected}" '
                f'but computed answer is "{answer}"'
            ),
            severity=Severity.CRITICAL,
        )
    )

    if in_options and not option_matches:
        results.append(
            CheckResult(
                check_name="suggested_correction",
                passed=False,
                details=f'correct_option should be "{matching_key}" not "{question.correct_option}"',
                severity=Severity.ERROR,
            )
        )

    status = question.verification.verification_status
    self_verified = status == VERIFIED_STATUS
    results.append(
        CheckResult(
            check_name="self_verification_status",
            passed=self_verified,
            details="Self-verification passed" if self_verified else f"Self-reported: {status}",
            severity=Severity.WARNING if self_verified else Severity.ERROR,
        )
    )

    normalized = [normalize_answer(v) for v in option_values]
    duplicates = _find_duplicates(normalized)
    results.append(
        CheckResult(
            check_name="no_duplicate_options",
            passed=not duplicates,
            details=(
                "All options are unique"
                if not duplicates
                else f"Duplicate options detected: {', '.join(duplicates)}"
            ),
            severity=Severity.ERROR,
        )
    )

    has_required = bool(
        question.question_id
        and question.subject
        and question.topic
        and question.question_text
        and answer
        and question.correct_option
        and len(question.options) == len(OPTION_KEYS)
    )
    results.append(
        CheckResult(
            check_name="required_fields_present",
            passed=has_required,
            details="All required fields present" if has_required else "Missing required fields",
            severity=Severity.CRITICAL,
        )
    )
    return results


def _find_duplicates(values: list[str]) -> list[str]:
    seen: set[str] = set()
    duplicates: list[str] = []
    for value in values:
        if value in seen and value not in duplicates:
            duplicates.append(value)
        seen.add(value)
    return duplicates
