"""Pydantic models for validation findings and results."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from ember_quality.models.question import MathQuestion


class Severity(str, Enum):
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class CheckResult(BaseModel):
    """One validator finding."""

    check_name: str
    passed: bool
    details: str
    severity: Severity

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "frozen": True}


class ValidationIssue(BaseModel):
    code: str
    message: str
    field: str
    auto_fixable: bool = False
    suggested_fix: str | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class ValidationWarning(BaseModel):
    code: str
    message: str


class ValidationResult(BaseModel):
    question_id: str
    passed: bool
    checks: list[CheckResult]
    errors: list[ValidationIssue] = []
    warnings: list[ValidationWarning] = []
    corrected_data: dict[str, Any] | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class BatchValidationResult(BaseModel):
    total: int
    passed: list[MathQuestion]
    failed: list[ValidationResult]
    auto_corrected: int = 0
    results: list[ValidationResult] = []  # every result, in input order

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
