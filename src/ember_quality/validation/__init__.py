"""Math question validation."""

from ember_quality.validation.arithmetic import validate_arithmetic
from ember_quality.validation.consistency import validate_consistency
from ember_quality.validation.expression import ExpressionError, evaluate_expression
from ember_quality.validation.fraction_checks import validate_fractions
from ember_quality.validation.numbers import (
    greatest_common_divisor,
    simplify_fraction,
    to_mixed_number,
)
from ember_quality.validation.pipeline import BatchSizeError, validate_batch, validate_question

__all__ = [
    "BatchSizeError",
    "ExpressionError",
    "evaluate_expression",
    "greatest_common_divisor",
    "simplify_fraction",
    "to_mixed_number",
    "validate_arithmetic",
    "validate_batch",
    "validate_consistency",
    "validate_fractions",
    "validate_question",
]
