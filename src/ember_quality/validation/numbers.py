"""Rational helpers and format-aware parsing of numeric answers.

Recognised encodings:
    "12.5"            bare integer or decimal
    "45%"             percentage (parsed as 45)
    "3/4"             bare fraction
    "1 3/4"           mixed number
    "Fraction(8, 7)"  fraction constructor, expected-result channel only

Every parser returns None on input it does not recognise.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from fractions import Fraction

from ember_quality.models.question import AnswerFormat

Number = Fraction | float

DEFAULT_TOLERANCE = 1e-4

_DECIMAL = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)"
DECIMAL_RE = re.compile(_DECIMAL)
PERCENTAGE_RE = re.compile(rf"({_DECIMAL})\s*%")
FRACTION_RE = re.compile(r"([+-]?\d+)\s*/\s*(\d+)")
MIXED_NUMBER_RE = re.compile(r"([+-]?\d+)\s+(\d+)\s*/\s*(\d+)")
FRACTION_LITERAL_RE = re.compile(r"Fraction\(\s*([+-]?\d+)\s*,\s*([+-]?\d+)\s*\)")

# Unsigned N/D anywhere in the text, as used for simplification checks
FRACTION_PART_RE = re.compile(r"(\d+)/(\d+)")


def greatest_common_divisor(a: int, b: int) -> int:
    """Euclid's algorithm. gcd(a, 0) == |a|."""
    a, b = abs(a), abs(b)
    while b != 0:
        a, b = b, a % b
    return a


def simplify_fraction(numerator: int, denominator: int) -> tuple[int, int]:
    """Reduce a fraction to lowest terms with a positive denominator."""
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    gcd = greatest_common_divisor(numerator, denominator)
    if gcd == 0:
        return numerator, denominator
    return numerator // gcd, denominator // gcd


def to_mixed_number(numerator: int, denominator: int) -> tuple[int, int, int]:
    """Convert an improper fraction to (whole, numerator, denominator).

    The sign is carried by the whole part, or by the numerator when there
    is no whole part: -7/4 -> (-1, 3, 4), -1/4 -> (0, -1, 4).
    """
    if denominator == 0:
        raise ValueError("denominator must be non-zero")
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    whole, remainder = divmod(abs(numerator), denominator)
    if numerator < 0:
        if whole:
            whole = -whole
        else:
            remainder = -remainder
    return whole, remainder, denominator


def mixed_to_improper(whole: int, numerator: int, denominator: int) -> int:
    """Reconstruct "W N/D" as W*D + N.

    The whole part's sign is not applied to the fraction, so "-1 3/4"
    reconstructs as -1/4 rather than -7/4.
    """
    return whole * denominator + numerator


def split_mixed_number(text: str) -> tuple[int, int, int] | None:
    """Split "W N/D" into its integer parts."""
    m = MIXED_NUMBER_RE.fullmatch(text.strip())
    if not m:
        return None
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


def split_fraction(text: str) -> tuple[int, int] | None:
    """Split "N/D" into its integer parts, without reducing."""
    m = FRACTION_RE.fullmatch(text.strip())
    if not m:
        return None
    return int(m.group(1)), int(m.group(2))


def parse_decimal(text: str) -> float | None:
    text = text.strip()
    if not DECIMAL_RE.fullmatch(text):
        return None
    return float(text)


def parse_percentage(text: str) -> float | None:
    m = PERCENTAGE_RE.fullmatch(text.strip())
    if not m:
        return None
    return float(m.group(1))


def parse_fraction(text: str) -> Fraction | None:
    parts = split_fraction(text)
    if parts is None or parts[1] == 0:
        return None
    return Fraction(*parts)


def parse_mixed_number(text: str) -> Fraction | None:
    parts = split_mixed_number(text)
    if parts is None or parts[2] == 0:
        return None
    whole, numerator, denominator = parts
    return Fraction(mixed_to_improper(whole, numerator, denominator), denominator)


def parse_fraction_literal(text: str) -> Fraction | None:
    m = FRACTION_LITERAL_RE.fullmatch(text.strip())
    if not m or int(m.group(2)) == 0:
        return None
    return Fraction(int(m.group(1)), int(m.group(2)))


Parser = Callable[[str], Number | None]

DISPLAY_PARSERS: dict[str, tuple[Parser, ...]] = {
    AnswerFormat.INTEGER.value: (parse_decimal,),
    AnswerFormat.DECIMAL.value: (parse_decimal,),
    AnswerFormat.PERCENTAGE.value: (parse_percentage, parse_decimal),
    AnswerFormat.FRACTION.value: (parse_fraction, parse_decimal),
    AnswerFormat.MIXED_NUMBER.value: (parse_mixed_number, parse_fraction, parse_decimal),
    AnswerFormat.MIXED_NUMBER_UNSIMPLIFIED.value: (
        parse_mixed_number,
        parse_fraction,
        parse_decimal,
    ),
}

EXPECTED_PARSERS: dict[str, tuple[Parser, ...]] = {
    "fraction": (parse_fraction_literal, parse_fraction, parse_decimal),
}

FALLBACK_PARSERS: tuple[Parser, ...] = (parse_decimal,)


def _parse_with(parsers: tuple[Parser, ...], text: str | None) -> Number | None:
    if text is None:
        return None
    for parser in parsers:
        value = parser(text)
        if value is not None:
            return value
    return None


def parse_display_answer(text: str | None, answer_format: str) -> Number | None:
    """Parse a displayed answer according to its answer format."""
    return _parse_with(DISPLAY_PARSERS.get(answer_format, FALLBACK_PARSERS), text)


def parse_expected_result(text: str | None, result_format: str) -> Number | None:
    """Parse an authored expected result according to its result format."""
    return _parse_with(EXPECTED_PARSERS.get(result_format, FALLBACK_PARSERS), text)


def values_match(a: Number | None, b: Number | None, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    """Exact comparison for two rationals, absolute tolerance otherwise.

    A rational is never converted to a float, so values too large for a
    float still compare. Infinite and NaN floats never match a rational.
    """
    if a is None or b is None:
        return False
    if isinstance(a, Fraction) and isinstance(b, Fraction):
        return a == b
    if isinstance(a, Fraction) or isinstance(b, Fraction):
        try:
            return abs(Fraction(a) - Fraction(b)) < tolerance
        except (ValueError, OverflowError):
            return False
    return abs(a - b) < tolerance


def format_number(value: Number) -> str:
    """Render a computed value the way it appears in check details."""
    if isinstance(value, Fraction):
        return str(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
