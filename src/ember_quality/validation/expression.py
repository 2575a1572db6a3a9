"""Safe evaluation of authored verification expressions.

Supports numeric literals, unary +/-, the four arithmetic operators,
parentheses and ``Fraction(n, d)``. Nothing else is evaluated.
"""

from __future__ import annotations

import ast
from fractions import Fraction

from ember_quality.validation.numbers import Number

MAX_EXPRESSION_LENGTH = 500

# Typographic operators occasionally produced during authoring
_OPERATOR_ALIASES = {"×": "*", "÷": "/", "−": "-"}


class ExpressionError(ValueError):
    """Raised when an expression cannot be parsed or evaluated."""


def evaluate_expression(expression: str, exact: bool = False) -> Number:
    """Evaluate an arithmetic expression.

    Args:
        expression: Source text, e.g. "3/4 + 1/4".
        exact: Evaluate with rationals instead of floats.

    Returns:
        A Fraction when exact, otherwise a float.

    Raises:
        ExpressionError: On empty, oversized, malformed or unsupported
            input, and on division by zero.
    """
    text = (expression or "").strip()
    if not text:
        raise ExpressionError("Expression is empty")
    if len(text) > MAX_EXPRESSION_LENGTH:
        raise ExpressionError(f"Expression longer than {MAX_EXPRESSION_LENGTH} characters")
    for alias, op in _OPERATOR_ALIASES.items():
        text = text.replace(alias, op)

    try:
        tree = ast.parse(text, mode="eval")
    except SyntaxError as exc:
        raise ExpressionError(f"Invalid syntax in {expression!r}: {exc.msg}") from exc

    return _Evaluator(exact).visit(tree.body)


class _Evaluator:
    def __init__(self, exact: bool):
        self.exact = exact

    def literal(self, value: int | float | Fraction) -> Number:
        try:
            if not self.exact:
                return float(value)
            if isinstance(value, Fraction):
                return value
            # repr keeps 0.1 as 1/10 rather than its binary approximation
            return Fraction(repr(value))
        except (ValueError, OverflowError) as exc:
            raise ExpressionError(f"Unsupported literal: {value!r}") from exc

    def visit(self, node: ast.AST) -> Number:
        if isinstance(node, ast.Constant):
            value = node.value
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ExpressionError(f"Unsupported literal: {value!r}")
            return self.literal(value)

        if isinstance(node, ast.UnaryOp):
            operand = self.visit(node.operand)
            if isinstance(node.op, ast.UAdd):
                return operand
            if isinstance(node.op, ast.USub):
                return -operand
            raise ExpressionError(f"Unsupported unary operator: {type(node.op).__name__}")

        if isinstance(node, ast.BinOp):
            left = self.visit(node.left)
            right = self.visit(node.right)
            if isinstance(node.op, ast.Add):
                return left + right
            if isinstance(node.op, ast.Sub):
                return left - right
            if isinstance(node.op, ast.Mult):
                return left * right
            if isinstance(node.op, ast.Div):
                if right == 0:
                    raise ExpressionError("Division by zero")
                return left / right
            raise ExpressionError(f"Unsupported operator: {type(node.op).__name__}")

        if isinstance(node, ast.Call):
            return self.fraction_call(node)

        raise ExpressionError(f"Unsupported expression element: {type(node).__name__}")

    def fraction_call(self, node: ast.Call) -> Number:
        if not (isinstance(node.func, ast.Name) and node.func.id == "Fraction"):
            raise ExpressionError("Only Fraction(n, d) calls are supported")
        if len(node.args) != 2 or node.keywords:
            raise ExpressionError("Fraction() takes exactly two integer arguments")

        parts = [_Evaluator(exact=True).visit(arg) for arg in node.args]
        if any(p.denominator != 1 for p in parts):
            raise ExpressionError("Fraction() arguments must be integers")
        numerator, denominator = (int(p) for p in parts)
        if denominator == 0:
            raise ExpressionError("Division by zero")

        value = Fraction(numerator, denominator)
        return value if self.exact else float(value)
