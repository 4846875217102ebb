"""
Expression evaluator for wcal.

One tree walk, two numeric interpretations. ``evaluate_with`` dispatches on
node type and delegates every arithmetic step to a ``NumericOps`` policy:

- ``IntegerOps``: signed 128-bit integers. Division truncates toward zero,
  warns when a remainder is dropped, and faults on a zero divisor.
- ``FloatOps``: IEEE-754 doubles. Division by zero gives an infinity or NaN.

Pure evaluation: the tree is only read, never modified.
"""

from __future__ import annotations

import logging
import math
import warnings
from typing import Protocol, TypeVar

from wcal.core.errors import (
    DivisionByZeroFault,
    IntegerOverflowFault,
    TruncatedDivisionWarning,
    UnknownOperatorFault,
)
from wcal.core.expressions import (
    AST,
    BinaryExpr,
    BinaryOp,
    Expr,
    Negate,
    Number,
    Parenthesized,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

I128_MIN = -(2**127)
I128_MAX = 2**127 - 1


class NumericOps(Protocol[T]):
    """Arithmetic capabilities an evaluator needs from a number type."""

    def from_literal(self, value: int) -> T: ...

    def add(self, left: T, right: T) -> T: ...

    def subtract(self, left: T, right: T) -> T: ...

    def multiply(self, left: T, right: T) -> T: ...

    def divide(self, left: T, right: T) -> T: ...

    def negate(self, operand: T) -> T: ...


class IntegerOps:
    """Signed 128-bit integer arithmetic."""

    def from_literal(self, value: int) -> int:
        return value

    def add(self, left: int, right: int) -> int:
        return _checked(left + right)

    def subtract(self, left: int, right: int) -> int:
        return _checked(left - right)

    def multiply(self, left: int, right: int) -> int:
        return _checked(left * right)

    def divide(self, left: int, right: int) -> int:
        """Truncating division, as in C and Rust rather than Python's ``//``."""
        if right == 0:
            raise DivisionByZeroFault()
        quotient = abs(left) // abs(right)
        if (left < 0) != (right < 0):
            quotient = -quotient
        if quotient * right != left:
            warnings.warn("division will cause a cast", TruncatedDivisionWarning, stacklevel=2)
        return _checked(quotient)

    def negate(self, operand: int) -> int:
        return _checked(-operand)


class FloatOps:
    """IEEE-754 double arithmetic. Total: never faults, never warns."""

    def from_literal(self, value: int) -> float:
        return float(value)

    def add(self, left: float, right: float) -> float:
        return left + right

    def subtract(self, left: float, right: float) -> float:
        return left - right

    def multiply(self, left: float, right: float) -> float:
        return left * right

    def divide(self, left: float, right: float) -> float:
        # Python raises on float division by zero; IEEE-754 does not.
        if right == 0:
            if left == 0 or math.isnan(left):
                return math.nan
            return math.copysign(math.inf, left) * math.copysign(1.0, right)
        return left / right

    def negate(self, operand: float) -> float:
        return -operand


def _checked(value: int) -> int:
    if not I128_MIN <= value <= I128_MAX:
        raise IntegerOverflowFault(f"integer overflow: {value} does not fit in i128")
    return value


def evaluate_with(ast: AST, ops: NumericOps[T]) -> T:
    """Evaluate a tree under the given numeric interpretation."""
    return _interpret(ast.root, ops)


def evaluate_integer(ast: AST) -> int:
    """Evaluate a tree to a signed 128-bit integer.

    Raises:
        DivisionByZeroFault: If a divisor evaluates to zero.
        IntegerOverflowFault: If an intermediate result leaves the i128 range.

    Warns:
        TruncatedDivisionWarning: For each division that drops a remainder.
    """
    result = evaluate_with(ast, IntegerOps())
    logger.debug("Integer result of %s: %d", ast, result)
    return result


def evaluate_float(ast: AST) -> float:
    """Evaluate a tree to a double. Division by zero yields inf or NaN."""
    result = evaluate_with(ast, FloatOps())
    logger.debug("Float result of %s: %r", ast, result)
    return result


def _interpret(expr: Expr, ops: NumericOps[T]) -> T:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(expr, Number):
        return ops.from_literal(expr.value)

    if isinstance(expr, Negate):
        return ops.negate(_interpret(expr.operand, ops))

    if isinstance(expr, Parenthesized):
        return _interpret(expr.inner, ops)

    if isinstance(expr, BinaryExpr):
        return _interpret_binary(expr, ops)

    raise UnknownOperatorFault(f"Unknown expression type: {type(expr).__name__}")


def _interpret_binary(expr: BinaryExpr, ops: NumericOps[T]) -> T:
    """Evaluate left, then right, then apply the operator."""
    left = _interpret(expr.left, ops)
    right = _interpret(expr.right, ops)

    if expr.op == BinaryOp.ADD:
        return ops.add(left, right)
    if expr.op == BinaryOp.SUB:
        return ops.subtract(left, right)
    if expr.op == BinaryOp.MUL:
        return ops.multiply(left, right)
    if expr.op == BinaryOp.DIV:
        return ops.divide(left, right)

    raise UnknownOperatorFault(f"Unknown operator: {expr.op}")
