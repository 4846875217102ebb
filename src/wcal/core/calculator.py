"""
Text-to-number composition of the lexer, parser, and evaluators.

Usage:
    from wcal.core.calculator import Mode, evaluate

    evaluate("1+3*6")                 # 19
    evaluate("7/2", Mode.FLOAT)       # 3.5
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import StrEnum

from wcal.core.errors import ParseError
from wcal.core.evaluator import evaluate_float, evaluate_integer
from wcal.core.lexer import Token, TokenKind, tokenize
from wcal.core.parser import parse

logger = logging.getLogger(__name__)


class Mode(StrEnum):
    """Numeric interpretation of an expression."""

    INTEGER = "i128"
    FLOAT = "f64"


# Tokens after which a minus sign is unary
_PREFIX_CONTEXT = frozenset(
    {TokenKind.PLUS, TokenKind.MINUS, TokenKind.STAR, TokenKind.SLASH, TokenKind.LPAREN}
)


def nesting_depth(tokens: Sequence[Token]) -> int:
    """Upper bound on the recursion depth the parser needs for ``tokens``.

    Each open parenthesis and each unary minus still waiting for its operand
    counts as one level, so ``(-(-1))`` is 4 deep and ``1-2-3`` is 0.
    """
    depth = 0
    # Unary minuses pending at each enclosing parenthesis level
    held: list[int] = []
    held_total = 0
    pending = 0
    prev: Token | None = None

    for tok in tokens:
        if tok.kind == TokenKind.MINUS and (prev is None or prev.kind in _PREFIX_CONTEXT):
            pending += 1
        elif tok.kind == TokenKind.LPAREN:
            held.append(pending)
            held_total += pending
            pending = 0
        elif tok.kind == TokenKind.RPAREN:
            if held:
                held_total -= held.pop()
            pending = 0
        elif tok.kind == TokenKind.NUMBER:
            pending = 0
        depth = max(depth, len(held) + held_total + pending)
        prev = tok

    return depth


def evaluate(source: str, mode: Mode = Mode.INTEGER, *, max_depth: int | None = None) -> int | float:
    """Evaluate one line of arithmetic.

    Args:
        source: Expression text (e.g., "6/(2-3)")
        mode: Integer or floating-point evaluation.
        max_depth: Reject expressions nested deeper than this before parsing.

    Returns:
        An ``int`` in integer mode, a ``float`` in float mode.

    Raises:
        LexError: If the text cannot be tokenized.
        ParseError: If the tokens are not a valid expression.
        EvaluationFault: On integer division by zero or overflow.
    """
    tokens = tokenize(source)

    if max_depth is not None and nesting_depth(tokens) > max_depth:
        raise ParseError("Expression nested too deeply")

    ast = parse(tokens)
    logger.debug("Evaluating %s in %s mode", ast, mode)

    if mode == Mode.FLOAT:
        return evaluate_float(ast)
    return evaluate_integer(ast)
