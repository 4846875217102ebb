"""
wcal calculator core.

Lexer, parser, and evaluators for single-line integer arithmetic.

Usage:
    from wcal.core import evaluate_integer, parse, tokenize

    ast = parse(tokenize("12-3-2"))
    result = evaluate_integer(ast)
    # result == 7
"""

from wcal.core.calculator import Mode, evaluate
from wcal.core.errors import (
    DivisionByZeroFault,
    EvaluationFault,
    IntegerOverflowFault,
    LexError,
    ParseError,
    TruncatedDivisionWarning,
    UnknownOperatorFault,
    WcalError,
)
from wcal.core.evaluator import evaluate_float, evaluate_integer
from wcal.core.expressions import AST, BinaryExpr, BinaryOp, Expr, Negate, Number, Parenthesized
from wcal.core.lexer import Token, TokenKind, tokenize
from wcal.core.parser import parse

__all__ = [
    "AST",
    "BinaryExpr",
    "BinaryOp",
    "DivisionByZeroFault",
    "EvaluationFault",
    "Expr",
    "IntegerOverflowFault",
    "LexError",
    "Mode",
    "Negate",
    "Number",
    "Parenthesized",
    "ParseError",
    "Token",
    "TokenKind",
    "TruncatedDivisionWarning",
    "UnknownOperatorFault",
    "WcalError",
    "evaluate",
    "evaluate_float",
    "evaluate_integer",
    "parse",
    "tokenize",
]
