"""
wcal - a calculator for integer arithmetic.

Evaluates single-line expressions over + - * / ( ) and decimal, binary,
octal, and hexadecimal literals, as i128 or f64.
"""

from __future__ import annotations

from wcal._version import get_version
from wcal.core import (
    AST,
    EvaluationFault,
    LexError,
    Mode,
    ParseError,
    TruncatedDivisionWarning,
    WcalError,
    evaluate,
    evaluate_float,
    evaluate_integer,
    parse,
    tokenize,
)

__version__ = get_version()

__all__ = [
    "__version__",
    "AST",
    "EvaluationFault",
    "LexError",
    "Mode",
    "ParseError",
    "TruncatedDivisionWarning",
    "WcalError",
    "evaluate",
    "evaluate_float",
    "evaluate_integer",
    "parse",
    "tokenize",
]
