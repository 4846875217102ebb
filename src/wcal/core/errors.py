"""
Error types for wcal lexing, parsing, and evaluation.

Two families live here. ``WcalError`` and its subclasses are ordinary input
errors: the expression was malformed and the caller is told why.
``EvaluationFault`` and its subclasses abort an evaluation outright and are
never raised for malformed input, which is rejected before evaluation starts.
"""


class WcalError(Exception):
    """Base exception for all reportable wcal errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class LexError(WcalError):
    """
    Raised when the input text cannot be scanned into tokens.

    Examples:
    - A character outside the calculator alphabet
    - A numeric literal that does not fit in 64 bits

    Attributes:
        span: (start, end) offsets of the offending text in the input
        text: The offending raw text
    """

    def __init__(self, message: str, span: tuple[int, int], text: str):
        self.span = span
        self.text = text
        super().__init__(message)


class ParseError(WcalError):
    """
    Raised when a token stream is not a valid expression.

    Examples:
    - Missing operand (``1+``)
    - Unbalanced parentheses (``(((2))``)
    - Trailing tokens after a complete expression (``(2)(1)``)

    Attributes:
        pos: Index of the token where parsing failed
    """

    def __init__(self, message: str, pos: int = 0):
        self.pos = pos
        super().__init__(message)


class ConfigError(WcalError):
    """Raised when a configuration file is malformed or holds invalid values."""

    pass


class EvaluationFault(RuntimeError):
    """
    Unrecoverable failure during evaluation.

    Not a ``WcalError``: no result exists and there is nothing wrong with the
    input text itself.
    """

    pass


class DivisionByZeroFault(EvaluationFault, ZeroDivisionError):
    """Raised when integer evaluation divides by zero."""

    def __init__(self, message: str = "division by zero"):
        super().__init__(message)


class UnknownOperatorFault(EvaluationFault):
    """Raised when a binary operator outside + - * / reaches an evaluator."""

    pass


class IntegerOverflowFault(EvaluationFault, OverflowError):
    """Raised when an integer result leaves the signed 128-bit range."""

    pass


class TruncatedDivisionWarning(UserWarning):
    """Emitted when integer division discards a remainder."""

    pass
