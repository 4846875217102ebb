"""
Lexer for the wcal arithmetic language.

Converts one line of text into a sequence of typed tokens::

    PLUS: +        MINUS: -        STAR: *        SLASH: /
    LPAREN: (      RPAREN: )
    NUMBER: DEC_LITERAL | BIN_LITERAL | OCT_LITERAL | HEX_LITERAL

    DEC_LITERAL: [0-9] [0-9_]*
    BIN_LITERAL: 0b [0-1_]*
    OCT_LITERAL: 0o [0-7_]*
    HEX_LITERAL: 0x [0-9a-fA-F_]*

Scanning stops at the first newline or form feed.
"""

from __future__ import annotations

import logging
import re
from enum import StrEnum, auto

from wcal.core.errors import LexError

logger = logging.getLogger(__name__)

U64_MAX = 2**64 - 1


class TokenKind(StrEnum):
    """Token types for the arithmetic language."""

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()

    # Literals
    NUMBER = auto()


_SYMBOLS: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}

_SYMBOL_TEXT: dict[TokenKind, str] = {kind: text for text, kind in _SYMBOLS.items()}

# Prefixed literals must be tried before bare decimals so that "0x1f" is one token.
_NUMBER_RE = re.compile(
    r"0b(?P<bin>[01_]*)"
    r"|0o(?P<oct>[0-7_]*)"
    r"|0x(?P<hex>[0-9a-fA-F_]*)"
    r"|(?P<dec>[0-9][0-9_]*)"
)

_RADIX: dict[str, int] = {"bin": 2, "oct": 8, "hex": 16, "dec": 10}

# Digits needed to spell U64_MAX in each radix
_MAX_DIGITS: dict[int, int] = {2: 64, 8: 22, 10: 20, 16: 16}

_WHITESPACE = " \t"
_STOP = "\n\f"


class Token:
    """A single token from the lexer.

    ``value`` is set for NUMBER tokens only. ``span`` does not take part in
    equality, so token streams can be compared with hand-built expectations.
    """

    __slots__ = ("kind", "value", "span")

    def __init__(
        self, kind: TokenKind, value: int | None = None, span: tuple[int, int] = (0, 0)
    ) -> None:
        self.kind = kind
        self.value = value
        self.span = span

    @classmethod
    def number(cls, value: int, span: tuple[int, int] = (0, 0)) -> Token:
        return cls(TokenKind.NUMBER, value, span)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __str__(self) -> str:
        if self.kind == TokenKind.NUMBER:
            return str(self.value)
        return _SYMBOL_TEXT[self.kind]

    def __repr__(self) -> str:
        if self.kind == TokenKind.NUMBER:
            return f"Token({self.kind}, {self.value}, span={self.span})"
        return f"Token({self.kind}, span={self.span})"


def tokenize(source: str) -> list[Token]:
    """Tokenize one line of an arithmetic expression.

    Everything from the first ``\\n`` or ``\\f`` onwards is ignored.

    Args:
        source: Expression text (e.g., "12*(0x_1A-0b01)")

    Returns:
        Tokens in source order.

    Raises:
        LexError: On an invalid character or a literal wider than 64 bits.
    """
    tokens: list[Token] = []
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        if c in _STOP:
            break

        if c in _WHITESPACE:
            i += 1
            continue

        if c in _SYMBOLS:
            tokens.append(Token(_SYMBOLS[c], span=(i, i + 1)))
            i += 1
            continue

        m = _NUMBER_RE.match(source, i)
        if m is not None:
            tokens.append(_read_number(m))
            i = m.end()
            continue

        raise LexError(f"Invalid character near {i}..{i + 1}: {c}", (i, i + 1), c)

    logger.debug("Scanned %d tokens from %r", len(tokens), source)
    return tokens


def _read_number(m: re.Match[str]) -> Token:
    """Convert a numeric literal match into a NUMBER token."""
    group = m.lastgroup
    assert group is not None
    radix = _RADIX[group]
    digits = m.group(group).replace("_", "").lstrip("0")
    span = (m.start(), m.end())

    # Longer runs cannot fit, and would trip int()'s digit limit for decimals.
    too_long = len(digits) > _MAX_DIGITS[radix]
    value = int(digits, radix) if digits and not too_long else 0
    if too_long or value > U64_MAX:
        raw = m.group(0)
        raise LexError(
            "Parse int failed: number too large to fit in target type\n"
            f"Near {span[0]}..{span[1]}: {raw}",
            span,
            raw,
        )
    return Token.number(value, span)
