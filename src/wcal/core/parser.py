"""
Recursive descent parser for the wcal arithmetic language.

Grammar (precedence low to high)::

    expr       -> term expr_tail
    expr_tail  -> ("+" | "-") term expr_tail | <empty>
    term       -> factor term_tail
    term_tail  -> ("*" | "/") factor term_tail | <empty>
    factor     -> "(" expr ")" | NUMBER | "-" factor

The tails are folded with loops, which keeps binary operators
left-associative: ``12-3-2`` parses as ``(12-3)-2``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from wcal.core.errors import ParseError
from wcal.core.expressions import (
    AST,
    BinaryExpr,
    BinaryOp,
    Expr,
    Negate,
    Number,
    Parenthesized,
)
from wcal.core.lexer import Token, TokenKind

logger = logging.getLogger(__name__)

_ADDITIVE: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
}

_MULTIPLICATIVE: dict[TokenKind, BinaryOp] = {
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
}


class _Parser:
    """Recursive descent parser over a token sequence."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    def eof(self) -> bool:
        return self.pos >= len(self.tokens)

    def peek(self) -> Token | None:
        if self.eof():
            return None
        return self.tokens[self.pos]

    def advance(self, expected: str) -> Token:
        """Consume the next token, failing if the stream is exhausted."""
        tok = self.peek()
        if tok is None:
            raise ParseError(f"Expect {expected}, got nothing", self.pos)
        self.pos += 1
        return tok

    # -- Grammar rules --

    def parse_expr(self) -> Expr:
        """term (('+' | '-') term)*"""
        left = self.parse_term()
        while (tok := self.peek()) is not None and tok.kind in _ADDITIVE:
            self.advance(str(tok))
            right = self.parse_term()
            left = BinaryExpr(op=_ADDITIVE[tok.kind], left=left, right=right)
        return left

    def parse_term(self) -> Expr:
        """factor (('*' | '/') factor)*"""
        left = self.parse_factor()
        while (tok := self.peek()) is not None and tok.kind in _MULTIPLICATIVE:
            self.advance(str(tok))
            right = self.parse_factor()
            left = BinaryExpr(op=_MULTIPLICATIVE[tok.kind], left=left, right=right)
        return left

    def parse_factor(self) -> Expr:
        """'(' expr ')' | NUMBER | '-' factor"""
        start = self.pos
        tok = self.advance("number")

        if tok.kind == TokenKind.LPAREN:
            inner = self.parse_expr()
            self.expect_rparen()
            return Parenthesized(inner=inner)

        if tok.kind == TokenKind.MINUS:
            return Negate(operand=self.parse_factor())

        if tok.kind == TokenKind.NUMBER:
            assert tok.value is not None
            return Number(value=tok.value)

        raise ParseError(f"Expect number, got {tok}", start)

    def expect_rparen(self) -> Token:
        pos = self.pos
        tok = self.advance(")")
        if tok.kind != TokenKind.RPAREN:
            raise ParseError(f"Expect ), got {tok}", pos)
        return tok


def parse(tokens: Sequence[Token]) -> AST:
    """Parse a token sequence into an expression tree.

    Args:
        tokens: Tokens produced by ``tokenize``.

    Returns:
        The parsed tree.

    Raises:
        ParseError: If the tokens do not form exactly one expression.
    """
    parser = _Parser(tokens)
    root = parser.parse_expr()

    # Ensure all tokens consumed
    if not parser.eof():
        raise ParseError("Invalid expression", parser.pos)

    logger.debug("Parsed %d tokens into %s", len(tokens), root)
    return AST(root=root)
