"""Tests for the wcal recursive descent parser.

Covers:
- Tree shapes for each operator
- Precedence and left associativity
- Unary minus chains and explicit parentheses
- Error messages for malformed token streams
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from wcal.core.errors import ParseError
from wcal.core.expressions import AST, BinaryExpr, BinaryOp, Negate, Number, Parenthesized
from wcal.core.lexer import Token, TokenKind, tokenize
from wcal.core.parser import parse

ParseText = Callable[[str], AST]


def num(value: int) -> Number:
    return Number(value=value)


def binop(op: BinaryOp, left, right) -> BinaryExpr:
    return BinaryExpr(op=op, left=left, right=right)


class TestShapes:
    """Each grammar rule builds the expected node."""

    @pytest.mark.parametrize(
        ("source", "op"),
        [
            ("12+3", BinaryOp.ADD),
            ("12-3", BinaryOp.SUB),
            ("12*3", BinaryOp.MUL),
            ("12/3", BinaryOp.DIV),
        ],
    )
    def test_binary(self, parse_text: ParseText, source: str, op: BinaryOp) -> None:
        assert parse_text(source) == AST(root=binop(op, num(12), num(3)))

    def test_number(self, parse_text: ParseText) -> None:
        assert parse_text("12") == AST(root=num(12))

    def test_negate(self, parse_text: ParseText) -> None:
        assert parse_text("-12") == AST(root=Negate(operand=num(12)))

    def test_nested_parentheses_are_kept(self, parse_text: ParseText) -> None:
        expected = Parenthesized(inner=Parenthesized(inner=num(12)))
        assert parse_text("((12))") == AST(root=expected)

    def test_parenthesized_is_distinct_from_inner(self, parse_text: ParseText) -> None:
        assert parse_text("(12)") != parse_text("12")

    def test_parse_accepts_hand_built_tokens(self) -> None:
        tokens = [Token.number(1), Token(TokenKind.PLUS), Token.number(2)]
        assert parse(tokens) == AST(root=binop(BinaryOp.ADD, num(1), num(2)))


class TestPrecedence:
    """Multiplication binds tighter; same-level operators group from the left."""

    def test_multiplication_binds_tighter(self, parse_text: ParseText) -> None:
        expected = binop(BinaryOp.ADD, num(1), binop(BinaryOp.MUL, num(3), num(6)))
        assert parse_text("1+3*6") == AST(root=expected)

    def test_grouping_overrides_precedence(self, parse_text: ParseText) -> None:
        inner = Parenthesized(inner=binop(BinaryOp.SUB, num(2), num(3)))
        assert parse_text("6/(2-3)") == AST(root=binop(BinaryOp.DIV, num(6), inner))

    def test_subtraction_is_left_associative(self, parse_text: ParseText) -> None:
        expected = binop(BinaryOp.SUB, binop(BinaryOp.SUB, num(12), num(3)), num(2))
        assert parse_text("12-3-2") == AST(root=expected)

    def test_division_is_left_associative(self, parse_text: ParseText) -> None:
        expected = binop(BinaryOp.DIV, binop(BinaryOp.DIV, num(8), num(4)), num(2))
        assert parse_text("8/4/2") == AST(root=expected)

    def test_mixed_levels(self, parse_text: ParseText) -> None:
        # 1*2+3*4-5  ->  ((1*2)+(3*4))-5
        left = binop(
            BinaryOp.ADD,
            binop(BinaryOp.MUL, num(1), num(2)),
            binop(BinaryOp.MUL, num(3), num(4)),
        )
        assert parse_text("1*2+3*4-5") == AST(root=binop(BinaryOp.SUB, left, num(5)))


class TestUnaryMinus:
    """Unary minus is right-recursive and applies to a single factor."""

    def test_negated_operands(self, parse_text: ParseText) -> None:
        expected = binop(BinaryOp.SUB, Negate(operand=num(7)), Negate(operand=num(2)))
        assert parse_text("-7--2") == AST(root=expected)

    def test_chain(self, parse_text: ParseText) -> None:
        expected = Negate(operand=Negate(operand=Negate(operand=num(7))))
        assert parse_text("---7") == AST(root=expected)

    def test_negated_group(self, parse_text: ParseText) -> None:
        inner = Parenthesized(inner=binop(BinaryOp.ADD, num(1), num(2)))
        assert parse_text("-(1+2)") == AST(root=Negate(operand=inner))

    def test_binds_tighter_than_multiplication(self, parse_text: ParseText) -> None:
        expected = binop(BinaryOp.MUL, Negate(operand=num(2)), num(3))
        assert parse_text("-2*3") == AST(root=expected)


class TestErrors:
    """Malformed input reports what was expected and what was found."""

    @pytest.mark.parametrize(
        ("source", "message"),
        [
            ("1+", "Expect number, got nothing"),
            ("+", "Expect number, got +"),
            ("(", "Expect number, got nothing"),
            ("(((2))", "Expect ), got nothing"),
            ("(())", "Expect number, got )"),
            ("(2)(1)", "Invalid expression"),
            ("1 2", "Invalid expression"),
            ("(1 2", "Expect ), got 2"),
            ("2*/3", "Expect number, got /"),
            ("", "Expect number, got nothing"),
        ],
    )
    def test_messages(self, parse_text: ParseText, source: str, message: str) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_text(source)
        assert exc_info.value.message == message

    def test_position_of_trailing_tokens(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse(tokenize("(2)(1)"))
        assert exc_info.value.pos == 3

    def test_position_of_bad_factor(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse(tokenize("1+*"))
        assert exc_info.value.pos == 2


class TestRendering:
    """Trees render back to text that parses to the same tree."""

    @pytest.mark.parametrize("source", ["1 + 3 * 6", "6 / (2 - 3)", "---7", "-(1 + 2) * 4"])
    def test_str(self, parse_text: ParseText, source: str) -> None:
        assert str(parse_text(source)) == source

    def test_reparse(self, parse_text: ParseText) -> None:
        ast = parse_text("0x10*(0b1-0o7)--3")
        assert parse_text(str(ast)) == ast
