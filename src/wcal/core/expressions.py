"""
Expression tree types for wcal.

The tree is built bottom-up by the parser and never mutated afterwards::

    Expr          -> Number | Negate | Parenthesized | BinaryExpr
    Number        -> unsigned 64-bit literal
    Negate        -> - expr
    Parenthesized -> ( expr )
    BinaryExpr    -> expr (+ | - | * | /) expr

Parentheses are kept as explicit nodes so that trees compare structurally
against the source that produced them.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary arithmetic operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Number(BaseModel):
    """An integer literal, stored as an unsigned 64-bit value."""

    value: int = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    @field_validator("value")
    @classmethod
    def validate_range(cls, v: int) -> int:
        """Literals are unsigned 64-bit values."""
        if not 0 <= v < 2**64:
            raise ValueError(f"Literal {v} does not fit in 64 bits")
        return v

    def __str__(self) -> str:
        return str(self.value)


class Negate(BaseModel):
    """Unary minus: - operand."""

    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"-{self.operand}"


class Parenthesized(BaseModel):
    """A grouped subexpression: ( inner )."""

    inner: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.inner})"


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.left} {self.op.value} {self.right}"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Number | Negate | Parenthesized | BinaryExpr

# Rebuild models for recursive forward references
Negate.model_rebuild()
Parenthesized.model_rebuild()
BinaryExpr.model_rebuild()


class AST(BaseModel):
    """A parsed expression: the single root of the tree."""

    root: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
