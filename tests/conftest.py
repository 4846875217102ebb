"""Shared pytest fixtures for wcal tests."""

from collections.abc import Callable

import pytest

from wcal.core.expressions import AST
from wcal.core.lexer import tokenize
from wcal.core.parser import parse


@pytest.fixture
def parse_text() -> Callable[[str], AST]:
    """Return a helper that lexes and parses a string in one step."""

    def _parse(source: str) -> AST:
        return parse(tokenize(source))

    return _parse
