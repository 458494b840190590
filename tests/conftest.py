"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from statelex.grammars.asm import Token, TokenType, tokenize
from statelex.rules import POP, Push, rule
from statelex.scanner import RuleTable


@pytest.fixture
def lex():
    """Return a helper that tokenizes assembly source."""

    def _lex(source: str, strict: bool = False) -> list[Token]:
        return tokenize(source, strict=strict)

    return _lex


@pytest.fixture
def quoted_rules() -> RuleTable:
    """A small table with a root state and a string state entered on a quote."""
    return {
        "root": (
            rule(r"\s+"),
            rule(r"[a-z]+", lambda s: ("word", s)),
            rule(r'"', next=Push("string")),
        ),
        "string": (
            rule(r'[^"]+', lambda s: ("text", s)),
            rule(r'"', next=POP),
        ),
    }


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str | int | None]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
