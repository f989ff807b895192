"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from curlex.config import ScannerConfig
from curlex.scanner import tokenize
from curlex.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that scans source and returns tokens (excluding the end sentinel)."""

    def _lex(source: str, config: ScannerConfig | None = None) -> list[Token]:
        tokens = tokenize(source, config)
        # Strip the trailing sentinel for convenience
        assert tokens[-1].type == TokenType.EOL and tokens[-1].text == ""
        return tokens[:-1]

    return _lex


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token texts match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def positions(tokens: list[Token]) -> list[tuple[int, int]]:
    """Return (line, column) for every token."""
    return [(t.line, t.column) for t in tokens]
