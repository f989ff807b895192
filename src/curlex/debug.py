"""Human-readable token dump for debugging."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from curlex.tokens import Token, TokenType


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one line per token to *file*, indenting block contents."""
    _dump_tokens(tokens, 0, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_tokens(tokens: Iterable[Token], depth: int, f: TextIO) -> None:
    for token in tokens:
        _dump_token(token, depth, f)


def _dump_token(token: Token, depth: int, f: TextIO) -> None:
    where = f"{token.line}:{token.column}"
    if token.type is TokenType.BLOCK:
        f.write(f"{_indent(depth)}{where} BLOCK\n")
        _dump_tokens(token.children, depth + 1, f)
    elif token.type is TokenType.EOL and not token.text:
        f.write(f"{_indent(depth)}{where} EOL <end>\n")
    else:
        f.write(f"{_indent(depth)}{where} {token.type.name} {token.text!r}\n")
