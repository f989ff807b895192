"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import Enum, auto


class TokenType(Enum):
    # Words
    KEYWORD = auto()  # reserved word from the keyword table
    IDENTIFIER = auto()  # any other word
    TYPE = auto()  # word from the type-name table

    # Grouped and constant content
    BLOCK = auto()  # { ... } including nested braces
    LITERAL = auto()  # number, quoted string, or literal word

    # Single characters not covered above
    SYMBOL = auto()

    # Newline, or the empty sentinel at end of input
    EOL = auto()


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single scanned token.

    ``line`` and ``column`` locate the first character of ``text``; a value of
    0 means the position was never set.  Only ``BLOCK`` tokens have
    ``children``: the tokens of the text between the braces, with positions
    relative to the whole source.
    """

    type: TokenType = TokenType.EOL
    text: str = ""
    line: int = 0
    column: int = 0
    offset: int = field(default=0, compare=False)
    children: tuple[Token, ...] = field(default=(), compare=False, repr=False)

    @property
    def position(self) -> Position:
        return Position(self.line, self.column, self.offset)

    @property
    def end(self) -> Position:
        """Position just past the last character of the token."""
        newlines = self.text.count("\n")
        if newlines:
            column = len(self.text) - self.text.rfind("\n")
        else:
            column = self.column + len(self.text)
        return Position(self.line + newlines, column, self.offset + len(self.text))

    @property
    def span(self) -> Span:
        return Span(self.position, self.end)


WORD_START = frozenset(string.ascii_letters + "_")
WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")
DIGITS = frozenset(string.digits)

# Horizontal whitespace; "\r" only counts when it is not part of "\r\n"
_BLANK = frozenset(" \t\f\v\r")


def is_word_start(ch: str) -> bool:
    """Return True if ch can start a keyword, type name or identifier."""
    return ch in WORD_START


def is_word_char(ch: str) -> bool:
    """Return True if ch can continue a word."""
    return ch in WORD_CHARS


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return ch in DIGITS


def is_blank(ch: str) -> bool:
    """Return True if ch is insignificant whitespace."""
    return ch in _BLANK
