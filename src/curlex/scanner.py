"""Scanner: converts source text into a stream of classified tokens."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from curlex.config import ScannerConfig
from curlex.errors import ScanError
from curlex.tokens import Position, Token, TokenType, is_blank, is_digit, is_word_char, is_word_start

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = ScannerConfig()


class Scanner:
    """Pull classified tokens from a source string.

    The scanner owns a cursor (offset, line, column) over an immutable source
    string.  Each call to next_token() advances the cursor past the returned
    token; there is no rewind.  Malformed input never raises unless the
    config asks for strict mode: an unterminated string or block comes back
    as a partial token with ``more`` set to False.
    """

    def __init__(self, source: str, config: ScannerConfig | None = None) -> None:
        self._source = source
        self._config = config if config is not None else _DEFAULT_CONFIG
        self._pos = 0
        self._line = 1
        self._col = 1

    @property
    def source(self) -> str:
        return self._source

    @property
    def config(self) -> ScannerConfig:
        return self._config

    @property
    def position(self) -> Position:
        """Current cursor position."""
        return self._current_pos()

    @property
    def exhausted(self) -> bool:
        return self._pos >= len(self._source)

    def __iter__(self) -> Iterator[Token]:
        token, more = self.next_token()
        yield token
        while more:
            token, more = self.next_token()
            yield token
        if token.type is not TokenType.EOL:
            # Stopped on an unterminated token; close with the sentinel
            yield self.next_token()[0]

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def next_token(self) -> tuple[Token, bool]:
        """Scan one token and return it with a flag telling whether more follow.

        The flag is False for the empty EOL sentinel produced at end of
        input, and for an unterminated string literal or block, which runs
        to end of input.
        """
        self._skip_insignificant()

        if self._pos >= len(self._source):
            return self._sentinel(), False

        if self._peek() == "{":
            return self._scan_block()

        return self._scan_token()

    def all_tokens(self) -> list[Token]:
        """Drain the scanner; the returned list always ends with an EOL token."""
        return list(self)

    @staticmethod
    def tokens_until_eol_or_block(tokens: Sequence[Token], start: int) -> list[Token]:
        """Return the run of tokens starting at ``tokens[start]``.

        A BLOCK at ``start`` is returned on its own.  Otherwise the run goes
        up to and including the next EOL, or to the end of ``tokens``.  The
        grouping only looks at the token sequence: a ``{`` that opens a new
        line is not attached to the line before it.
        """
        if not 0 <= start < len(tokens):
            return []

        first = tokens[start]
        if first.type is TokenType.BLOCK:
            return [first]

        group = []
        for i in range(start, len(tokens)):
            group.append(tokens[i])
            if tokens[i].type is TokenType.EOL:
                break
        return group

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _newline_length(self) -> int:
        ch = self._peek()
        if ch == "\n":
            return 1
        if ch == "\r" and self._peek(1) == "\n":
            return 2
        return 0

    def _emit(self, tt: TokenType, start: Position, children: tuple[Token, ...] = ()) -> Token:
        text = self._source[start.offset : self._pos]
        return Token(tt, text, start.line, start.column, start.offset, children)

    def _sentinel(self) -> Token:
        return Token(TokenType.EOL, "", self._line, self._col, self._pos)

    def _unterminated(self, token: Token, what: str) -> tuple[Token, bool]:
        if self._config.strict:
            raise ScanError(f"unterminated {what}", token, self._source)
        logger.debug("unterminated %s at %d:%d", what, token.line, token.column)
        return token, False

    # ------------------------------------------------------------------
    # Whitespace and comments
    # ------------------------------------------------------------------

    def _at_comment(self) -> bool:
        prefix = self._config.comment_prefix
        return prefix is not None and self._source.startswith(prefix, self._pos)

    def _skip_insignificant(self) -> None:
        while self._pos < len(self._source):
            if self._newline_length():
                return
            if is_blank(self._peek()):
                self._advance()
            elif self._at_comment():
                while self._pos < len(self._source) and not self._newline_length():
                    self._advance()
            else:
                return

    # ------------------------------------------------------------------
    # Single tokens
    # ------------------------------------------------------------------

    def _scan_token(self) -> tuple[Token, bool]:
        """Scan anything except a block; the cursor is on a significant character."""
        start = self._current_pos()
        ch = self._peek()

        newline = self._newline_length()
        if newline:
            for _ in range(newline):
                self._advance()
            return self._emit(TokenType.EOL, start), True

        if is_word_start(ch):
            while self._pos < len(self._source) and is_word_char(self._peek()):
                self._advance()
            word = self._source[start.offset : self._pos]
            return self._emit(self._config.classify_word(word), start), True

        if is_digit(ch):
            self._scan_number()
            return self._emit(TokenType.LITERAL, start), True

        if ch in self._config.quotes:
            terminated = self._scan_quoted(ch)
            token = self._emit(TokenType.LITERAL, start)
            if not terminated:
                return self._unterminated(token, "string literal")
            return token, True

        self._advance()
        return self._emit(self._config.classify_symbol(ch), start), True

    def _scan_number(self) -> None:
        while is_digit(self._peek()) or self._peek() == "_":
            self._advance()
        if self._peek() == "." and is_digit(self._peek(1)):
            self._advance()
            while is_digit(self._peek()) or self._peek() == "_":
                self._advance()

    def _scan_quoted(self, quote: str) -> bool:
        """Consume a quoted literal; return False if input ends before the closing quote."""
        escape = self._config.escape
        self._advance()  # opening quote
        while self._pos < len(self._source):
            ch = self._advance()
            if ch == escape:
                if self._pos < len(self._source):
                    self._advance()
                continue
            if ch == quote:
                return True
        return False

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _scan_block(self) -> tuple[Token, bool]:
        """Scan a brace-delimited block, nested blocks included.

        Each open block keeps its start position and the tokens scanned
        inside it so far.  Quoted literals and comments are scanned as whole
        tokens, so braces inside them do not affect the depth.
        """
        nest = self._config.nest_blocks
        stack: list[tuple[Position, list[Token]]] = [(self._current_pos(), [])]
        self._advance()  # {

        while True:
            self._skip_insignificant()
            if self._pos >= len(self._source):
                break

            ch = self._peek()
            if ch == "{":
                stack.append((self._current_pos(), []))
                self._advance()
                continue

            if ch == "}":
                close = self._current_pos()
                self._advance()
                start, inner = stack.pop()
                block = self._close_block(start, inner, close, nest)
                if not stack:
                    return block, True
                stack[-1][1].append(block)
                continue

            token, more = self._scan_token()
            stack[-1][1].append(token)
            if not more:
                break

        # End of input with blocks still open: close them innermost first
        end = self._current_pos()
        while True:
            start, inner = stack.pop()
            block = self._close_block(start, inner, end, nest)
            if not stack:
                return self._unterminated(block, "block")
            stack[-1][1].append(block)

    def _close_block(self, start: Position, inner: list[Token], end: Position, nest: bool) -> Token:
        if not nest:
            return self._emit(TokenType.BLOCK, start)
        inner.append(Token(TokenType.EOL, "", end.line, end.column, end.offset))
        return self._emit(TokenType.BLOCK, start, tuple(inner))


def tokenize(source: str, config: ScannerConfig | None = None) -> list[Token]:
    """Convenience function: scan source text and return the token list."""
    return Scanner(source, config).all_tokens()


def split_statements(tokens: Sequence[Token]) -> Iterator[list[Token]]:
    """Yield successive line-or-block groups of ``tokens``, skipping blank lines."""
    i = 0
    while i < len(tokens):
        group = Scanner.tokens_until_eol_or_block(tokens, i)
        i += len(group)
        if len(group) == 1 and group[0].type is TokenType.EOL:
            continue
        yield group
