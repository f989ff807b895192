"""Error types with formatted source context."""

from __future__ import annotations

from curlex.tokens import Position, Span, Token


class ScanError(Exception):
    """Raised in strict mode when a string literal or block runs to end of input.

    ``token`` is the partial token scanned before the input ran out, so the
    caller can see exactly how much was consumed.
    """

    def __init__(self, message: str, token: Token, source: str) -> None:
        self.message = message
        self.token = token
        self.source = source
        super().__init__(self.format())

    @property
    def position(self) -> Position:
        """Position of the opening quote or brace."""
        return self.token.position

    @property
    def span(self) -> Span:
        return self.token.span

    def format(self, filename: str = "<source>") -> str:
        start = self.token.position
        end = self.token.end

        # Split on "\n" only, matching how the scanner counts lines
        lines = self.source.split("\n")
        if 0 <= start.line - 1 < len(lines):
            source_line = lines[start.line - 1].rstrip("\r")
        else:
            source_line = ""

        # Underline the partial token up to the end of its first line
        first_line = self.token.text.split("\n", 1)[0].rstrip("\r")
        width = max(1, len(first_line))

        number = str(start.line)
        gutter = " " * len(number)

        out = [
            f"error: {self.message}",
            f"{gutter} --> {filename}:{start.line}:{start.column}",
            f"{gutter} |",
            f"{number} | {source_line}",
            f"{gutter} | {' ' * (start.column - 1)}{'^' * width}",
        ]
        if end.line != start.line:
            out.append(f"{gutter} = note: input ended at {end.line}:{end.column}")
        return "\n".join(out)


class ConfigError(ValueError):
    """Raised when a scanner configuration table is malformed."""
