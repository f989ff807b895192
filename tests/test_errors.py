"""Test strict mode errors, positions, and context snippets."""

import pytest

from curlex.config import ScannerConfig
from curlex.errors import ScanError
from curlex.scanner import Scanner, tokenize
from curlex.tokens import TokenType

STRICT = ScannerConfig(strict=True)


class TestStrictMode:
    def test_unterminated_string(self):
        with pytest.raises(ScanError, match="unterminated string literal") as exc_info:
            tokenize('let s = "abc', STRICT)
        err = exc_info.value
        assert err.position.line == 1
        assert err.position.column == 9

    def test_unterminated_block(self):
        with pytest.raises(ScanError, match="unterminated block") as exc_info:
            tokenize("x\nfun f() {\n  a", STRICT)
        err = exc_info.value
        assert err.position.line == 2
        assert err.position.column == 9

    def test_unterminated_nested_block_reports_outermost(self):
        with pytest.raises(ScanError) as exc_info:
            tokenize("{ a {", STRICT)
        assert exc_info.value.position.column == 1

    def test_well_formed_input_passes(self):
        tokens = tokenize('fun f() { "}" }', STRICT)
        assert tokens[-1].text == ""

    def test_tokens_before_error_are_returned(self):
        scanner = Scanner('a "b', STRICT)
        token, more = scanner.next_token()
        assert token.text == "a"
        assert more is True
        with pytest.raises(ScanError):
            scanner.next_token()


class TestLenientMode:
    @pytest.mark.parametrize("source", ['"', "{", "{{{", '{"', "'\\", '"\n\n'])
    def test_never_raises(self, source):
        tokens = tokenize(source)
        assert tokens[-1].text == ""


class TestErrorFormatting:
    def test_format_contains_line(self):
        with pytest.raises(ScanError) as exc_info:
            tokenize('let s = "oops', STRICT)
        assert 'let s = "oops' in exc_info.value.format()

    def test_format_contains_caret(self):
        with pytest.raises(ScanError) as exc_info:
            tokenize("{", STRICT)
        formatted = exc_info.value.format()
        assert formatted.startswith("error:")
        assert formatted.rstrip().endswith("^")

    def test_format_with_filename(self):
        with pytest.raises(ScanError) as exc_info:
            tokenize("a\n  {", STRICT)
        assert "main.src:2:3" in exc_info.value.format("main.src")

    def test_str_is_formatted(self):
        with pytest.raises(ScanError) as exc_info:
            tokenize("{", STRICT)
        assert str(exc_info.value) == exc_info.value.format()

    def test_carries_partial_token(self):
        with pytest.raises(ScanError) as exc_info:
            tokenize('let s = "abc', STRICT)
        err = exc_info.value
        assert err.token.type == TokenType.LITERAL
        assert err.token.text == '"abc'
        assert err.span.end.offset == 12

    def test_underline_covers_partial_literal(self):
        with pytest.raises(ScanError) as exc_info:
            tokenize('let s = "abc', STRICT)
        last = exc_info.value.format().splitlines()[-1]
        assert last.endswith(" " * 8 + "^^^^")

    def test_underline_stops_at_end_of_first_line(self):
        with pytest.raises(ScanError) as exc_info:
            tokenize("x\nfun f() {\n  a", STRICT)
        lines = exc_info.value.format().splitlines()
        assert lines[3] == "2 | fun f() {"
        assert lines[4] == "  | " + " " * 8 + "^"
        assert lines[5] == "  = note: input ended at 3:4"

    def test_single_line_has_no_note(self):
        with pytest.raises(ScanError) as exc_info:
            tokenize("{ a", STRICT)
        assert "note:" not in exc_info.value.format()
