"""Scanner configuration: classification tables and behaviour switches."""

from __future__ import annotations

import logging
import string
import tomllib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any

from curlex.errors import ConfigError
from curlex.tokens import TokenType, is_word_char

logger = logging.getLogger(__name__)

DEFAULT_KEYWORDS = frozenset(
    {"include", "fun", "return", "let", "const", "if", "else", "while", "match", "struct", "pub"}
)

DEFAULT_TYPE_NAMES = frozenset(
    {"i8", "i16", "i32", "i64", "u8", "u16", "u32", "u64", "f32", "f64", "bool", "char", "str", "void"}
)

DEFAULT_LITERAL_WORDS = frozenset({"true", "false"})


def _default_symbol_table() -> dict[str, TokenType]:
    # Braces open blocks and quotes open strings; "}" stays here for strays
    return {ch: TokenType.SYMBOL for ch in string.punctuation if ch not in "{\"'_"}


@dataclass(frozen=True, slots=True)
class ScannerConfig:
    """Immutable scanner configuration.

    Attributes:
        keywords: Words classified as KEYWORD
        type_names: Words classified as TYPE (checked after keywords)
        literal_words: Words classified as LITERAL (checked after type names)
        symbol_table: Category for each single-character token
        fallback: Category for single characters missing from symbol_table
        quotes: Characters that open and close string literals
        escape: Character that escapes the next one inside a string literal
        comment_prefix: Start of a line comment, or None to disable comments
        nest_blocks: Tokenize block contents into Token.children
        strict: Raise ScanError on unterminated literals and blocks

    """

    keywords: frozenset[str] = DEFAULT_KEYWORDS
    type_names: frozenset[str] = DEFAULT_TYPE_NAMES
    literal_words: frozenset[str] = DEFAULT_LITERAL_WORDS
    symbol_table: Mapping[str, TokenType] = field(default_factory=_default_symbol_table, hash=False)
    fallback: TokenType = TokenType.SYMBOL
    quotes: frozenset[str] = frozenset("\"'")
    escape: str | None = "\\"
    comment_prefix: str | None = None
    nest_blocks: bool = True
    strict: bool = False

    def __post_init__(self) -> None:
        # Read-only copy so a shared config cannot be changed through its table
        object.__setattr__(self, "symbol_table", MappingProxyType(dict(self.symbol_table)))
        if "}" in self.quotes:
            raise ConfigError("'}' cannot be used as a quote character")
        if self.escape is not None and self.escape in self.quotes:
            raise ConfigError(f"escape character {self.escape!r} is also a quote character")

    def classify_word(self, word: str) -> TokenType:
        """Return the category of a scanned word."""
        if word in self.keywords:
            return TokenType.KEYWORD
        if word in self.type_names:
            return TokenType.TYPE
        if word in self.literal_words:
            return TokenType.LITERAL
        return TokenType.IDENTIFIER

    def classify_symbol(self, ch: str) -> TokenType:
        """Return the category of a single-character token."""
        return self.symbol_table.get(ch, self.fallback)

    def with_keywords(self, *words: str) -> ScannerConfig:
        """Return a copy with *words* added to the keyword table."""
        return replace(self, keywords=self.keywords | frozenset(words))

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> ScannerConfig:
        """Create a ScannerConfig from a plain mapping, e.g. a parsed TOML table.

        Missing keys keep their defaults.  ``symbols`` maps single characters
        to category names and is merged over the default symbol table;
        ``fallback`` is a category name.  An empty ``comment_prefix`` or
        ``escape`` disables the feature (TOML has no null).
        """
        unknown = set(config_dict) - _KNOWN_KEYS
        if unknown:
            raise ConfigError(f"unknown scanner option(s): {', '.join(sorted(unknown))}")

        kwargs: dict[str, Any] = {}
        for key in ("keywords", "type_names", "literal_words"):
            if key in config_dict:
                kwargs[key] = _word_set(key, config_dict[key])

        if "symbols" in config_dict:
            symbols = config_dict["symbols"]
            if not isinstance(symbols, Mapping):
                raise ConfigError("'symbols' must be a table of character = category")
            table = _default_symbol_table()
            for ch, name in symbols.items():
                if not isinstance(ch, str) or len(ch) != 1:
                    raise ConfigError(f"symbol {ch!r} must be a single character")
                table[ch] = _category(name)
            kwargs["symbol_table"] = table

        if "fallback" in config_dict:
            kwargs["fallback"] = _category(config_dict["fallback"])

        if "quotes" in config_dict:
            quotes = config_dict["quotes"]
            if not isinstance(quotes, str):
                raise ConfigError("'quotes' must be a string of quote characters")
            for ch in quotes:
                if ch in "{}" or is_word_char(ch) or ch.isspace():
                    raise ConfigError(f"{ch!r} cannot be used as a quote character")
            kwargs["quotes"] = frozenset(quotes)

        if "escape" in config_dict:
            escape = config_dict["escape"]
            if not isinstance(escape, str) or len(escape) > 1:
                raise ConfigError("'escape' must be a single character or empty")
            kwargs["escape"] = escape or None

        if "comment_prefix" in config_dict:
            prefix = config_dict["comment_prefix"]
            if not isinstance(prefix, str) or "\n" in prefix:
                raise ConfigError("'comment_prefix' must be a single-line string")
            kwargs["comment_prefix"] = prefix or None

        for key in ("nest_blocks", "strict"):
            if key in config_dict:
                value = config_dict[key]
                if not isinstance(value, bool):
                    raise ConfigError(f"'{key}' must be true or false")
                kwargs[key] = value

        return cls(**kwargs)


_KNOWN_KEYS = frozenset(
    {
        "keywords",
        "type_names",
        "literal_words",
        "symbols",
        "fallback",
        "quotes",
        "escape",
        "comment_prefix",
        "nest_blocks",
        "strict",
    }
)


def _word_set(key: str, value: Any) -> frozenset[str]:
    if isinstance(value, (str, Mapping)) or not isinstance(value, Iterable):
        raise ConfigError(f"'{key}' must be a list of words")
    words = list(value)
    for word in words:
        if not isinstance(word, str) or not word:
            raise ConfigError(f"'{key}' entries must be non-empty strings")
    return frozenset(words)


def _category(name: Any) -> TokenType:
    if isinstance(name, TokenType):
        return name
    if not isinstance(name, str):
        raise ConfigError(f"category must be a name, got {name!r}")
    try:
        return TokenType[name.upper()]
    except KeyError:
        raise ConfigError(f"unknown token category {name!r}") from None


def load_config(config_path: Path | None) -> ScannerConfig:
    """Load a TOML config file, returning the defaults on a missing/absent file.

    The ``[scanner]`` table holds the options accepted by
    ScannerConfig.from_dict; a top-level ``[symbols]`` table is accepted as a
    shorthand for ``scanner.symbols``.
    """
    if config_path is None or not config_path.is_file():
        return ScannerConfig()

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    scanner = data.get("scanner", {})
    if not isinstance(scanner, dict):
        raise ConfigError("[scanner] must be a table")
    options = dict(scanner)
    symbols = data.get("symbols")
    if symbols is not None:
        if not isinstance(symbols, dict):
            raise ConfigError("[symbols] must be a table")
        nested = options.get("symbols", {})
        if not isinstance(nested, dict):
            raise ConfigError("'symbols' must be a table of character = category")
        options["symbols"] = {**nested, **symbols}

    logger.debug("loaded scanner config from %s", config_path)
    return ScannerConfig.from_dict(options)
