"""Lexical scanner for a small curly-brace language.

The token dump used while debugging lives in :mod:`curlex.debug`.
"""

from __future__ import annotations

from curlex.config import ScannerConfig, load_config
from curlex.errors import ConfigError, ScanError
from curlex.scanner import Scanner, split_statements, tokenize
from curlex.tokens import Position, Span, Token, TokenType

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "Position",
    "ScanError",
    "Scanner",
    "ScannerConfig",
    "Span",
    "Token",
    "TokenType",
    "load_config",
    "split_statements",
    "tokenize",
]
