"""Tokenization layer for loose-xml.

Key Components:
    Tokenizer: Pull-based tokenizer over an in-memory source string
    Token: A lexical token and the source characters it covers
    TokenKind: Enumeration of token kinds
    Position: Line/column/offset cursor position for error reporting
    SourceView: Zero-copy view of a range of the source string
"""

from .source import SourceView
from .tokenizer import (
    EOF_TOKEN,
    Position,
    Token,
    Tokenizer,
    TokenKind,
)

__all__ = [
    "EOF_TOKEN",
    "Position",
    "SourceView",
    "Token",
    "TokenKind",
    "Tokenizer",
]
