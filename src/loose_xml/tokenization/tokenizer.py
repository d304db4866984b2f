"""Single-pass tokenizer for loose-xml documents.

Turns a source string into a pull-based stream of tokens. The tokenizer never
fails: unterminated quotes and comments simply run to the end of the input.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Iterator, Optional, Tuple

from .source import SourceView

WHITESPACE = frozenset(" \t\n\r")
PUNCTUATION = frozenset("<>=/")
NUL = "\0"

# Skipped constructs, tried in this order
DELIMITED_CONSTRUCTS: Tuple[Tuple[str, str], ...] = (
    ("<!--", "-->"),
    ("<!", ">"),
    ("<?", "?>"),
)

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    """Lexical token kinds."""

    EOF = auto()      # End of input
    OPEN = auto()     # <
    CLOSE = auto()    # >
    SLASH = auto()    # /
    EQUAL = auto()    # =
    STRING = auto()   # Quoted literal or bare run of characters


_SINGLE_CHAR_TOKENS: Dict[str, TokenKind] = {
    "<": TokenKind.OPEN,
    ">": TokenKind.CLOSE,
    "/": TokenKind.SLASH,
    "=": TokenKind.EQUAL,
}


@dataclass(frozen=True)
class Position:
    """Cursor position in the source text.

    ``line`` and ``column`` are 1-based, ``offset`` is the 0-based character
    index.
    """

    line: int
    column: int
    offset: int = 0

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"

    def to_dict(self) -> Dict[str, int]:
        """Convert position to a dictionary."""
        return {"line": self.line, "column": self.column, "offset": self.offset}


@dataclass(frozen=True)
class Token:
    """A lexical token and the source characters it covers."""

    kind: TokenKind
    view: Optional[SourceView] = None

    @property
    def text(self) -> str:
        """Token text: empty for EOF, the value for strings and punctuation."""
        if self.view is None:
            return ""
        return str(self.view)

    @property
    def is_eof(self) -> bool:
        """Check if this token marks the end of input."""
        return self.kind is TokenKind.EOF


EOF_TOKEN = Token(TokenKind.EOF)


class Tokenizer:
    """Pull-based tokenizer over an in-memory source string.

    ``next_token`` produces the next token, ``position`` reports the cursor
    without moving it and ``take`` consumes a single expected character, which
    is all the lookahead the grammar needs.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.tokens_generated = 0
        self._index = 0
        self._line = 1
        self._column = 1

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens until end of input, excluding the EOF token."""
        while True:
            token = self.next_token()
            if token.is_eof:
                return
            yield token

    @property
    def at_eof(self) -> bool:
        """Check if the cursor reached the end of the source."""
        return self._index >= len(self.source)

    def position(self) -> Position:
        """Return the current cursor position."""
        return Position(self._line, self._column, self._index)

    def take(self, expected: str) -> bool:
        """Consume ``expected`` if it is the next character.

        Args:
            expected: Single character to match

        Returns:
            True if the character was consumed
        """
        if not self.at_eof and self.source[self._index] == expected:
            self._advance()
            return True
        return False

    def next_token(self) -> Token:
        """Return the next token and advance past it."""
        self._skip_whitespace()

        if self.at_eof:
            return EOF_TOKEN

        start = self._index
        ch = self.source[start]
        self._advance()

        if ch == NUL:
            return EOF_TOKEN
        self.tokens_generated += 1

        kind = _SINGLE_CHAR_TOKENS.get(ch)
        if kind is not None:
            return Token(kind, SourceView(self.source, start, self._index))

        if ch == '"':
            value_start = self._index
            closed = False
            while not self.at_eof:
                if self._take_string('"'):
                    closed = True
                    break
                self._advance()
            value_stop = self._index - 1 if closed else self._index
            return Token(
                TokenKind.STRING, SourceView(self.source, value_start, value_stop)
            )

        while not self.at_eof and not _is_punctuation_or_whitespace(
            self.source[self._index]
        ):
            self._advance()
        return Token(TokenKind.STRING, SourceView(self.source, start, self._index))

    def _advance(self) -> None:
        """Consume one character, updating line and column."""
        if self.source[self._index] == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        self._index += 1

    def _take_string(self, text: str) -> bool:
        """Consume ``text`` if the source continues with it."""
        if not self.source.startswith(text, self._index):
            return False
        for _ in text:
            self._advance()
        return True

    def _skip_whitespace(self) -> None:
        """Skip whitespace, comments, declarations and processing instructions."""
        while not self.at_eof:
            if self.source[self._index] in WHITESPACE:
                self._advance()
                continue

            for opener, closer in DELIMITED_CONSTRUCTS:
                if self._take_string(opener):
                    start = self.position()
                    while not self.at_eof and not self._take_string(closer):
                        self._advance()
                    logger.debug(
                        "Skipped delimited construct",
                        extra={"opener": opener, "line": start.line},
                    )
                    break
            else:
                return


def _is_punctuation_or_whitespace(ch: str) -> bool:
    return ch in WHITESPACE or ch in PUNCTUATION
