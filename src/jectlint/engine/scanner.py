"""Line scanner: splits source text and tags word, string and comment spans."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass
from enum import StrEnum

from jectlint.models.options import LintOptions

_LINE_BREAK_RE = re.compile(r"\r?\n")
_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_ESCAPE = "\\"
_WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_")


class TokenKind(StrEnum):
    BLOCK_OPEN = "block_open"
    BLOCK_CLOSE = "block_close"
    IDENTIFIER = "identifier"
    EXCLUDED = "excluded"


@dataclass(frozen=True)
class SourceLine:
    index: int
    text: str


@dataclass(frozen=True)
class Token:
    """A tagged span on one line.  ``end`` is exclusive."""

    kind: TokenKind
    text: str
    start: int
    end: int
    line: int


@dataclass(frozen=True)
class ScannedLine:
    source: SourceLine
    tokens: tuple[Token, ...]


def split_lines(text: str) -> list[SourceLine]:
    """Split on ``\\n`` or ``\\r\\n``; both produce the same logical lines."""
    return [SourceLine(i, raw) for i, raw in enumerate(_LINE_BREAK_RE.split(text))]


def _is_word_char(ch: str) -> bool:
    return ch in _WORD_CHARS


class Scanner:
    """Single left-to-right pass per line producing ordered tokens.

    Text inside string literals and after the line-comment marker becomes one
    ``EXCLUDED`` token so identifier-shaped substrings there are never linted.
    """

    def __init__(self, options: LintOptions | None = None) -> None:
        self._options = options or LintOptions()
        self._quotes = frozenset(self._options.string_delimiters)
        self._marker = self._options.line_comment_marker
        self._marker_is_word = self._marker is not None and _is_word_char(self._marker[-1])

    @property
    def options(self) -> LintOptions:
        return self._options

    def scan(self, text: str) -> list[ScannedLine]:
        return [self.scan_line(line) for line in split_lines(text)]

    def scan_line(self, line: SourceLine) -> ScannedLine:
        text = line.text
        length = len(text)
        tokens: list[Token] = []
        pos = 0
        while pos < length:
            ch = text[pos]
            if ch in self._quotes:
                end = self._string_end(text, pos)
                tokens.append(Token(TokenKind.EXCLUDED, text[pos:end], pos, end, line.index))
                pos = end
            elif self._marker_at(text, pos):
                tokens.append(Token(TokenKind.EXCLUDED, text[pos:], pos, length, line.index))
                pos = length
            elif _is_word_char(ch):
                end = pos + 1
                while end < length and _is_word_char(text[end]):
                    end += 1
                word = text[pos:end]
                # Runs starting with a digit are numbers, not identifiers.
                if _IDENTIFIER_RE.fullmatch(word):
                    tokens.append(Token(self._classify(word), word, pos, end, line.index))
                pos = end
            else:
                pos += 1
        return ScannedLine(line, tuple(tokens))

    # -- internal ------------------------------------------------------------

    def _classify(self, word: str) -> TokenKind:
        if word == self._options.block_open_keyword:
            return TokenKind.BLOCK_OPEN
        if word == self._options.block_close_keyword:
            return TokenKind.BLOCK_CLOSE
        return TokenKind.IDENTIFIER

    def _marker_at(self, text: str, pos: int) -> bool:
        marker = self._marker
        if marker is None or not text.startswith(marker, pos):
            return False
        if self._marker_is_word:
            after = pos + len(marker)
            return after >= len(text) or not _is_word_char(text[after])
        return True

    @staticmethod
    def _string_end(text: str, start: int) -> int:
        """Index just past the closing quote, or end of line if unterminated."""
        quote = text[start]
        pos = start + 1
        length = len(text)
        while pos < length:
            ch = text[pos]
            if ch == _ESCAPE:
                pos += 2
                continue
            if ch == quote:
                return pos + 1
            pos += 1
        return length
