"""Line-oriented scanner and diagnostic engine."""

from jectlint.engine.linter import BlockFrame, Linter, lint
from jectlint.engine.scanner import ScannedLine, Scanner, SourceLine, Token, TokenKind, split_lines

__all__ = [
    "BlockFrame",
    "Linter",
    "ScannedLine",
    "Scanner",
    "SourceLine",
    "Token",
    "TokenKind",
    "lint",
    "split_lines",
]
