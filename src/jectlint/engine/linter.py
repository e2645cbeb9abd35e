"""Diagnostic engine: block-stack matching and vocabulary checks over scanned lines."""

from __future__ import annotations

import difflib
import logging
from dataclasses import dataclass

from jectlint.engine.scanner import ScannedLine, Scanner, Token, TokenKind
from jectlint.models.diagnostic import Diagnostic, DiagnosticCode, LintReport, Severity
from jectlint.models.options import LintOptions

logger = logging.getLogger("jectlint.engine")

_MAX_SUGGESTIONS = 3
_SUGGESTION_CUTOFF = 0.75
# Near-spelling lookup is skipped outside these word lengths.
_MIN_FUZZY_LENGTH = 3
_MAX_FUZZY_LENGTH = 32


def _deletion_keys(word: str) -> set[str]:
    """The word itself plus every string obtained by deleting one character."""
    keys = {word}
    keys.update(word[:i] + word[i + 1 :] for i in range(len(word)))
    return keys


@dataclass(frozen=True)
class BlockFrame:
    """An opener waiting for its closing keyword."""

    line: int
    start: int
    end: int


class Linter:
    """Lints Ject documents against a fixed vocabulary.

    Holds only immutable options, so one instance may serve any number of
    documents, including from several threads at once.  Each :meth:`lint`
    call is a pure function of the document text.
    """

    def __init__(self, options: LintOptions | None = None) -> None:
        self._options = options or LintOptions()
        self._scanner = Scanner(self._options)
        self._declarers = frozenset(self._options.declaration_keywords)
        self._folded: dict[str, list[str]] = {}
        self._near: dict[str, set[str]] = {}
        for word in sorted(self._options.reserved_words):
            self._folded.setdefault(word.casefold(), []).append(word)
            for key in _deletion_keys(word):
                self._near.setdefault(key, set()).add(word)

    @property
    def options(self) -> LintOptions:
        return self._options

    def lint(self, text: str) -> list[Diagnostic]:
        """Return diagnostics ordered by (line, column_start), ties in emission order."""
        lines = self._scanner.scan(text)
        diagnostics = self._check(lines)
        # list.sort is stable: same-position diagnostics keep scan order.
        diagnostics.sort(key=lambda d: d.sort_key)
        logger.debug("lint pass done (lines=%d, diagnostics=%d)", len(lines), len(diagnostics))
        return diagnostics

    def report(self, text: str) -> LintReport:
        return LintReport.from_diagnostics(self.lint(text))

    # -- internal ------------------------------------------------------------

    def _check(self, lines: list[ScannedLine]) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        stack: list[BlockFrame] = []
        declared: set[str] = set()
        suggestions: dict[str, list[str]] = {}

        for scanned in lines:
            previous: Token | None = None
            for token in scanned.tokens:
                if token.kind is TokenKind.BLOCK_OPEN:
                    stack.append(BlockFrame(token.line, token.start, token.end))
                elif token.kind is TokenKind.BLOCK_CLOSE:
                    if stack:
                        stack.pop()
                    else:
                        diagnostics.append(self._unmatched_close(token))
                elif token.kind is TokenKind.IDENTIFIER:
                    if self._declares(previous):
                        declared.add(token.text)
                    elif token.text not in self._options.reserved_words and (
                        token.text not in declared
                    ):
                        if token.text not in suggestions:
                            suggestions[token.text] = self._suggest(token.text)
                        diagnostics.append(
                            self._unknown_identifier(token, suggestions[token.text])
                        )
                previous = token

        # Leftover frames are unmatched openers, outermost first.
        diagnostics.extend(self._unmatched_open(frame) for frame in stack)
        return diagnostics

    def _declares(self, previous: Token | None) -> bool:
        return (
            previous is not None
            and previous.kind is TokenKind.IDENTIFIER
            and previous.text in self._declarers
        )

    def _unmatched_close(self, token: Token) -> Diagnostic:
        return Diagnostic(
            line=token.line,
            column_start=token.start,
            column_end=token.end,
            message=f"Unmatched '{self._options.block_close_keyword}'",
            severity=Severity.ERROR,
            code=DiagnosticCode.UNMATCHED_CLOSE,
        )

    def _unmatched_open(self, frame: BlockFrame) -> Diagnostic:
        opts = self._options
        return Diagnostic(
            line=frame.line,
            column_start=frame.start,
            column_end=frame.end,
            message=(
                f"Unmatched '{opts.block_open_keyword}' "
                f"(missing '{opts.block_close_keyword}')"
            ),
            severity=Severity.ERROR,
            code=DiagnosticCode.UNMATCHED_OPEN,
        )

    def _unknown_identifier(self, token: Token, suggestions: list[str]) -> Diagnostic:
        return Diagnostic(
            line=token.line,
            column_start=token.start,
            column_end=token.end,
            message=f"Unknown keyword: '{token.text}'",
            severity=Severity.WARNING,
            code=DiagnosticCode.UNKNOWN_IDENTIFIER,
            suggestions=list(suggestions),
        )

    def _suggest(self, word: str) -> list[str]:
        """'Did you mean?' candidates: case-insensitive matches, then near spellings.

        Near spellings are looked up through the one-deletion index built in
        ``__init__``, so the cost depends on the length of *word* and not on
        the size of the vocabulary.
        """
        exact = self._folded.get(word.casefold(), [])
        close: list[str] = []
        if _MIN_FUZZY_LENGTH <= len(word) <= _MAX_FUZZY_LENGTH:
            candidates: set[str] = set()
            for key in _deletion_keys(word):
                candidates.update(self._near.get(key, ()))
            candidates.discard(word)
            close = difflib.get_close_matches(
                word, sorted(candidates), n=_MAX_SUGGESTIONS, cutoff=_SUGGESTION_CUTOFF
            )
        merged = list(dict.fromkeys(exact + sorted(close)))
        return merged[:_MAX_SUGGESTIONS]


def lint(document_text: str, options: LintOptions | None = None) -> list[Diagnostic]:
    """Lint one document; see :class:`Linter`."""
    return Linter(options).lint(document_text)
