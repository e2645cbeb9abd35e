"""Linter options, validated once at construction."""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from jectlint.vocabulary import DEFAULT_VOCABULARY

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class ConfigurationError(ValueError):
    """Raised when linter options would make matching ill-defined."""


@dataclass(frozen=True)
class LintOptions:
    """Immutable configuration shared by every lint pass.

    ``reserved_words`` defines what is "known"; the block keywords define the
    delimiter pair tracked on the block stack.  ``line_comment_marker`` of
    None means the language has no line comments and all text is significant.
    """

    reserved_words: frozenset[str] = DEFAULT_VOCABULARY
    block_open_keyword: str = "do"
    block_close_keyword: str = "end"
    line_comment_marker: str | None = None
    string_delimiters: tuple[str, ...] = ('"',)
    declaration_keywords: tuple[str, ...] = field(default=("let", "for"))

    def __post_init__(self) -> None:
        # Normalise collection types so equal configs compare and hash equal.
        object.__setattr__(
            self, "reserved_words", _as_words("reserved_words", self.reserved_words, frozenset)
        )
        object.__setattr__(
            self, "string_delimiters", _as_words("string_delimiters", self.string_delimiters, tuple)
        )
        object.__setattr__(
            self,
            "declaration_keywords",
            _as_words("declaration_keywords", self.declaration_keywords, tuple),
        )
        self._validate()

    def _validate(self) -> None:
        for name in ("block_open_keyword", "block_close_keyword"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ConfigurationError(f"'{name}' must be a non-empty string")
            if not _IDENTIFIER_RE.fullmatch(value):
                raise ConfigurationError(
                    f"'{name}' must be a single word ([A-Za-z_][A-Za-z0-9_]*), got {value!r}"
                )
        if self.block_open_keyword == self.block_close_keyword:
            raise ConfigurationError(
                f"Block keywords must differ (both are '{self.block_open_keyword}')"
            )

        marker = self.line_comment_marker
        if marker is not None and (not isinstance(marker, str) or not marker.strip()):
            raise ConfigurationError("'line_comment_marker' must be a non-empty string or None")
        if marker in (self.block_open_keyword, self.block_close_keyword):
            raise ConfigurationError(f"Comment marker {marker!r} collides with a block keyword")

        for quote in self.string_delimiters:
            if len(quote) != 1 or quote.isspace() or quote.isalnum() or quote == "_":
                raise ConfigurationError(
                    f"String delimiter {quote!r} must be a single punctuation character"
                )
            if marker is not None and marker.startswith(quote):
                raise ConfigurationError(
                    f"String delimiter {quote!r} collides with comment marker {marker!r}"
                )

        for keyword in self.declaration_keywords:
            if not _IDENTIFIER_RE.fullmatch(keyword):
                raise ConfigurationError(f"Declaration keyword {keyword!r} is not a word")

    def with_overrides(self, **changes: Any) -> LintOptions:
        """Return a validated copy with the given fields replaced."""
        try:
            return dataclasses.replace(self, **changes)
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from None


def _as_words(name: str, value: Any, kind: type) -> Any:
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise ConfigurationError(f"'{name}' must be a collection of strings")
    items = list(value)
    for item in items:
        if not isinstance(item, str):
            raise ConfigurationError(f"'{name}' entries must be strings, got {item!r}")
    if kind is tuple:
        # Keep first-seen order, drop duplicates.
        return tuple(dict.fromkeys(items))
    return frozenset(items)
