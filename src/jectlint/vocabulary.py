"""Built-in Ject vocabulary: syntax words and built-in names."""

from __future__ import annotations

RESERVED_WORDS: frozenset[str] = frozenset(
    {
        "let",
        "print",
        "for",
        "in",
        "do",
        "end",
        "if",
        "else",
        "and",
        "or",
        "not",
        "range",
        "true",
        "false",
        "null",
    }
)

# Built-in functions and math constants.
BUILTIN_NAMES: frozenset[str] = frozenset(
    {
        "sum",
        "max",
        "min",
        "round",
        "sqrt",
        "pow",
        "abs",
        "len",
        "type_of",
        "trim",
        "upper",
        "PI",
        "E",
    }
)

DEFAULT_VOCABULARY: frozenset[str] = RESERVED_WORDS | BUILTIN_NAMES


def describe(word: str) -> str | None:
    """Return ``"reserved"``, ``"builtin"`` or None for an unknown word."""
    if word in RESERVED_WORDS:
        return "reserved"
    if word in BUILTIN_NAMES:
        return "builtin"
    return None
