"""YAML options files, loaded with ruamel.yaml and validated into LintOptions."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from jectlint.models.options import ConfigurationError, LintOptions

# ---------------------------------------------------------------------------
# Safety limits
# ---------------------------------------------------------------------------

_MAX_CONFIG_SIZE = 256_000  # characters
_MAX_DEPTH = 5

# Anchor definitions (&name) outside quoted strings; options files never need them.
_ANCHOR_RE = re.compile(r"(?:^|[\s\-:\[,])&(\w+)", re.MULTILINE)

_LIST_KEYS = (
    "reserved_words",
    "extra_reserved_words",
    "string_delimiters",
    "declaration_keywords",
)
_STRING_KEYS = ("block_open_keyword", "block_close_keyword")
_KNOWN_KEYS = frozenset(_LIST_KEYS + _STRING_KEYS + ("line_comment_marker",))


class OptionsLoader:
    """Reads an options mapping from YAML and builds :class:`LintOptions`.

    Keys mirror the ``LintOptions`` fields; ``extra_reserved_words`` extends
    the base vocabulary instead of replacing it.
    """

    def __init__(self, base: LintOptions | None = None) -> None:
        self._base = base or LintOptions()
        self._yaml = YAML(typ="safe", pure=True)
        self._yaml.max_depth = _MAX_DEPTH

    def load(self, path: Path) -> LintOptions:
        try:
            with path.open("r", encoding="utf-8") as handle:
                content = handle.read()
        except OSError as exc:
            raise ConfigurationError(f"Cannot read options file '{path}': {exc}") from None
        return self.load_string(content, filename=str(path))

    def load_string(self, content: str, filename: str = "<string>") -> LintOptions:
        self._check_safety(content, filename)
        try:
            data = self._yaml.load(content)
        except YAMLError as exc:
            raise ConfigurationError(f"{filename}: invalid YAML: {exc}") from None
        if data is None:
            return self._base
        if not isinstance(data, dict):
            raise ConfigurationError(f"{filename}: options must be a mapping")
        return self._build(data, filename)

    # -- internal ------------------------------------------------------------

    @staticmethod
    def _check_safety(content: str, filename: str) -> None:
        if len(content) > _MAX_CONFIG_SIZE:
            raise ConfigurationError(
                f"{filename}: options file exceeds maximum size "
                f"({len(content):,} chars > {_MAX_CONFIG_SIZE:,} limit)"
            )
        if _ANCHOR_RE.search(content):
            raise ConfigurationError(f"{filename}: YAML anchors/aliases are not supported")

    def _build(self, data: dict[str, Any], filename: str) -> LintOptions:
        unknown = sorted(str(k) for k in data if k not in _KNOWN_KEYS)
        if unknown:
            raise ConfigurationError(f"{filename}: unknown option(s): {', '.join(unknown)}")

        changes: dict[str, Any] = {}
        for key in _LIST_KEYS:
            if key in data:
                changes[key] = _string_list(data[key], key, filename)
        for key in _STRING_KEYS:
            if key in data:
                value = data[key]
                if not isinstance(value, str):
                    raise ConfigurationError(f"{filename}: '{key}' must be a string")
                changes[key] = value
        if "line_comment_marker" in data:
            marker = data["line_comment_marker"]
            if marker is not None and not isinstance(marker, str):
                raise ConfigurationError(f"{filename}: 'line_comment_marker' must be a string")
            changes["line_comment_marker"] = marker

        extra = changes.pop("extra_reserved_words", [])
        words = frozenset(changes.get("reserved_words", self._base.reserved_words))
        changes["reserved_words"] = words | frozenset(extra)
        if "string_delimiters" in changes:
            changes["string_delimiters"] = tuple(changes["string_delimiters"])
        if "declaration_keywords" in changes:
            changes["declaration_keywords"] = tuple(changes["declaration_keywords"])

        try:
            return self._base.with_overrides(**changes)
        except ConfigurationError as exc:
            raise ConfigurationError(f"{filename}: {exc}") from None


def _string_list(value: Any, key: str, filename: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(f"{filename}: '{key}' must be a list of strings")
    return list(value)
