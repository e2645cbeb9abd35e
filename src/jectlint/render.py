"""Terminal rendering of diagnostics in GCC/Clang style.

    script.ject:3:5: warning[UNKNOWN_IDENTIFIER]: Unknown keyword: 'prnt'
        prnt x
        ^~~~
    help: did you mean 'print'?

Line and column are printed 1-based; the underline spans the exclusive
``column_end`` of the diagnostic.
"""

from __future__ import annotations

import json
import os
from typing import TextIO

from jectlint.engine.scanner import split_lines
from jectlint.models.diagnostic import Diagnostic, LintReport, Severity

_RESET = "\033[0m"
_BOLD = "\033[1m"
_RED = "\033[31m"
_MAGENTA = "\033[35m"
_GREEN = "\033[32m"


def use_color(stream: TextIO) -> bool:
    """Color only on a TTY and when NO_COLOR is unset."""
    try:
        is_tty = stream.isatty()
    except (AttributeError, ValueError):
        is_tty = False
    return is_tty and os.environ.get("NO_COLOR") is None


class TextRenderer:
    def __init__(self, stream: TextIO, color: bool = False) -> None:
        self.stream = stream
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, path: str, text: str, report: LintReport) -> None:
        lines = split_lines(text)
        for diagnostic in report.diagnostics:
            source = lines[diagnostic.line].text if diagnostic.line < len(lines) else ""
            self.render_one(path, source, diagnostic)

    def render_one(self, path: str, source_line: str, diagnostic: Diagnostic) -> None:
        color = _RED if diagnostic.severity is Severity.ERROR else _MAGENTA
        location = f"{path}:{diagnostic.line + 1}:{diagnostic.column_start + 1}"
        self.stream.write(
            f"{self._c(_BOLD)}{location}: {self._c(color)}{diagnostic.severity}"
            f"[{diagnostic.code}]:{self._c(_RESET)}{self._c(_BOLD)} "
            f"{diagnostic.message}{self._c(_RESET)}\n"
        )
        # Keep tabs so the caret lines up with the echoed source.
        pad = "".join("\t" if ch == "\t" else " " for ch in source_line[: diagnostic.column_start])
        width = max(1, diagnostic.column_end - diagnostic.column_start)
        self.stream.write(f"    {source_line}\n")
        self.stream.write(f"    {pad}{self._c(_GREEN)}^{'~' * (width - 1)}{self._c(_RESET)}\n")
        if diagnostic.suggestions:
            candidates = ", ".join(f"'{s}'" for s in diagnostic.suggestions)
            self.stream.write(f"help: did you mean {candidates}?\n")

    def summary(self, errors: int, warnings: int) -> None:
        if not errors and not warnings:
            return
        parts = []
        if errors:
            parts.append(f"{errors} error" + ("" if errors == 1 else "s"))
        if warnings:
            parts.append(f"{warnings} warning" + ("" if warnings == 1 else "s"))
        self.stream.write(f"{', '.join(parts)} generated.\n")


def render_json(reports: dict[str, LintReport], stream: TextIO) -> None:
    """Write ``{path: report}`` as JSON using the wire (camelCase) field names."""
    payload = {path: r.model_dump(mode="json", by_alias=True) for path, r in reports.items()}
    json.dump(payload, stream, indent=2)
    stream.write("\n")
