"""Diagnostic records produced by the linter, with line/column spans."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


class DiagnosticCode(StrEnum):
    UNMATCHED_CLOSE = "UNMATCHED_CLOSE"
    UNMATCHED_OPEN = "UNMATCHED_OPEN"
    UNKNOWN_IDENTIFIER = "UNKNOWN_IDENTIFIER"


class Diagnostic(BaseModel):
    """A single defect, addressed by 0-based line and an exclusive column span."""

    line: int
    column_start: int = Field(alias="columnStart")
    column_end: int = Field(alias="columnEnd")
    message: str
    severity: Severity
    code: DiagnosticCode
    suggestions: list[str] = []

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.line, self.column_start)


class LintReport(BaseModel):
    """Ordered diagnostics for one document plus severity counts."""

    valid: bool = True
    diagnostics: list[Diagnostic] = []
    error_count: int = Field(0, alias="errorCount")
    warning_count: int = Field(0, alias="warningCount")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_diagnostics(cls, diagnostics: list[Diagnostic]) -> LintReport:
        errors = sum(1 for d in diagnostics if d.severity is Severity.ERROR)
        return cls(
            valid=errors == 0,
            diagnostics=list(diagnostics),
            error_count=errors,
            warning_count=len(diagnostics) - errors,
        )
