"""Pydantic and dataclass models shared by the engine and its hosts."""

from jectlint.models.diagnostic import Diagnostic, DiagnosticCode, LintReport, Severity
from jectlint.models.options import ConfigurationError, LintOptions

__all__ = [
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "LintOptions",
    "LintReport",
    "Severity",
]
