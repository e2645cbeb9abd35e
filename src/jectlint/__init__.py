"""jectlint: static checker for Ject block delimiters and unknown keywords."""

from jectlint.engine import Linter, lint
from jectlint.models import ConfigurationError, Diagnostic, LintOptions, LintReport, Severity

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "Diagnostic",
    "LintOptions",
    "LintReport",
    "Linter",
    "Severity",
    "__version__",
    "lint",
]
