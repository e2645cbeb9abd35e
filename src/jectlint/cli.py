"""Command-line entry point: ``jectlint [options] FILE...``.

Exit codes: 0 when no errors were found (warnings allowed), 1 when any file
has an error diagnostic, 2 on configuration or I/O failure.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from jectlint import __version__
from jectlint.engine.linter import Linter
from jectlint.models.diagnostic import LintReport
from jectlint.models.options import ConfigurationError, LintOptions
from jectlint.render import TextRenderer, render_json, use_color
from jectlint.settings import Settings

logger = logging.getLogger("jectlint.cli")

EXIT_OK = 0
EXIT_ERRORS = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jectlint",
        description="Check Ject scripts for unmatched do/end blocks and unknown keywords.",
    )
    parser.add_argument("files", nargs="+", metavar="FILE", help="script paths ('-' for stdin)")
    parser.add_argument("--config", type=Path, help="YAML options file")
    parser.add_argument("--comment-marker", help="line-comment marker, e.g. '#'")
    parser.add_argument("--format", choices=("text", "json"), default="text")
    parser.add_argument(
        "--no-color", action="store_true", help="disable ANSI colors in text output"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _load_options(args: argparse.Namespace, settings: Settings) -> LintOptions:
    updates: dict[str, object] = {}
    if args.config is not None:
        updates["config_file"] = args.config
    if args.comment_marker is not None:
        updates["line_comment_marker"] = args.comment_marker
    return settings.model_copy(update=updates).lint_options()


def _read(path: str) -> str:
    """Read a script as UTF-8; undecodable bytes become U+FFFD."""
    if path == "-":
        data = sys.stdin.buffer.read()
    else:
        data = Path(path).read_bytes()
    return data.decode("utf-8", errors="replace")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings()
        logging.basicConfig(level=settings.log_level, stream=sys.stderr)
        options = _load_options(args, settings)
    except (ConfigurationError, ValidationError) as exc:
        sys.stderr.write(f"jectlint: configuration error: {exc}\n")
        return EXIT_USAGE

    linter = Linter(options)
    renderer = TextRenderer(sys.stdout, color=not args.no_color and use_color(sys.stdout))
    reports: dict[str, LintReport] = {}
    errors = warnings = 0
    failed = False

    for path in args.files:
        try:
            text = _read(path)
        except OSError as exc:
            sys.stderr.write(f"jectlint: cannot read '{path}': {exc.strerror or exc}\n")
            failed = True
            continue
        report = linter.report(text)
        logger.debug("%s: %d diagnostic(s)", path, len(report.diagnostics))
        reports[path] = report
        errors += report.error_count
        warnings += report.warning_count
        if args.format == "text":
            renderer.render("<stdin>" if path == "-" else path, text, report)

    if args.format == "json":
        render_json(reports, sys.stdout)
    else:
        renderer.summary(errors, warnings)

    if failed:
        return EXIT_USAGE
    return EXIT_ERRORS if errors else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
