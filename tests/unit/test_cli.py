"""Tests for the command-line entry point and text rendering."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from jectlint.cli import EXIT_ERRORS, EXIT_OK, EXIT_USAGE, main
from jectlint.engine.linter import lint
from jectlint.models.diagnostic import LintReport
from jectlint.render import TextRenderer
from tests.conftest import BROKEN_SCRIPT, OPTIONS_FILE, SAMPLE_SCRIPT


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # Keep a developer's .env or env vars out of CLI runs.
    monkeypatch.chdir(tmp_path)
    for name in ("LINE_COMMENT_MARKER", "CONFIG_FILE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestTextRenderer:
    def test_caret_underlines_span(self) -> None:
        out = io.StringIO()
        text = "do\n  prnt x"
        TextRenderer(out).render("s.ject", text, LintReport.from_diagnostics(lint(text)))
        lines = out.getvalue().splitlines()
        assert lines[0] == "s.ject:1:1: error[UNMATCHED_OPEN]: Unmatched 'do' (missing 'end')"
        assert lines[1] == "    do"
        assert lines[2] == "    ^~"
        assert lines[3] == "s.ject:2:3: warning[UNKNOWN_IDENTIFIER]: Unknown keyword: 'prnt'"
        assert lines[4] == "      prnt x"
        assert lines[5] == "      ^~~~"
        assert lines[6] == "help: did you mean 'print'?"

    def test_tabs_preserved_in_padding(self) -> None:
        out = io.StringIO()
        text = "\tend"
        TextRenderer(out).render("s.ject", text, LintReport.from_diagnostics(lint(text)))
        assert out.getvalue().splitlines()[2] == "    \t^~~"

    def test_summary(self) -> None:
        out = io.StringIO()
        renderer = TextRenderer(out)
        renderer.summary(0, 0)
        renderer.summary(1, 2)
        assert out.getvalue() == "1 error, 2 warnings generated.\n"

    def test_no_escape_codes_without_color(self) -> None:
        out = io.StringIO()
        TextRenderer(out, color=False).render("s", "end", LintReport.from_diagnostics(lint("end")))
        assert "\033[" not in out.getvalue()


class TestMain:
    def test_clean_file_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["--comment-marker", "#", str(SAMPLE_SCRIPT)])
        assert code == EXIT_OK
        assert capsys.readouterr().out == ""

    def test_errors_exit_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["--no-color", str(BROKEN_SCRIPT)])
        assert code == EXIT_ERRORS
        out = capsys.readouterr().out
        assert f"{BROKEN_SCRIPT}:8:1: error[UNMATCHED_CLOSE]: Unmatched 'end'" in out
        assert out.endswith("1 error, 1 warning generated.\n")

    def test_warnings_only_exit_zero(self, tmp_path: Path) -> None:
        script = tmp_path / "w.ject"
        script.write_text("foo bar\n", encoding="utf-8")
        assert main([str(script)]) == EXIT_OK

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["--format", "json", str(BROKEN_SCRIPT)])
        payload = json.loads(capsys.readouterr().out)
        report = payload[str(BROKEN_SCRIPT)]
        assert report["errorCount"] == 1
        assert report["diagnostics"][1] == {
            "line": 7,
            "columnStart": 0,
            "columnEnd": 3,
            "message": "Unmatched 'end'",
            "severity": "error",
            "code": "UNMATCHED_CLOSE",
            "suggestions": [],
        }

    def test_config_file(self) -> None:
        assert main(["--config", str(OPTIONS_FILE), str(SAMPLE_SCRIPT)]) == EXIT_OK

    def test_invalid_config_exits_two(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        bad = tmp_path / "bad.yaml"
        bad.write_text("block_open_keyword: end\n", encoding="utf-8")
        assert main(["--config", str(bad), str(SAMPLE_SCRIPT)]) == EXIT_USAGE
        assert "configuration error" in capsys.readouterr().err

    def test_invalid_log_level_exits_two(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        assert main([str(SAMPLE_SCRIPT)]) == EXIT_USAGE
        err = capsys.readouterr().err
        assert "configuration error" in err
        assert "unknown log level" in err

    def test_comment_marker_equal_to_keyword_exits_two(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["--comment-marker", "end", str(SAMPLE_SCRIPT)]) == EXIT_USAGE
        assert "block keyword" in capsys.readouterr().err

    def test_missing_file_exits_two(self, tmp_path: Path) -> None:
        assert main([str(tmp_path / "nope.ject")]) == EXIT_USAGE

    def test_invalid_utf8_is_replaced(self, tmp_path: Path) -> None:
        script = tmp_path / "bin.ject"
        script.write_bytes(b"print \xff\xfe\ndo\nend\n")
        assert main([str(script)]) == EXIT_OK

    def test_stdin(self, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"end\n")))
        assert main(["--no-color", "-"]) == EXIT_ERRORS
        assert capsys.readouterr().out.startswith("<stdin>:1:1: error")
