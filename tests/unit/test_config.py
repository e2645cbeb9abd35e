"""Tests for YAML options files and environment settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from jectlint.config import _MAX_CONFIG_SIZE, OptionsLoader
from jectlint.models.options import ConfigurationError, LintOptions
from jectlint.settings import Settings
from jectlint.vocabulary import DEFAULT_VOCABULARY
from tests.conftest import OPTIONS_FILE


@pytest.fixture
def loader() -> OptionsLoader:
    return OptionsLoader()


class TestOptionsLoader:
    def test_empty_document_keeps_defaults(self, loader: OptionsLoader) -> None:
        assert loader.load_string("") == LintOptions()

    def test_fixture_file(self, loader: OptionsLoader) -> None:
        options = loader.load(OPTIONS_FILE)
        assert options.line_comment_marker == "#"
        assert options.reserved_words == DEFAULT_VOCABULARY | {"total"}

    def test_replace_vocabulary(self, loader: OptionsLoader) -> None:
        options = loader.load_string("reserved_words: [foo, bar]\n")
        assert options.reserved_words == frozenset({"foo", "bar"})

    def test_replace_and_extend(self, loader: OptionsLoader) -> None:
        yaml = "reserved_words: [foo]\nextra_reserved_words: [baz]\n"
        assert loader.load_string(yaml).reserved_words == frozenset({"foo", "baz"})

    def test_keywords_and_delimiters(self, loader: OptionsLoader) -> None:
        yaml = (
            "block_open_keyword: begin\n"
            "block_close_keyword: finish\n"
            "string_delimiters: ['\"', \"'\"]\n"
            "declaration_keywords: [var]\n"
        )
        options = loader.load_string(yaml)
        assert (options.block_open_keyword, options.block_close_keyword) == ("begin", "finish")
        assert options.string_delimiters == ('"', "'")
        assert options.declaration_keywords == ("var",)

    def test_null_comment_marker(self) -> None:
        loader = OptionsLoader(LintOptions(line_comment_marker="#"))
        assert loader.load_string("line_comment_marker: null\n").line_comment_marker is None

    def test_base_options_are_extended(self) -> None:
        base = LintOptions(reserved_words=frozenset({"a"}))
        options = OptionsLoader(base).load_string("extra_reserved_words: [b]\n")
        assert options.reserved_words == frozenset({"a", "b"})

    @pytest.mark.parametrize(
        ("yaml", "match"),
        [
            ("colour: red\n", "unknown option"),
            ("- a\n- b\n", "mapping"),
            ("reserved_words: print\n", "list of strings"),
            ("reserved_words: [true, print]\n", "list of strings"),
            ("block_open_keyword: 3\n", "must be a string"),
            ("line_comment_marker: [a]\n", "must be a string"),
            ("block_open_keyword: end\n", "must differ"),
            ("key: [unclosed\n", "invalid YAML"),
        ],
    )
    def test_invalid_options(self, loader: OptionsLoader, yaml: str, match: str) -> None:
        with pytest.raises(ConfigurationError, match=match):
            loader.load_string(yaml)

    def test_anchors_rejected(self, loader: OptionsLoader) -> None:
        yaml = "reserved_words: &w [a]\nextra_reserved_words: *w\n"
        with pytest.raises(ConfigurationError, match="anchors"):
            loader.load_string(yaml)

    def test_oversized_file_rejected(self, loader: OptionsLoader) -> None:
        yaml = "# " + "x" * _MAX_CONFIG_SIZE + "\n"
        with pytest.raises(ConfigurationError, match="maximum size"):
            loader.load_string(yaml)

    def test_missing_file(self, loader: OptionsLoader, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Cannot read"):
            loader.load(tmp_path / "absent.yaml")

    def test_error_names_the_file(self, loader: OptionsLoader, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("block_close_keyword: do\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="bad.yaml"):
            loader.load(path)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.language_id == "ject"
        assert settings.lint_options() == LintOptions()

    def test_effective_port(self) -> None:
        assert Settings(_env_file=None, api_server_port=9000).effective_port == 9000
        assert Settings(_env_file=None, api_server_port=9000, port=8080).effective_port == 8080

    def test_config_file_and_marker_override(self) -> None:
        settings = Settings(_env_file=None, config_file=OPTIONS_FILE, line_comment_marker="//")
        options = settings.lint_options()
        assert options.line_comment_marker == "//"
        assert "total" in options.reserved_words

    def test_log_level_is_normalised(self) -> None:
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError, match="unknown log level"):
            Settings(_env_file=None, log_level="LOUD")

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LANGUAGE_ID", "jectscript")
        monkeypatch.setenv("LINE_COMMENT_MARKER", "#")
        settings = Settings(_env_file=None)
        assert settings.language_id == "jectscript"
        assert settings.lint_options().line_comment_marker == "#"
