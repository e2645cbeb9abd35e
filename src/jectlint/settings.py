"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jectlint.config import OptionsLoader
from jectlint.models.options import LintOptions


class Settings(BaseSettings):
    """Configuration for the jectlint CLI and HTTP host adapter.

    Values are read from environment variables and from a ``.env`` file
    in the working directory.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shared
    log_level: str = "INFO"

    # Linting
    language_id: str = "ject"  # documents with other language tags are not linted
    config_file: Path | None = None  # YAML options file
    line_comment_marker: str | None = None  # overrides the options file when set

    # REST API
    api_server_host: str = "localhost"
    api_server_port: int = 8000
    port: int | None = None  # Cloud Run injects PORT; takes precedence over api_server_port

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"unknown log level {value!r}"
            raise ValueError(msg)
        return level

    @property
    def effective_port(self) -> int:
        """Return the port to listen on (PORT takes precedence)."""
        return self.port if self.port is not None else self.api_server_port

    def lint_options(self) -> LintOptions:
        """Build LintOptions from the options file, then apply env overrides.

        Raises ``ConfigurationError`` when the resulting options are invalid.
        """
        options = LintOptions()
        if self.config_file is not None:
            options = OptionsLoader(options).load(self.config_file)
        if self.line_comment_marker is not None:
            options = options.with_overrides(line_comment_marker=self.line_comment_marker)
        return options
