"""Shared test fixtures for jectlint."""

from __future__ import annotations

from pathlib import Path

import pytest

from jectlint.engine.linter import Linter
from jectlint.engine.scanner import Scanner
from jectlint.models.options import LintOptions
from jectlint.service.document_store import DocumentStore

FIXTURES_DIR = Path(__file__).parent / "fixtures"
SAMPLE_SCRIPT = FIXTURES_DIR / "sample.ject"
BROKEN_SCRIPT = FIXTURES_DIR / "broken.ject"
OPTIONS_FILE = FIXTURES_DIR / "options.yaml"


@pytest.fixture
def options() -> LintOptions:
    return LintOptions()


@pytest.fixture
def hash_options() -> LintOptions:
    """Options with '#' line comments, as in the Ject interpreter."""
    return LintOptions(line_comment_marker="#")


@pytest.fixture
def scanner(options: LintOptions) -> Scanner:
    return Scanner(options)


@pytest.fixture
def linter(options: LintOptions) -> Linter:
    return Linter(options)


@pytest.fixture
def document_store() -> DocumentStore:
    return DocumentStore(LintOptions(line_comment_marker="#"), language_id="ject")
