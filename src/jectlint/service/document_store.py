"""Open-document registry: lints documents on open/change and clears them on close."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime

from jectlint.engine.linter import Linter
from jectlint.models.diagnostic import Diagnostic
from jectlint.models.options import LintOptions

logger = logging.getLogger("jectlint.service")


class DocumentNotFoundError(KeyError):
    """Raised when a document URI is not open in the store."""


@dataclass
class DocumentInfo:
    """Public document state (returned by open/update/get/list)."""

    uri: str
    language_id: str
    version: int
    linted: bool
    diagnostics: list[Diagnostic]
    updated_at: datetime


@dataclass
class _Document:
    uri: str
    language_id: str
    text: str
    version: int = 1
    diagnostics: list[Diagnostic] = field(default_factory=list)
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class DocumentStore:
    """Tracks open documents and their latest diagnostics.  Thread-safe.

    Only documents tagged with ``language_id`` are linted; others are tracked
    with an empty result.  Linting happens outside the lock since each pass
    is pure; the lock only guards the registry.
    """

    def __init__(self, options: LintOptions | None = None, language_id: str = "ject") -> None:
        self._linter = Linter(options)
        self._language_id = language_id
        self._lock = threading.Lock()
        self._documents: dict[str, _Document] = {}

    @property
    def options(self) -> LintOptions:
        return self._linter.options

    @property
    def language_id(self) -> str:
        return self._language_id

    def qualifies(self, language_id: str) -> bool:
        return language_id == self._language_id

    # -- public API ----------------------------------------------------------

    def open(self, uri: str, text: str, language_id: str | None = None) -> DocumentInfo:
        """Register (or re-open) a document and lint it if its language qualifies."""
        lang = language_id or self._language_id
        diagnostics = self._lint(lang, text)
        doc = _Document(uri=uri, language_id=lang, text=text, diagnostics=diagnostics)
        with self._lock:
            self._documents[uri] = doc
            return self._info(doc)

    def update(self, uri: str, text: str) -> DocumentInfo:
        """Replace a document's text (edit or save) and re-lint it."""
        with self._lock:
            doc = self._documents.get(uri)
            if doc is None:
                raise DocumentNotFoundError(f"Document '{uri}' is not open")
            lang = doc.language_id
        diagnostics = self._lint(lang, text)
        with self._lock:
            doc = self._documents.get(uri)
            if doc is None:
                raise DocumentNotFoundError(f"Document '{uri}' was closed during update")
            doc.text = text
            doc.version += 1
            doc.diagnostics = diagnostics
            doc.updated_at = datetime.now(UTC)
            return self._info(doc)

    def get(self, uri: str) -> DocumentInfo:
        with self._lock:
            doc = self._documents.get(uri)
            if doc is None:
                raise DocumentNotFoundError(f"Document '{uri}' is not open")
            return self._info(doc)

    def close(self, uri: str) -> None:
        """Forget a document and its diagnostics."""
        with self._lock:
            if uri not in self._documents:
                raise DocumentNotFoundError(f"Document '{uri}' is not open")
            del self._documents[uri]

    def list_documents(self) -> list[DocumentInfo]:
        with self._lock:
            return [self._info(d) for d in sorted(self._documents.values(), key=lambda d: d.uri)]

    @property
    def open_count(self) -> int:
        with self._lock:
            return len(self._documents)

    # -- internal ------------------------------------------------------------

    def _lint(self, language_id: str, text: str) -> list[Diagnostic]:
        if not self.qualifies(language_id):
            logger.debug("skipping lint for language '%s'", language_id)
            return []
        return self._linter.lint(text)

    def _info(self, doc: _Document) -> DocumentInfo:
        return DocumentInfo(
            uri=doc.uri,
            language_id=doc.language_id,
            version=doc.version,
            linted=self.qualifies(doc.language_id),
            diagnostics=list(doc.diagnostics),
            updated_at=doc.updated_at,
        )
