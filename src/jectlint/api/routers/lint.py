"""Stateless lint endpoint: POST /lint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from jectlint.api.deps import get_document_store
from jectlint.api.schemas import LintRequest, OptionsPayload
from jectlint.engine.linter import Linter
from jectlint.models.diagnostic import LintReport
from jectlint.models.options import ConfigurationError, LintOptions
from jectlint.service.document_store import DocumentStore

router = APIRouter()


def _resolve_options(base: LintOptions, payload: OptionsPayload | None) -> LintOptions:
    """Apply request overrides on top of the server options."""
    if payload is None:
        return base
    changes: dict[str, Any] = {}
    words = set(base.reserved_words if payload.reserved_words is None else payload.reserved_words)
    words.update(payload.extra_reserved_words)
    changes["reserved_words"] = frozenset(words)
    if payload.block_open_keyword is not None:
        changes["block_open_keyword"] = payload.block_open_keyword
    if payload.block_close_keyword is not None:
        changes["block_close_keyword"] = payload.block_close_keyword
    if "line_comment_marker" in payload.model_fields_set:
        changes["line_comment_marker"] = payload.line_comment_marker
    if payload.string_delimiters is not None:
        changes["string_delimiters"] = tuple(payload.string_delimiters)
    if payload.declaration_keywords is not None:
        changes["declaration_keywords"] = tuple(payload.declaration_keywords)
    return base.with_overrides(**changes)


@router.post("", response_model=LintReport)
async def lint_document(
    body: LintRequest,
    store: DocumentStore = Depends(get_document_store),  # noqa: B008
) -> LintReport:
    """Lint a document without storing it."""
    try:
        options = _resolve_options(store.options, body.options)
    except ConfigurationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None
    return Linter(options).report(body.text)
