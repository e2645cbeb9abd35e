"""Vocabulary listing endpoint: GET /vocabulary."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from jectlint.api.deps import get_document_store
from jectlint.api.schemas import VocabularyResponse, VocabularyWord
from jectlint.service.document_store import DocumentStore
from jectlint.vocabulary import describe

router = APIRouter()


@router.get("", response_model=VocabularyResponse)
async def list_vocabulary(
    store: DocumentStore = Depends(get_document_store),  # noqa: B008
) -> VocabularyResponse:
    """List the known words the server lints against."""
    options = store.options
    words = [
        VocabularyWord(word=w, category=describe(w) or "custom")
        for w in sorted(options.reserved_words)
    ]
    return VocabularyResponse(
        block_open_keyword=options.block_open_keyword,
        block_close_keyword=options.block_close_keyword,
        words=words,
    )
