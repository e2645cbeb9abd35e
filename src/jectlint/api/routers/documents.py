"""Open-document endpoints mirroring an editor's open/change/close lifecycle."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from jectlint.api.deps import get_document_store
from jectlint.api.schemas import (
    DocumentListResponse,
    DocumentOpenRequest,
    DocumentResponse,
    DocumentUpdateRequest,
)
from jectlint.service.document_store import DocumentInfo, DocumentNotFoundError, DocumentStore

router = APIRouter()


def _document_response(info: DocumentInfo) -> DocumentResponse:
    """Convert a DocumentInfo dataclass to a Pydantic response."""
    d = asdict(info)
    d["diagnostics"] = info.diagnostics
    return DocumentResponse(**d)


def _not_found(uri: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Document '{uri}' not found")


@router.post("", response_model=DocumentResponse, status_code=201)
async def open_document(
    body: DocumentOpenRequest,
    store: DocumentStore = Depends(get_document_store),  # noqa: B008
) -> DocumentResponse:
    """Open a document and lint it when its language qualifies."""
    info = store.open(body.uri, body.text, language_id=body.language_id)
    return _document_response(info)


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    store: DocumentStore = Depends(get_document_store),  # noqa: B008
) -> DocumentListResponse:
    """List all open documents with their diagnostics."""
    return DocumentListResponse(
        documents=[_document_response(d) for d in store.list_documents()]
    )


@router.get("/{uri:path}", response_model=DocumentResponse)
async def get_document(
    uri: str,
    store: DocumentStore = Depends(get_document_store),  # noqa: B008
) -> DocumentResponse:
    try:
        info = store.get(uri)
    except DocumentNotFoundError:
        raise _not_found(uri) from None
    return _document_response(info)


@router.put("/{uri:path}", response_model=DocumentResponse)
async def update_document(
    uri: str,
    body: DocumentUpdateRequest,
    store: DocumentStore = Depends(get_document_store),  # noqa: B008
) -> DocumentResponse:
    """Replace the document text (change or save) and re-lint."""
    try:
        info = store.update(uri, body.text)
    except DocumentNotFoundError:
        raise _not_found(uri) from None
    return _document_response(info)


@router.delete("/{uri:path}", status_code=204)
async def close_document(
    uri: str,
    store: DocumentStore = Depends(get_document_store),  # noqa: B008
) -> None:
    """Close a document and clear its diagnostics."""
    try:
        store.close(uri)
    except DocumentNotFoundError:
        raise _not_found(uri) from None
