"""API request/response Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from jectlint.models.diagnostic import Diagnostic


class OptionsPayload(BaseModel):
    """Per-request option overrides for POST /lint.  Unset fields keep server defaults."""

    reserved_words: list[str] | None = Field(None, alias="reservedWords")
    extra_reserved_words: list[str] = Field([], alias="extraReservedWords")
    block_open_keyword: str | None = Field(None, alias="blockOpenKeyword")
    block_close_keyword: str | None = Field(None, alias="blockCloseKeyword")
    line_comment_marker: str | None = Field(None, alias="lineCommentMarker")
    string_delimiters: list[str] | None = Field(None, alias="stringDelimiters")
    declaration_keywords: list[str] | None = Field(None, alias="declarationKeywords")

    model_config = {"populate_by_name": True}


class LintRequest(BaseModel):
    """Request body for POST /lint."""

    text: str = Field(description="Full document text to lint")
    options: OptionsPayload | None = None


class DocumentOpenRequest(BaseModel):
    """Request body for POST /documents."""

    uri: str
    text: str
    language_id: str | None = Field(None, alias="languageId")

    model_config = {"populate_by_name": True}


class DocumentUpdateRequest(BaseModel):
    """Request body for PUT /documents/{uri}."""

    text: str


class DocumentResponse(BaseModel):
    """Current diagnostics for an open document."""

    uri: str
    language_id: str = Field(alias="languageId")
    version: int
    linted: bool
    diagnostics: list[Diagnostic] = []
    updated_at: datetime = Field(alias="updatedAt")

    model_config = {"populate_by_name": True}


class DocumentListResponse(BaseModel):
    """Response for GET /documents."""

    documents: list[DocumentResponse] = []


class VocabularyWord(BaseModel):
    word: str
    category: str


class VocabularyResponse(BaseModel):
    """Response for GET /vocabulary."""

    block_open_keyword: str = Field(alias="blockOpenKeyword")
    block_close_keyword: str = Field(alias="blockCloseKeyword")
    words: list[VocabularyWord] = []

    model_config = {"populate_by_name": True}


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = ""
