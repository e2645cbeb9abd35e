"""FastAPI application factory for jectlint."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from jectlint import __version__
from jectlint.api.deps import init_document_store, reset_document_store
from jectlint.api.middleware import RequestBodyLimitMiddleware, RequestTimingMiddleware
from jectlint.api.routers import documents, lint, vocabulary
from jectlint.api.schemas import HealthResponse
from jectlint.service.document_store import DocumentStore
from jectlint.settings import Settings

logger = logging.getLogger("jectlint.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Create the DocumentStore alongside the application."""
    settings: Settings = app.state.settings
    store = DocumentStore(settings.lint_options(), language_id=settings.language_id)
    init_document_store(store)
    try:
        yield
    finally:
        reset_document_store()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="jectlint",
        description="Reports unmatched block delimiters and unknown keywords in Ject scripts.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Middleware
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(RequestBodyLimitMiddleware)

    app.include_router(lint.router, prefix="/lint", tags=["lint"])
    app.include_router(documents.router, prefix="/documents", tags=["documents"])
    app.include_router(vocabulary.router, prefix="/vocabulary", tags=["vocabulary"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    return app


def main() -> None:
    """Run the REST API server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    # Fail fast on a bad options file before binding the port.
    settings.lint_options()
    logger.info(
        "jectlint API Server v%s starting (host=%s, port=%d, language=%s)",
        __version__, settings.api_server_host, settings.effective_port, settings.language_id,
    )

    uvicorn.run(
        "jectlint.api.app:create_app",
        factory=True,
        host=settings.api_server_host,
        port=settings.effective_port,
        log_level=settings.log_level.lower(),
    )
