"""FastAPI application factory."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from uicatalog import __version__
from uicatalog.api.routes import endpoint_directory, router
from uicatalog.catalog.engine import CatalogEngine
from uicatalog.config import Config
from uicatalog.errors import (
    CatalogError,
    NotFoundError,
    StoreIOError,
    UnknownEntityKindError,
    ValidationError,
)
from uicatalog.storage.document import DocumentStore, JsonDocumentStore

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[CatalogError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    UnknownEntityKindError: status.HTTP_400_BAD_REQUEST,
    StoreIOError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app(config: Config | None = None, store: DocumentStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application configuration, loaded from the environment if omitted
        store: Document store, a JSON file at config.db_path if omitted

    Returns:
        FastAPI: Configured application
    """
    config = config or Config.load()

    app = FastAPI(
        title="uicatalog API",
        description="Front-end project conventions: components, APIs, env vars, styles, state, hooks.",
        version=__version__,
    )
    app.state.engine = CatalogEngine(store or JsonDocumentStore(config.db_path))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.include_router(router)

    @app.get("/")
    async def root():
        """Directory of the available endpoints."""
        return endpoint_directory()

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
