"""
Main entrypoint for the Suvidhaa API.

This module assembles the FastAPI application: it sets up logging, builds
the document store, installs the exception handlers that give every error
response the ``{"message": ...}`` shape, and includes the API routers
under ``/api``.  The ``create_app`` function builds and configures the
app, which is then instantiated at module import time as ``app``, so it
can be served with::

    uvicorn suvidhaa_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.endpoints import health
from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import DocumentStore, StoreError, create_store
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc.detail, dict):
        content = exc.detail
    elif exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        # Raised by the router itself for paths no route matches.
        content = {"message": "API endpoint not found"}
    else:
        content = {"message": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request data", "errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Server error", "error": str(exc)},
    )


def create_app(settings: Optional[Settings] = None, store: Optional[DocumentStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the settings read from the
        environment.
    store : Optional[DocumentStore]
        Document store shared by all requests.  When omitted it is built
        from ``settings``: MongoDB if ``MONGODB_URI`` is set, otherwise the
        in-memory store.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # A store that cannot be reached is logged; the server keeps
        # listening and requests fail individually until it comes back.
        try:
            app.state.store.ping()
            app.state.store.ensure_indexes()
            logger.info("Document store connected")
        except StoreError as exc:
            logger.error("Document store connection error: %s", exc)
        yield

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else create_store(settings)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(api_router, prefix="/api")
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
