"""
Main entrypoint for the Swap Orders API.

This module assembles the FastAPI application, sets up logging,
registers the error handlers and includes the versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn swap_api.app.main:app --reload

When no store is passed to ``create_app`` the application connects to
MongoDB on startup (``MONGODB_URI``) and closes the connection on
shutdown.  Tests pass a ``MemoryStore`` instead.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import connect_store
from .core.errors import CascadeDeleteError, NotFoundError, UniqueConstraintViolation, ValidationError
from .core.logging_config import setup_logging
from .core.validation import format_errors
from .repositories.base import DocumentStore

logger = logging.getLogger(__name__)


def _errors_response(errors) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"errors": errors}),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Translate application errors into status codes and JSON bodies."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = format_errors(exc.errors())
        logger.warning("Validation failed for %s %s: %s", request.method, request.url.path, errors)
        return _errors_response(errors)

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        logger.warning("Validation failed for %s %s: %s", request.method, request.url.path, exc)
        return _errors_response(exc.errors)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        logger.warning("%s", exc)
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)})

    # Duplicate e-mails are reported as a server error, as existing
    # clients of this API expect.
    @app.exception_handler(UniqueConstraintViolation)
    async def unique_handler(request: Request, exc: UniqueConstraintViolation) -> JSONResponse:
        logger.error("Error writing %s: %s", request.url.path, exc)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc)})

    @app.exception_handler(CascadeDeleteError)
    async def cascade_handler(request: Request, exc: CascadeDeleteError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc)})

    @app.exception_handler(PyMongoError)
    async def database_handler(request: Request, exc: PyMongoError) -> JSONResponse:
        logger.error("Database error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    @app.exception_handler(Exception)
    async def unexpected_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unexpected error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def create_app(store: Optional[DocumentStore] = None, verify_references: Optional[bool] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[DocumentStore]
        Store to serve requests from.  If omitted, a MongoDB store is
        created from the settings when the application starts.
    verify_references : Optional[bool]
        Reject swap orders naming users or products that do not exist.
        Defaults to ``settings.verify_references``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that startup can log.
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owns_store = app.state.store is None
        if owns_store:
            app.state.store = await connect_store(settings)
        logger.info("%s %s started", settings.project_name, settings.api_version)
        try:
            yield
        finally:
            if owns_store:
                await app.state.store.close()
                app.state.store = None

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.verify_references = settings.verify_references if verify_references is None else verify_references

    register_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.api_prefix)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
