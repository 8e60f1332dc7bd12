"""
Main entrypoint for the Contact Management API.

This module assembles the FastAPI application, sets up logging,
registers the error handlers that produce the ``{"errors": ...}``
envelope and includes the API router.  ``create_app`` builds the app,
which is then instantiated at module import time as ``app``::

    uvicorn contact_api.app.main:app --reload
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router as api_router
from .core.config import settings
from .core.db import init_db
from .core.errors import ApiError
from .core.logging_config import setup_logging
from .core.validation import format_errors

logger = logging.getLogger(__name__)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content={"errors": exc.errors}, headers=headers)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON, a non-object body or a bad path/query parameter.
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": format_errors(exc.errors())},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"errors": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"errors": "Internal server error"},
    )


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging, installs the exception handlers and mounts the
    API router below ``settings.api_prefix``.  Pending database
    migrations are applied on startup.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None, debug=settings.debug)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router, prefix=settings.api_prefix)

    @app.on_event("startup")
    async def startup_event() -> None:
        init_db()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
