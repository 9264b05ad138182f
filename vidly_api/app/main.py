"""
Main entrypoint for the Vidly API.

This module assembles the FastAPI application, sets up logging and
includes the versioned router under ``/api``.  The ``create_app``
function builds and configures the app, which is then instantiated at
module import time as ``app``, e.g.::

    uvicorn vidly_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.exceptions import ValidationError
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def first_validation_message(errors: Sequence[Any]) -> str:
    """Describe the first pydantic error as ``"<field>: <message>"``.

    The ``body``/``query`` prefix of the error location is dropped, so a
    short genre name reads ``name: String should have at least 5
    characters``.
    """
    if not errors:
        return ValidationError.default_message
    error = errors[0]
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    message = error.get("msg", ValidationError.default_message)
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Apply migrations before the first request.  This creates the
    # database file if it does not exist.
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging, mounts the v1 routes under ``/api``, maps
    request validation failures to 400 responses and applies database
    migrations on startup through ``lifespan``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.include_router(v1_router, prefix="/api")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = ValidationError(first_validation_message(exc.errors()))
        logger.debug("Rejected %s %s: %s", request.method, request.url.path, error)
        return JSONResponse(status_code=error.status_code, content={"detail": str(error)})

    return app


app = create_app()
