"""
Main entrypoint for the Users API.

This module assembles the FastAPI application, sets up logging and
includes the API router.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``, e.g.::

    uvicorn users_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging
import sqlite3
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .api.router import router as api_router
from .core.config import Settings, settings
from .core.db import Database, init_db
from .core.logging_config import setup_logging
from .services.user_store import UnexpectedRowCountError, UserStore

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module level ``settings``.  Tests
        pass their own to point the app at a temporary database.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.  The database is
        migrated and the ``UserStore`` attached to ``app.state`` when
        the application starts.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level, app_settings.log_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        database = Database.from_settings(app_settings)
        logger.info("Using database %s", database.path)
        await init_db(database, app_settings)
        app.state.user_store = UserStore(database)
        yield

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.include_router(api_router)

    @app.exception_handler(UnexpectedRowCountError)
    async def row_count_error_handler(request: Request, exc: UnexpectedRowCountError) -> JSONResponse:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Inconsistent user data"},
        )

    @app.exception_handler(sqlite3.Error)
    async def database_error_handler(request: Request, exc: sqlite3.Error) -> JSONResponse:
        logger.exception("%s %s failed", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Database error"},
        )

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
