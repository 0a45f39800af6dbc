"""
Main entrypoint for the ConnectApp API.

This module assembles the FastAPI application: it sets up logging,
CORS and the error envelope handler, includes the versioned routers
and initialises the database once at startup.  ``create_app`` builds
the app, which is then instantiated at module import time as ``app``
so it can be served directly::

    uvicorn connect_api.app.main:app --reload

The action endpoint is mounted twice: under ``/api/v1/actions`` and
under ``/api.php``, the path used by clients of the first deployment.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.endpoints import actions
from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.exceptions import ConnectAppError
from .core.logging_config import setup_logging
from .schemas.envelope import failure


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Apply migrations before the first request is accepted.  This
    # creates the database file if it does not exist.
    init_db()
    yield


async def connect_app_error_handler(request: Request, exc: ConnectAppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=failure(exc.message).render())


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the modules used
    # below can safely log messages.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # Errors raised outside the action handler, e.g. by the database
    # dependency, still leave as an envelope.
    app.add_exception_handler(ConnectAppError, connect_app_error_handler)

    app.include_router(v1_router, prefix="/api/v1")
    app.include_router(actions.router, prefix="/api.php", tags=["actions"])

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
