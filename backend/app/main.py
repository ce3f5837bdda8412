"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.posts import router as posts_router
from backend.app.core.logging import (
    EVENT_APP_START,
    EVENT_CONFIG_LOADED,
    log_event,
    setup_logging,
)
from backend.app.core.settings import settings
from backend.app.db.engine import init_db
from backend.app.db.migrations import run_migrations

setup_logging(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    log_event(logger, "info", EVENT_APP_START)
    log_event(logger, "info", EVENT_CONFIG_LOADED, **settings.safe_dump())
    init_db()
    run_migrations()
    logger.info("Post Gallery API ready")
    yield
    logger.info("Post Gallery API shutting down")


app = FastAPI(
    title="Post Gallery API",
    version="0.1.0",
    description="CRUD API behind the public gallery and the admin dashboard.",
    lifespan=lifespan,
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    """Render every HTTP error as ``{"error": message}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler: log details, return safe generic message."""
    from backend.app.core.errors import normalize_unknown_error

    error = normalize_unknown_error(exc, operation=f"{request.method} {request.url.path}")
    return JSONResponse(
        status_code=error.http_status,
        content={"error": error.user_message},
    )


app.include_router(health_router, tags=["health"])
app.include_router(posts_router, tags=["posts"])
