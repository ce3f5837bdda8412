"""SQLAlchemy engine configuration.

The engine is created once per process from :mod:`settings` and reused by
every request; connection pooling is left to SQLAlchemy.
"""

import logging
from typing import Any

from sqlalchemy import create_engine, text

from backend.app.core.logging import EVENT_DB_INITIALIZED, log_event
from backend.app.core.settings import settings

logger = logging.getLogger(__name__)


def _engine_kwargs() -> dict[str, Any]:
    if settings.is_sqlite:
        return {"connect_args": {"check_same_thread": False}}  # required for SQLite
    return {"pool_pre_ping": True}


engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    **_engine_kwargs(),
)

log_event(logger, "info", EVENT_DB_INITIALIZED, url=settings.safe_database_url())


class DatabaseInitError(Exception):
    """Raised when the database cannot be initialized."""


def init_db() -> None:
    """Verify the database is accessible by executing a simple query.

    Called at startup so a misconfigured ``DATABASE_URL`` or unwritable
    ``APP_DB_PATH`` fails fast. Raises :class:`DatabaseInitError` with
    actionable guidance on failure.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("db_init_verified: url=%s", settings.safe_database_url())
    except Exception as exc:
        msg = (
            f"Cannot open database at '{settings.safe_database_url()}': {exc}. "
            f"Check DATABASE_URL or set APP_DB_PATH to a writable location."
        )
        logger.error("db_init_failed: %s", msg)
        raise DatabaseInitError(msg) from exc
