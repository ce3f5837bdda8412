"""Centralized error normalization for API responses.

Every error returned by the posts API passes through this module so that:
- Client errors carry a specific, human-readable message
- Backend failures pass the database's own message through unchanged
- Unexpected errors never leak stack traces
- Detailed info is logged for debugging
"""

import logging
from dataclasses import dataclass

from backend.app.core.logging import (
    EVENT_DB_READ_FAILED,
    EVENT_DB_WRITE_FAILED,
    EVENT_REQUEST_REJECTED,
    log_event,
)

logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Invalid JSON body."
INVALID_POST_ID_MESSAGE = "Invalid post id. Expected UUID."
POST_NOT_FOUND_MESSAGE = "Post not found."


@dataclass(frozen=True)
class NormalizedError:
    """Standardized error representation for API responses."""

    user_message: str
    error_category: str
    http_status: int = 500


def normalize_db_error(
    exc: Exception,
    *,
    operation: str,
    write: bool = True,
) -> NormalizedError:
    """Normalize a backend failure, passing its message through verbatim.

    Backend failures are never retried; the caller gets the backend's
    own error text with a 500 status.
    """
    error = NormalizedError(
        user_message=str(exc),
        error_category="db",
        http_status=500,
    )
    log_event(
        logger, "error", EVENT_DB_WRITE_FAILED if write else EVENT_DB_READ_FAILED,
        operation=operation,
        error_category=error.error_category,
        detail=str(exc),
    )
    return error


def normalize_validation_error(
    message: str,
    *,
    operation: str,
) -> NormalizedError:
    """Normalize a client-caused failure (bad JSON, bad id, bad field)."""
    log_event(
        logger, "info", EVENT_REQUEST_REJECTED,
        operation=operation,
        error_category="validation",
        reason=message,
    )
    return NormalizedError(
        user_message=message,
        error_category="validation",
        http_status=400,
    )


def normalize_unknown_error(
    exc: Exception,
    *,
    operation: str,
) -> NormalizedError:
    """Normalize an unexpected error into a safe generic message."""
    log_event(
        logger, "exception", "unknown_error",
        operation=operation,
        error_category="unknown",
        detail=f"{type(exc).__name__}: {exc}",
    )
    return NormalizedError(
        user_message="An unexpected error occurred. Please try again.",
        error_category="unknown",
        http_status=500,
    )
