"""Shared FastAPI dependencies for the posts routes."""

from typing import Any

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from backend.app.core.errors import (
    INVALID_JSON_MESSAGE,
    INVALID_POST_ID_MESSAGE,
    normalize_validation_error,
)
from backend.app.db.session import get_db
from backend.app.services.post_store import PostStore, SqlPostStore
from backend.app.services.validation import is_uuid


def get_post_store(db: Session = Depends(get_db)) -> PostStore:
    """Provide the request-scoped post store (override in tests)."""
    return SqlPostStore(db)


def valid_post_id(post_id: str, request: Request) -> str:
    """Reject a non-UUID ``{post_id}`` path segment before any other work."""
    if not is_uuid(post_id):
        error = normalize_validation_error(
            INVALID_POST_ID_MESSAGE,
            operation=f"{request.method} {request.url.path}",
        )
        raise HTTPException(status_code=error.http_status, detail=error.user_message)
    return post_id


async def read_json_body(request: Request) -> Any:
    """Parse the raw request body as JSON, untyped.

    The result is handed straight to the payload validators; a body that
    is not valid JSON (including an empty body) is rejected here.
    """
    try:
        return await request.json()
    except ValueError:
        error = normalize_validation_error(
            INVALID_JSON_MESSAGE,
            operation=f"{request.method} {request.url.path}",
        )
        raise HTTPException(status_code=error.http_status, detail=error.user_message)
