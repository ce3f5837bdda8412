"""CRUD endpoints for gallery posts.

Every non-2xx response carries ``{"error": message}``. Backend failures
are reported with the backend's own message and a 500; nothing is
retried.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from backend.app.api.deps import get_post_store, read_json_body, valid_post_id
from backend.app.core.errors import (
    POST_NOT_FOUND_MESSAGE,
    normalize_db_error,
    normalize_validation_error,
)
from backend.app.models.post import ErrorEnvelope, PostEnvelope, PostListEnvelope
from backend.app.services.post_store import PostStore, PostStoreError
from backend.app.services.validation import (
    validate_create_payload,
    validate_update_payload,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    responses={
        400: {"model": ErrorEnvelope, "description": "Invalid id, JSON or payload"},
        500: {"model": ErrorEnvelope, "description": "Backend failure"},
    },
)

_NOT_FOUND_RESPONSE: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorEnvelope, "description": "Post not found"},
}


def _backend_failure(
    exc: PostStoreError, *, operation: str, write: bool = True,
) -> HTTPException:
    error = normalize_db_error(exc, operation=operation, write=write)
    return HTTPException(status_code=error.http_status, detail=error.user_message)


def _rejected(message: str, *, operation: str) -> HTTPException:
    error = normalize_validation_error(message, operation=operation)
    return HTTPException(status_code=error.http_status, detail=error.user_message)


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail=POST_NOT_FOUND_MESSAGE)


@router.get("/posts", response_model=PostListEnvelope)
def list_posts(store: PostStore = Depends(get_post_store)) -> PostListEnvelope:
    """Return all posts, newest first."""
    try:
        posts = store.list_posts()
    except PostStoreError as exc:
        raise _backend_failure(exc, operation="list_posts", write=False)
    return PostListEnvelope(data=posts)


@router.post("/posts", response_model=PostEnvelope, status_code=201)
def create_post(
    body: Any = Depends(read_json_body),
    store: PostStore = Depends(get_post_store),
) -> PostEnvelope:
    """Validate and persist a new post."""
    payload, error = validate_create_payload(body)
    if error is not None:
        raise _rejected(error, operation="create_post")
    assert payload is not None  # guaranteed when error is None

    try:
        post = store.create_post(payload)
    except PostStoreError as exc:
        raise _backend_failure(exc, operation="create_post")
    return PostEnvelope(data=post)


@router.get(
    "/posts/{post_id}", response_model=PostEnvelope, responses=_NOT_FOUND_RESPONSE,
)
def get_post(
    post_id: str = Depends(valid_post_id),
    store: PostStore = Depends(get_post_store),
) -> PostEnvelope:
    """Return a single post by id."""
    try:
        post = store.get_post(post_id)
    except PostStoreError as exc:
        raise _backend_failure(exc, operation="get_post", write=False)
    if post is None:
        raise _not_found()
    return PostEnvelope(data=post)


@router.put(
    "/posts/{post_id}", response_model=PostEnvelope, responses=_NOT_FOUND_RESPONSE,
)
def update_post(
    post_id: str = Depends(valid_post_id),
    body: Any = Depends(read_json_body),
    store: PostStore = Depends(get_post_store),
) -> PostEnvelope:
    """Apply a partial update (``title`` and/or ``content``) to a post."""
    update, error = validate_update_payload(body)
    if error is not None:
        raise _rejected(error, operation="update_post")
    assert update is not None

    try:
        post = store.update_post(post_id, update)
    except PostStoreError as exc:
        raise _backend_failure(exc, operation="update_post")
    if post is None:
        raise _not_found()
    return PostEnvelope(data=post)


@router.delete(
    "/posts/{post_id}", status_code=204, responses=_NOT_FOUND_RESPONSE,
)
def delete_post(
    post_id: str = Depends(valid_post_id),
    store: PostStore = Depends(get_post_store),
) -> None:
    """Permanently delete a post."""
    try:
        deleted_id = store.delete_post(post_id)
    except PostStoreError as exc:
        raise _backend_failure(exc, operation="delete_post")
    if deleted_id is None:
        raise _not_found()
