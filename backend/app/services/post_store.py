"""Persistence for posts.

Route handlers depend on the :class:`PostStore` protocol, never on
SQLAlchemy directly, so the backend can be swapped (or faked in tests)
through the ``get_post_store`` dependency. :class:`SqlPostStore` is the
production implementation; it commits per operation and never retries.
"""

from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.logging import (
    EVENT_POST_CREATED,
    EVENT_POST_DELETED,
    EVENT_POST_UPDATED,
    log_event,
)
from backend.app.models.post import PostCreate, PostRead, PostUpdate
from backend.app.models.post_record import PostRecord

logger = logging.getLogger(__name__)


class PostStoreError(Exception):
    """Raised when the backend fails an operation.

    ``str(exc)`` is the backend's own error message.
    """


class PostStore(Protocol):
    def list_posts(self) -> list[PostRead]: ...

    def create_post(self, payload: PostCreate) -> PostRead: ...

    def get_post(self, post_id: str) -> PostRead | None: ...

    def update_post(self, post_id: str, update: PostUpdate) -> PostRead | None: ...

    def delete_post(self, post_id: str) -> str | None: ...


def _backend_message(exc: SQLAlchemyError) -> str:
    """Return the driver's message without SQLAlchemy's statement/link suffix."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


class SqlPostStore:
    """:class:`PostStore` over a caller-supplied SQLAlchemy ``Session``."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PostStoreError(_backend_message(exc)) from exc

    def _refresh(self, record: PostRecord) -> None:
        try:
            self.db.refresh(record)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PostStoreError(_backend_message(exc)) from exc

    def _get_record(self, post_id: str) -> PostRecord | None:
        try:
            return self.db.get(PostRecord, post_id)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PostStoreError(_backend_message(exc)) from exc

    def list_posts(self) -> list[PostRead]:
        """Return every post, newest ``created_at`` first."""
        try:
            rows = (
                self.db.query(PostRecord)
                .order_by(PostRecord.created_at.desc())
                .all()
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PostStoreError(_backend_message(exc)) from exc
        return [PostRead.model_validate(row) for row in rows]

    def create_post(self, payload: PostCreate) -> PostRead:
        record = PostRecord(
            title=payload.title,
            profile_id=payload.profile_id,
            content=payload.content,
        )
        self.db.add(record)
        self._commit()
        self._refresh(record)
        log_event(
            logger, "info", EVENT_POST_CREATED,
            post_id=record.id,
            profile_id=record.profile_id,
            title_len=len(record.title),
            content_len=len(record.content or ""),
        )
        return PostRead.model_validate(record)

    def get_post(self, post_id: str) -> PostRead | None:
        record = self._get_record(post_id)
        if record is None:
            return None
        return PostRead.model_validate(record)

    def update_post(self, post_id: str, update: PostUpdate) -> PostRead | None:
        """Apply only the provided fields; ``None`` when the post does not exist."""
        record = self._get_record(post_id)
        if record is None:
            return None
        changes = update.changes()
        for field, value in changes.items():
            setattr(record, field, value)
        self._commit()
        self._refresh(record)
        log_event(
            logger, "info", EVENT_POST_UPDATED,
            post_id=post_id,
            fields=",".join(sorted(changes)),
        )
        return PostRead.model_validate(record)

    def delete_post(self, post_id: str) -> str | None:
        """Permanently delete a post; returns its id, or ``None`` if absent."""
        record = self._get_record(post_id)
        if record is None:
            return None
        self.db.delete(record)
        self._commit()
        log_event(logger, "info", EVENT_POST_DELETED, post_id=post_id)
        return post_id
