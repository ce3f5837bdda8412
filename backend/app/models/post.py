"""Pydantic models for the posts API: validated payloads and response envelopes."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class PostCreate(BaseModel):
    """Normalized create payload produced by ``validate_create_payload``."""

    title: str
    profile_id: str
    content: str | None = None


class PostUpdate(BaseModel):
    """Partial update produced by ``validate_update_payload``.

    Only fields passed to the constructor count as provided, so an
    explicit ``content=None`` (clear the content) is distinguishable from
    an absent ``content`` (leave it untouched). ``profile_id`` is not
    updatable.
    """

    title: str | None = None
    content: str | None = None

    def changes(self) -> dict[str, str | None]:
        """Return only the fields that were provided, keyed by column name."""
        return self.model_dump(exclude_unset=True)


class PostRead(BaseModel):
    """A persisted post as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    content: str | None = None
    profile_id: str
    created_at: datetime


class PostEnvelope(BaseModel):
    """``{"data": Post}`` response body."""

    data: PostRead


class PostListEnvelope(BaseModel):
    """``{"data": [Post, ...]}`` response body."""

    data: list[PostRead]


class ErrorEnvelope(BaseModel):
    """``{"error": message}`` response body for every non-2xx outcome."""

    error: str
