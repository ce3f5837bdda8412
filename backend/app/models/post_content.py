"""Pydantic models for the structured form of a post's ``content`` field."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class MediaKind(StrEnum):
    """Kinds of media a post can embed."""

    image = "image"
    video = "video"


class MediaItem(BaseModel):
    """An image or video reference; list position is carousel position."""

    id: str
    kind: MediaKind
    url: str


class ParsedContent(BaseModel):
    """Decoded ``content``: caption, published flag and ordered media."""

    body: str = ""
    published: bool = False
    media: list[MediaItem] = Field(default_factory=list)
