"""Carousel slides for the public gallery's post modal."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from backend.app.models.post import PostRead
from backend.app.models.post_content import MediaKind
from backend.app.services.content_codec import decode_content


class Slide(BaseModel):
    """One carousel entry; ``alt`` is only set for images."""

    type: Literal["image", "video"]
    src: str
    alt: str | None = None


def build_slides(post: PostRead) -> list[Slide]:
    """Return one slide per media item of *post*, in stored order."""
    slides = []
    for position, item in enumerate(decode_content(post.content).media, start=1):
        if item.kind == MediaKind.image:
            slides.append(
                Slide(type="image", src=item.url, alt=f"{post.title} slide {position}")
            )
        else:
            slides.append(Slide(type="video", src=item.url))
    return slides


def next_slide(current: int, count: int) -> int:
    """Index after *current*, wrapping to the first slide."""
    if count == 0:
        return 0
    return (current + 1) % count


def previous_slide(current: int, count: int) -> int:
    """Index before *current*, wrapping to the last slide."""
    if count == 0:
        return 0
    return (current - 1) % count
