"""List operations behind the admin media editor.

All functions return a new list and leave their input untouched, so an
editor can keep the previous list around for undo.
"""

from __future__ import annotations

import uuid

from backend.app.models.post_content import MediaItem, MediaKind


def new_media_id() -> str:
    """Return a short random token, unique enough within one post."""
    return uuid.uuid4().hex[:8]


def add_media(items: list[MediaItem], kind: MediaKind | str) -> list[MediaItem]:
    """Append an empty-url item of *kind*; the url is filled in later."""
    return [*items, MediaItem(id=new_media_id(), kind=kind, url="")]


def update_media(
    items: list[MediaItem],
    media_id: str,
    *,
    kind: MediaKind | str | None = None,
    url: str | None = None,
) -> list[MediaItem]:
    """Replace ``kind`` and/or ``url`` on the item with *media_id*.

    Unknown ids leave the list unchanged.
    """
    changes: dict[str, object] = {}
    if kind is not None:
        changes["kind"] = MediaKind(kind)
    if url is not None:
        changes["url"] = url
    return [
        item.model_copy(update=changes) if item.id == media_id else item
        for item in items
    ]


def remove_media(items: list[MediaItem], media_id: str) -> list[MediaItem]:
    return [item for item in items if item.id != media_id]


def reorder_media(
    items: list[MediaItem], from_index: int, to_index: int,
) -> list[MediaItem]:
    """Move the item at *from_index* so it ends up at *to_index*.

    Raises:
        IndexError: If either index is outside the list.
    """
    if not 0 <= from_index < len(items) or not 0 <= to_index < len(items):
        raise IndexError(
            f"reorder out of range: from={from_index} to={to_index} len={len(items)}"
        )
    reordered = list(items)
    moved = reordered.pop(from_index)
    reordered.insert(to_index, moved)
    return reordered
