"""Encode/decode a post's ``content`` text field.

Structured content is stored as compact JSON::

    {"body":"caption","published":true,"media":[{"id":"a1","kind":"image","url":"https://..."}]}

Older posts hold free-form text in ``content``. Decoding never raises:
anything that is not a JSON object is treated as a caption-only record,
so legacy content degrades gracefully.
"""

from __future__ import annotations

import json
from typing import Any

from backend.app.models.post_content import MediaItem, MediaKind, ParsedContent

_MEDIA_KINDS = frozenset(kind.value for kind in MediaKind)


def _is_truthy(value: Any) -> bool:
    """Truthiness as the admin editor applies it: only null, false, 0 and "" are false.

    Unlike Python, an empty list or object counts as true.
    """
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0 and value == value
    return True


def _is_media_entry(item: Any) -> bool:
    return (
        isinstance(item, dict)
        and isinstance(item.get("id"), str)
        and item.get("kind") in _MEDIA_KINDS
        and isinstance(item.get("url"), str)
    )


def decode_content(raw: str | None) -> ParsedContent:
    """Decode a stored ``content`` value into :class:`ParsedContent`.

    ``None`` or ``""`` yields the empty default. Malformed entries inside
    ``media`` are dropped individually; kept urls are stripped.

    JSON that parses to something other than an object (``"42"``,
    ``"[1]"``, ``"\"s\""``) is not structured content: the raw text becomes
    the body, the same as for text that is not JSON at all. Earlier admin
    builds decoded such values to an empty body instead.
    """
    if not raw:
        return ParsedContent()

    try:
        parsed = json.loads(raw)
    except (ValueError, RecursionError):
        return ParsedContent(body=raw)
    if not isinstance(parsed, dict):
        return ParsedContent(body=raw)

    body = parsed.get("body")
    raw_media = parsed.get("media")
    media = []
    if isinstance(raw_media, list):
        media = [
            MediaItem(id=item["id"], kind=item["kind"], url=item["url"].strip())
            for item in raw_media
            if _is_media_entry(item)
        ]

    return ParsedContent(
        body=body if isinstance(body, str) else "",
        published=_is_truthy(parsed.get("published")),
        media=media,
    )


def encode_content(content: ParsedContent) -> str:
    """Serialize *content* to the stored JSON form.

    Media entries whose url is empty after stripping are dropped; the rest
    keep their order and are written exactly as given.
    """
    media = [
        item.model_dump(mode="json")
        for item in content.media
        if item.url.strip()
    ]
    return json.dumps(
        {"body": content.body, "published": content.published, "media": media},
        separators=(",", ":"),
        ensure_ascii=False,
    )
