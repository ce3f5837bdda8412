"""Validation for inbound post payloads.

Request bodies arrive as untyped JSON. These functions are the only place
that inspects the raw shape; everything downstream works with the typed
:class:`PostCreate` / :class:`PostUpdate` models. Rules short-circuit on
the first failure and return ``(payload, error)`` where exactly one side
is ``None``.
"""

import re
from typing import Any

from backend.app.models.post import PostCreate, PostUpdate

_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

NOT_AN_OBJECT = "Request body must be a JSON object."
TITLE_REQUIRED = '"title" is required and must be a non-empty string.'
TITLE_NON_EMPTY = '"title" must be a non-empty string when provided.'
PROFILE_ID_INVALID = '"profile_id" is required and must be a valid UUID.'
CONTENT_INVALID = '"content" must be a string or null when provided.'
UPDATE_FIELD_REQUIRED = 'At least one field is required: "title" or "content".'


def is_uuid(value: object) -> bool:
    """Return True iff *value* is a hyphenated RFC-4122 v1–v5 UUID string.

    Case-insensitive, no normalization; surrounding whitespace fails.
    """
    return isinstance(value, str) and _UUID_RE.fullmatch(value) is not None


def _is_non_empty_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _as_object(body: Any) -> dict[str, Any] | None:
    """Return *body* as a key lookup, or ``None`` for null and primitives.

    A JSON array is an object with no keys.
    """
    if isinstance(body, dict):
        return body
    if isinstance(body, list):
        return {}
    return None


def validate_create_payload(
    body: Any,
) -> tuple[PostCreate | None, str | None]:
    """Validate a create request body.

    Returns the normalized payload (``title`` stripped, ``content``
    defaulted to ``None``) or the first error message.
    """
    body = _as_object(body)
    if body is None:
        return None, NOT_AN_OBJECT
    if not _is_non_empty_text(body.get("title")):
        return None, TITLE_REQUIRED
    if not is_uuid(body.get("profile_id")):
        return None, PROFILE_ID_INVALID
    content = body.get("content")
    if content is not None and not isinstance(content, str):
        return None, CONTENT_INVALID

    return PostCreate(
        title=body["title"].strip(),
        profile_id=body["profile_id"],
        content=content,
    ), None


def validate_update_payload(
    body: Any,
) -> tuple[PostUpdate | None, str | None]:
    """Validate a partial-update request body.

    Only keys present in *body* end up in the returned model's
    ``changes()``; ``{"content": null}`` clears content without touching
    the title. Keys other than ``title``/``content`` are ignored.
    """
    body = _as_object(body)
    if body is None:
        return None, NOT_AN_OBJECT
    if "title" not in body and "content" not in body:
        return None, UPDATE_FIELD_REQUIRED

    fields: dict[str, str | None] = {}
    if "title" in body:
        if not _is_non_empty_text(body["title"]):
            return None, TITLE_NON_EMPTY
        fields["title"] = body["title"].strip()
    if "content" in body:
        content = body["content"]
        if content is not None and not isinstance(content, str):
            return None, CONTENT_INVALID
        fields["content"] = content

    return PostUpdate(**fields), None
