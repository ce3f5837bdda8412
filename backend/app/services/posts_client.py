"""HTTP client for the posts API, used by the admin dashboard.

Wraps an ``httpx.Client`` so the same code runs against a live server or
an in-process ``fastapi.testclient.TestClient``.
"""

from __future__ import annotations

import logging

import httpx

from backend.app.core.settings import settings
from backend.app.models.post import PostRead
from backend.app.models.post_content import ParsedContent
from backend.app.services.content_codec import encode_content

logger = logging.getLogger(__name__)

API_BASE = f"http://{settings.api_host}:{settings.api_port}"


class PostsApiError(Exception):
    """Raised for any non-2xx response; ``str(exc)`` is the server's message."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


def _safe_error_detail(resp: httpx.Response, fallback: str) -> str:
    """Extract the ``error`` message from an API response, else *fallback*."""
    try:
        body = resp.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return fallback


class PostsClient:
    def __init__(self, http: httpx.Client) -> None:
        self.http = http

    @classmethod
    def from_settings(cls, timeout: float = 10) -> PostsClient:
        """Client for the API at the configured host/port."""
        return cls(httpx.Client(base_url=API_BASE, timeout=timeout))

    def _check(self, resp: httpx.Response, fallback: str) -> httpx.Response:
        if resp.is_success:
            return resp
        message = _safe_error_detail(resp, fallback)
        logger.warning(
            "posts_api_error: method=%s url=%s status=%d",
            resp.request.method,
            resp.request.url,
            resp.status_code,
        )
        raise PostsApiError(message, resp.status_code)

    def list_posts(self) -> list[PostRead]:
        resp = self._check(self.http.get("/posts"), "Unable to load posts.")
        return [PostRead.model_validate(item) for item in resp.json().get("data") or []]

    def get_post(self, post_id: str) -> PostRead:
        resp = self._check(self.http.get(f"/posts/{post_id}"), "Unable to load post.")
        return PostRead.model_validate(resp.json()["data"])

    def create_post(
        self, *, title: str, profile_id: str, content: str | None = None,
    ) -> PostRead:
        resp = self._check(
            self.http.post(
                "/posts",
                json={"title": title, "profile_id": profile_id, "content": content},
            ),
            "Unable to save post.",
        )
        return PostRead.model_validate(resp.json()["data"])

    def update_post(self, post_id: str, **fields: str | None) -> PostRead:
        """PUT only the given fields, e.g. ``update_post(pid, content=None)``."""
        resp = self._check(
            self.http.put(f"/posts/{post_id}", json=fields),
            "Unable to save post.",
        )
        return PostRead.model_validate(resp.json()["data"])

    def delete_post(self, post_id: str) -> None:
        self._check(self.http.delete(f"/posts/{post_id}"), "Unable to delete post.")

    def save_post(
        self,
        *,
        post_id: str | None,
        title: str,
        profile_id: str,
        content: ParsedContent,
    ) -> PostRead:
        """Save the admin editor's form: update when *post_id* is set, else create.

        The structured content is encoded before sending. On update the
        server ignores ``profile_id``; it is fixed at creation.
        """
        encoded = encode_content(content)
        if post_id is None:
            return self.create_post(title=title, profile_id=profile_id, content=encoded)
        return self.update_post(post_id, title=title, content=encoded)
