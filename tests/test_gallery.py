"""Tests for gallery slide building and carousel navigation."""

from datetime import datetime

from backend.app.models.post import PostRead
from backend.app.models.post_content import MediaItem, ParsedContent
from backend.app.services.content_codec import encode_content
from backend.app.services.gallery import Slide, build_slides, next_slide, previous_slide


def _post(content: str | None) -> PostRead:
    return PostRead(
        id="00000000-0000-4000-8000-000000000001",
        title="Trip",
        content=content,
        profile_id="00000000-0000-4000-8000-000000000002",
        created_at=datetime(2025, 5, 1, 10, 0, 0),
    )


class TestBuildSlides:
    def test_slides_follow_media_order(self) -> None:
        content = encode_content(ParsedContent(media=[
            MediaItem(id="v", kind="video", url="https://x/v.mp4"),
            MediaItem(id="i", kind="image", url="https://x/i.jpg"),
        ]))
        assert build_slides(_post(content)) == [
            Slide(type="video", src="https://x/v.mp4"),
            Slide(type="image", src="https://x/i.jpg", alt="Trip slide 2"),
        ]

    def test_no_content(self) -> None:
        assert build_slides(_post(None)) == []

    def test_legacy_text(self) -> None:
        assert build_slides(_post("just a caption")) == []


class TestNavigation:
    def test_next_wraps(self) -> None:
        assert next_slide(0, 3) == 1
        assert next_slide(2, 3) == 0

    def test_previous_wraps(self) -> None:
        assert previous_slide(1, 3) == 0
        assert previous_slide(0, 3) == 2

    def test_empty_carousel(self) -> None:
        assert next_slide(0, 0) == 0
        assert previous_slide(0, 0) == 0
