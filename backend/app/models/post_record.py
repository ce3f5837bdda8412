"""SQLAlchemy ORM model for the posts table."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from backend.app.db.base import Base


def _new_post_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(UTC)


class PostRecord(Base):
    """A gallery post; media lives JSON-encoded inside ``content``."""

    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_created_at", "created_at"),
        Index("ix_posts_profile_id", "profile_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=_new_post_id,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Owned by the profiles table of the hosting backend; not a local FK.
    profile_id: Mapped[str] = mapped_column(String(36), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
