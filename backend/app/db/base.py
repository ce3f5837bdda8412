"""SQLAlchemy declarative base shared by the ORM models."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models; ``Base.metadata`` drives Alembic autogenerate."""
