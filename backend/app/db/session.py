"""Per-request database sessions."""

from collections.abc import Generator

from sqlalchemy.orm import Session, sessionmaker

from backend.app.db.engine import engine

SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request, closed after the response."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
