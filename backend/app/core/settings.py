"""Application settings loaded from environment / .env file.

Config precedence (highest to lowest):
    1. Environment variables
    2. ``.env`` file in project root
    3. Defaults defined in this module

Credentials embedded in ``DATABASE_URL`` are never exposed in logs.
"""

from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url

# Project root is three levels up from this file (backend/app/core/settings.py)
_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_DEFAULT_DB_PATH = str(_PROJECT_ROOT / "data" / "app.db")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_host: str = "127.0.0.1"
    api_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # SQLite file used when DATABASE_URL is not set
    app_db_path: str = _DEFAULT_DB_PATH

    # Full SQLAlchemy URL for a hosted database, e.g. postgresql+psycopg://...
    # Left empty, it is derived from ``app_db_path``.
    database_url: str = ""

    @model_validator(mode="after")
    def _resolve_database_url(self) -> "Settings":
        """Derive the SQLite URL and ensure its parent directory exists."""
        if self.database_url:
            return self
        parent = Path(self.app_db_path).parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            msg = (
                f"Cannot create database directory '{parent}': {exc}. "
                f"Set APP_DB_PATH to a writable location."
            )
            raise ValueError(msg) from exc
        self.database_url = f"sqlite:///{self.app_db_path}"
        return self

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def safe_database_url(self) -> str:
        """Return the database URL with any password masked."""
        return make_url(self.database_url).render_as_string(hide_password=True)

    def safe_dump(self) -> dict[str, object]:
        """Return settings dict with secrets masked — safe for logging."""
        return {
            "api_host": self.api_host,
            "api_port": self.api_port,
            "debug": self.debug,
            "log_level": self.log_level,
            "database_url": self.safe_database_url(),
        }


settings = Settings()
