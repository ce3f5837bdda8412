"""Tests for the Alembic migration scripts and the startup runner."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from backend.app.core.logging import (
    EVENT_DB_MIGRATION_FAILED,
    EVENT_DB_MIGRATION_STARTED,
    EVENT_DB_MIGRATION_SUCCEEDED,
    setup_logging,
)
from backend.app.db import migrations
from backend.app.db.migrations import MigrationError, _get_alembic_cfg, get_head_revision
from sqlalchemy import create_engine, inspect, text

HEAD = "a7c1e2f3d4b5"


def test_single_head_creates_posts() -> None:
    assert get_head_revision() == HEAD


@pytest.fixture()
def scratch_db(tmp_path: Path) -> Iterator[tuple[Config, str]]:
    """Alembic config pointed at an empty SQLite file instead of the app database."""
    url = f"sqlite:///{tmp_path / 'migrate.db'}"
    cfg = _get_alembic_cfg()
    cfg.set_main_option("sqlalchemy.url", url)
    try:
        yield cfg, url
    finally:
        # env.py runs fileConfig() from alembic.ini
        setup_logging()


class TestUpgrade:
    def test_upgrade_head_builds_posts_table(self, scratch_db: tuple[Config, str]) -> None:
        cfg, url = scratch_db
        command.upgrade(cfg, "head")

        engine = create_engine(url)
        try:
            inspector = inspect(engine)
            columns = {col["name"]: col for col in inspector.get_columns("posts")}
            assert set(columns) == {"id", "title", "content", "profile_id", "created_at"}
            assert columns["content"]["nullable"] is True
            assert columns["title"]["nullable"] is False
            assert inspector.get_pk_constraint("posts")["constrained_columns"] == ["id"]

            indexes = {ix["name"]: ix["column_names"] for ix in inspector.get_indexes("posts")}
            assert indexes["ix_posts_created_at"] == ["created_at"]
            assert indexes["ix_posts_profile_id"] == ["profile_id"]

            with engine.connect() as conn:
                version = conn.execute(text("SELECT version_num FROM alembic_version")).scalar()
            assert version == HEAD
        finally:
            engine.dispose()

    def test_downgrade_base_drops_posts_table(self, scratch_db: tuple[Config, str]) -> None:
        cfg, url = scratch_db
        command.upgrade(cfg, "head")
        command.downgrade(cfg, "base")

        engine = create_engine(url)
        try:
            assert "posts" not in inspect(engine).get_table_names()
        finally:
            engine.dispose()


class TestRunMigrations:
    def test_already_at_head_logs_and_skips(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture,
    ) -> None:
        monkeypatch.setattr(migrations, "get_current_revision", lambda: HEAD)

        def _unexpected(*_args: object) -> None:
            raise AssertionError("upgrade should not run")

        monkeypatch.setattr(migrations.command, "upgrade", _unexpected)
        with caplog.at_level(logging.INFO):
            migrations.run_migrations()

        assert f"{EVENT_DB_MIGRATION_STARTED}: current={HEAD} head={HEAD}" in caplog.text
        assert f"{EVENT_DB_MIGRATION_SUCCEEDED}: head={HEAD} applied=False" in caplog.text

    def test_failure_logged_and_raised(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture,
    ) -> None:
        monkeypatch.setattr(migrations, "get_current_revision", lambda: None)

        def _boom(*_args: object) -> None:
            raise RuntimeError("disk I/O error")

        monkeypatch.setattr(migrations.command, "upgrade", _boom)
        with caplog.at_level(logging.INFO), pytest.raises(MigrationError, match="disk I/O error"):
            migrations.run_migrations()

        assert f"{EVENT_DB_MIGRATION_FAILED}: current=None target=head" in caplog.text
