"""Bring links.db to the latest schema at startup. No alembic.ini is needed."""

from __future__ import annotations

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from sqlalchemy import create_engine

from .paths import alembic_dir, db_url


def build_config(url: str | None = None) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(alembic_dir()))
    cfg.set_main_option("sqlalchemy.url", url or db_url())
    return cfg


def upgrade_to_head(url: str | None = None) -> None:
    """Idempotent: a database already at head is left untouched."""
    command.upgrade(build_config(url), "head")


def current_revision(url: str | None = None) -> str | None:
    """Revision stamped in alembic_version, None for a fresh file."""
    eng = create_engine(url or db_url())
    try:
        with eng.connect() as conn:
            return MigrationContext.configure(conn).get_current_revision()
    finally:
        eng.dispose()
