from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from shortlinks.db.models import Base
from shortlinks.db.paths import db_url

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# batch-режим: SQLite не умеет ALTER COLUMN
_COMMON_OPTS = {"target_metadata": Base.metadata, "render_as_batch": True, "compare_type": True}


def _url() -> str:
    return config.get_main_option("sqlalchemy.url") or db_url()


def run_offline() -> None:
    context.configure(url=_url(), literal_binds=True, dialect_opts={"paramstyle": "named"}, **_COMMON_OPTS)
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    section = dict(config.get_section(config.config_ini_section) or {})
    section["sqlalchemy.url"] = _url()
    connectable = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, **_COMMON_OPTS)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
