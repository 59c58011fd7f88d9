"""Engine and session factory for links.db."""

from __future__ import annotations

from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from .paths import db_url

# UI-коллбэки и поток авто-обновления статистики пишут в одну БД
SQLITE_BUSY_TIMEOUT_MS = 5000


def make_engine(url: str):
    """SQLite engine shared across threads; waits on a locked file instead of failing at once."""
    eng = create_engine(url, connect_args={"check_same_thread": False}, future=True)

    @event.listens_for(eng, "connect")
    def _on_connect(dbapi_conn, _record):
        cur = dbapi_conn.cursor()
        cur.execute(f"PRAGMA busy_timeout = {SQLITE_BUSY_TIMEOUT_MS}")
        cur.close()

    return eng


def make_session_factory(eng):
    return sessionmaker(bind=eng, autoflush=False, autocommit=False, future=True)


engine = make_engine(db_url())
SessionLocal = make_session_factory(engine)


@contextmanager
def get_session():
    """Session bound to links.db: commit on exit, rollback and re-raise on error."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
