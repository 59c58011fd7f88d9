import pytest
from sqlalchemy import text

from shortlinks.db import engine


@pytest.fixture
def tmp_engine(tmp_path, monkeypatch):
    eng = engine.make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setattr(engine, "engine", eng)
    monkeypatch.setattr(engine, "SessionLocal", engine.make_session_factory(eng))
    yield eng
    eng.dispose()


def test_busy_timeout_applied_on_connect(tmp_engine):
    with tmp_engine.connect() as conn:
        assert conn.execute(text("PRAGMA busy_timeout")).scalar_one() == engine.SQLITE_BUSY_TIMEOUT_MS


def test_get_session_commits(tmp_engine):
    with engine.get_session() as s:
        s.execute(text("CREATE TABLE t (x INTEGER)"))
        s.execute(text("INSERT INTO t VALUES (1)"))

    with engine.get_session() as s:
        assert s.execute(text("SELECT count(*) FROM t")).scalar_one() == 1


def test_get_session_rolls_back_and_reraises(tmp_engine):
    with engine.get_session() as s:
        s.execute(text("CREATE TABLE t (x INTEGER)"))

    with pytest.raises(RuntimeError, match="boom"), engine.get_session() as s:
        s.execute(text("INSERT INTO t VALUES (1)"))
        raise RuntimeError("boom")

    with engine.get_session() as s:
        assert s.execute(text("SELECT count(*) FROM t")).scalar_one() == 0
