import os
import tempfile
from contextlib import contextmanager
from datetime import UTC, datetime, timedelta

# engine.py создаёт SQLite-файл при импорте: уводим его из реального профиля пользователя
os.environ.setdefault("SHORTLINKS_DATA_DIR", tempfile.mkdtemp(prefix="shortlinks-tests-"))

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from shortlinks.db.models import Base  # noqa: E402
from shortlinks.db.repo import link_sql  # noqa: E402
from shortlinks.db.repo.link_service import LinkService  # noqa: E402
from shortlinks.db.repo.link_sql import SqlAlchemyLinkStore  # noqa: E402
from shortlinks.db.repo.schemas import ClickEvent, Link  # noqa: E402

T0 = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)
ORIGIN = "http://short.test"


class FakeClock:
    """Управляемое «сейчас» для LinkService(now_fn=...)."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


def make_link(code: str, *, created: datetime = T0, minutes: int = 30, clicks: int = 0, url: str | None = None) -> Link:
    events = [
        ClickEvent(timestamp=created + timedelta(seconds=i + 1), source="direct", location=ORIGIN) for i in range(clicks)
    ]
    return Link(
        shortcode=code,
        long_url=url or f"https://example.com/{code}",
        creation_time=created,
        expiry_time=created + timedelta(minutes=minutes),
        validity_minutes=minutes,
        clicks=clicks,
        click_data=events,
    )


@pytest.fixture(scope="function")
def db_session():
    """Создаёт чистую in-memory SQLite БД для каждого теста."""
    engine = create_engine("sqlite:///:memory:", echo=False, future=True)
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture(autouse=True)
def patch_get_session(monkeypatch, db_session):

    @contextmanager
    def fake_get_session():
        yield db_session

    monkeypatch.setattr(link_sql, "get_session", fake_get_session)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return SqlAlchemyLinkStore()


@pytest.fixture
def service(store, clock):
    return LinkService(store, origin=ORIGIN, now_fn=clock)
