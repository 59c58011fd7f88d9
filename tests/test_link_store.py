import logging
from contextlib import contextmanager

import pytest
from conftest import make_link
from sqlalchemy.exc import SQLAlchemyError

from shortlinks.db.models import KeyValue
from shortlinks.db.repo import link_sql
from shortlinks.db.repo.errors import StorageError
from shortlinks.db.repo.link_sql import SqlAlchemyLinkStore
from shortlinks.db.repo.link_store import LinkStore


def test_load_all_empty_when_nothing_persisted(store):
    assert store.load_all() == []


@pytest.mark.parametrize("n", [0, 1, 3])
def test_save_then_load_roundtrip(store, n):
    links = [make_link(f"code{i}", clicks=i) for i in range(n)]
    store.save_all(links)
    assert store.load_all() == links


def test_save_all_replaces_whole_collection(store):
    store.save_all([make_link("a"), make_link("b")])
    store.save_all([make_link("c")])
    assert [link.shortcode for link in store.load_all()] == ["c"]


def test_blob_is_single_row_under_storage_key(store, db_session):
    store.save_all([make_link("a")])
    store.save_all([make_link("a"), make_link("b")])
    rows = db_session.query(KeyValue).all()
    assert [r.key for r in rows] == ["shortLinks"]
    assert '"shortcode": "b"' in rows[0].value


def test_stores_with_different_keys_are_independent(db_session):
    a, b = SqlAlchemyLinkStore("one"), SqlAlchemyLinkStore("two")
    a.save_all([make_link("x")])
    assert b.load_all() == []


def test_find_by_shortcode(store):
    store.save_all([make_link("a"), make_link("b")])
    assert store.find_by_shortcode("b").shortcode == "b"
    assert store.find_by_shortcode("zzz") is None


def test_corrupt_blob_loads_as_empty_and_logs(store, db_session, caplog):
    caplog.set_level(logging.DEBUG, logger="shortlinks")
    db_session.add(KeyValue(key="shortLinks", value="{definitely not json"))
    db_session.commit()

    assert store.load_all() == []
    assert any("store_corrupt" in r.getMessage() and r.levelno == logging.ERROR for r in caplog.records)


def test_read_failure_loads_as_empty(monkeypatch, store, caplog):
    caplog.set_level(logging.DEBUG, logger="shortlinks")

    @contextmanager
    def broken_session():
        raise SQLAlchemyError("disk I/O error")
        yield  # pragma: no cover

    monkeypatch.setattr(link_sql, "get_session", broken_session)
    assert store.load_all() == []
    assert any("store_read_failed" in r.getMessage() for r in caplog.records)


def test_write_failure_raises_storage_error(monkeypatch, store):
    @contextmanager
    def broken_session():
        raise SQLAlchemyError("database is locked")
        yield  # pragma: no cover

    monkeypatch.setattr(link_sql, "get_session", broken_session)
    with pytest.raises(StorageError):
        store.save_all([make_link("a")])


def test_interleaved_snapshots_lose_the_first_update(store):
    # два «окна» читают один и тот же снимок, сохраняет каждое своё: выигрывает последнее
    store.save_all([make_link("base")])
    snapshot_a = store.load_all()
    snapshot_b = SqlAlchemyLinkStore().load_all()

    store.save_all([*snapshot_a, make_link("from_a")])
    SqlAlchemyLinkStore().save_all([*snapshot_b, make_link("from_b")])

    assert [link.shortcode for link in store.load_all()] == ["base", "from_b"]


class DummyLinkStore(LinkStore):
    def load_all(self):
        return super().load_all()

    def save_all(self, links):
        return super().save_all(links)


def test_abstract_methods_raise():
    s = DummyLinkStore()
    with pytest.raises(NotImplementedError):
        s.load_all()
    with pytest.raises(NotImplementedError):
        s.save_all([])
