from datetime import timedelta

from conftest import ORIGIN, T0, make_link

from shortlinks.db.repo.schemas import AggregateStats


def test_compute_stats_empty_store(service):
    report = service.compute_stats()
    assert report.totals == AggregateStats(0, 0, 0, 0)
    assert report.links == []


def test_compute_stats_three_links_one_expired(service, store, clock):
    store.save_all(
        [
            make_link("a", created=T0, minutes=60, clicks=2),
            make_link("b", created=T0 + timedelta(minutes=1), minutes=5, clicks=0),
            make_link("c", created=T0 + timedelta(minutes=2), minutes=60, clicks=5),
        ]
    )
    clock.advance(minutes=10)  # "b" истекла в T0+6m

    report = service.compute_stats()

    assert report.totals == AggregateStats(total_links=3, total_clicks=7, active_links=2, expired_links=1)
    assert {v.link.shortcode: v.is_expired for v in report.links} == {"a": False, "b": True, "c": False}
    assert report.generated_at == clock.now


def test_compute_stats_newest_first(service, store):
    store.save_all(
        [
            make_link("old", created=T0),
            make_link("newest", created=T0 + timedelta(hours=2)),
            make_link("mid", created=T0 + timedelta(hours=1)),
        ]
    )
    assert [v.link.shortcode for v in service.compute_stats().links] == ["newest", "mid", "old"]


def test_compute_stats_ties_keep_insertion_order(service, store):
    store.save_all([make_link("first"), make_link("second"), make_link("third")])
    assert [v.link.shortcode for v in service.compute_stats().links] == ["first", "second", "third"]


def test_compute_stats_annotates_short_url(service, store):
    store.save_all([make_link("abc")])
    [view] = service.compute_stats().links
    assert view.short_url == f"{ORIGIN}/abc"


def test_expired_flag_is_derived_at_read_time(service, store, clock):
    store.save_all([make_link("a", minutes=1)])
    assert service.compute_stats().totals.active_links == 1
    clock.advance(minutes=2)
    assert service.compute_stats().totals.expired_links == 1
    # в хранилище «истёкшесть» не пишется
    assert store.load_all() == [make_link("a", minutes=1)]


def test_compute_stats_is_read_only(service, store, clock):
    store.save_all([make_link("a", clicks=2)])
    before = store.load_all()
    service.compute_stats()
    service.compute_stats()
    assert store.load_all() == before
