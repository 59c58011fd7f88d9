"""JSON codec for the persisted link collection (camelCase keys, ISO-8601 UTC with `Z`)."""

from __future__ import annotations

import json
from datetime import UTC, datetime

from .errors import CorruptStoreError
from .schemas import ClickEvent, Link


def format_timestamp(dt: datetime) -> str:
    """2025-01-01T12:00:00.000Z"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    if not isinstance(value, str):
        raise TypeError(f"timestamp must be a string, got {type(value).__name__}")
    dt = datetime.fromisoformat(value.strip())
    # наивное время считаем UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def _require_int(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer")
    return value


def _require_str(value: object, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    return value


def click_to_dict(ev: ClickEvent) -> dict:
    return {"timestamp": format_timestamp(ev.timestamp), "source": ev.source, "location": ev.location}


def click_from_dict(d: dict) -> ClickEvent:
    return ClickEvent(
        timestamp=parse_timestamp(d["timestamp"]),
        source=_require_str(d.get("source", "direct"), "source"),
        location=_require_str(d.get("location", ""), "location"),
    )


def link_to_dict(link: Link) -> dict:
    return {
        "shortcode": link.shortcode,
        "longUrl": link.long_url,
        "creationTime": format_timestamp(link.creation_time),
        "expiryTime": format_timestamp(link.expiry_time),
        "validityMinutes": link.validity_minutes,
        "clicks": link.clicks,
        "clickData": [click_to_dict(ev) for ev in link.click_data],
    }


def link_from_dict(d: dict) -> Link:
    # старые записи могли не иметь clicks/clickData
    raw_clicks = d.get("clickData") or []
    if not isinstance(raw_clicks, list):
        raise TypeError("clickData must be a list")
    click_data = [click_from_dict(c) for c in raw_clicks]
    clicks = _require_int(d.get("clicks", len(click_data)), "clicks")
    if clicks != len(click_data):
        raise ValueError(f"clicks={clicks} but clickData has {len(click_data)} entries")
    return Link(
        shortcode=_require_str(d["shortcode"], "shortcode"),
        long_url=_require_str(d["longUrl"], "longUrl"),
        creation_time=parse_timestamp(d["creationTime"]),
        expiry_time=parse_timestamp(d["expiryTime"]),
        validity_minutes=_require_int(d["validityMinutes"], "validityMinutes"),
        clicks=clicks,
        click_data=click_data,
    )


def dumps_links(links: list[Link]) -> str:
    return json.dumps([link_to_dict(link) for link in links], ensure_ascii=False)


def loads_links(blob: str) -> list[Link]:
    """Decode the whole collection. Any malformed part fails the whole blob."""
    try:
        data = json.loads(blob)
        if not isinstance(data, list):
            raise TypeError("collection must be a JSON array")
        return [link_from_dict(item) for item in data]
    except (ValueError, TypeError, KeyError, AttributeError) as e:
        raise CorruptStoreError(str(e)) from e
