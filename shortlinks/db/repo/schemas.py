"""Data contracts (DTO) for the link registry. Expiry helpers only, no storage here."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Literal

from .errors import CreateError

ResolutionStatus = Literal["not_found", "expired", "active"]


@dataclass(slots=True, frozen=True)
class ClickEvent:
    timestamp: datetime
    source: str  # referrer origin or "direct"
    location: str  # origin that served the redirect


@dataclass(slots=True)
class Link:
    """
    One shortened URL.

    `expiry_time` is fixed at creation; `clicks` and `click_data` only grow together
    through `with_click`.
    """

    shortcode: str
    long_url: str
    creation_time: datetime
    expiry_time: datetime
    validity_minutes: int
    clicks: int = 0
    click_data: list[ClickEvent] = field(default_factory=list)

    def with_click(self, event: ClickEvent) -> Link:
        return replace(self, clicks=self.clicks + 1, click_data=[*self.click_data, event])


def is_expired(link: Link, now: datetime) -> bool:
    return now > link.expiry_time


@dataclass(slots=True, frozen=True)
class LinkSummary:
    shortcode: str
    short_url: str
    expiry_time: datetime


@dataclass(slots=True, frozen=True)
class CreateResult:
    summary: LinkSummary | None = None
    error: CreateError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, summary: LinkSummary) -> CreateResult:
        return cls(summary=summary)

    @classmethod
    def failure(cls, error: CreateError) -> CreateResult:
        return cls(error=error)


@dataclass(slots=True, frozen=True)
class Resolution:
    status: ResolutionStatus
    long_url: str | None = None  # only for "active"

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @classmethod
    def not_found(cls) -> Resolution:
        return cls("not_found")

    @classmethod
    def expired(cls) -> Resolution:
        return cls("expired")

    @classmethod
    def active(cls, long_url: str) -> Resolution:
        return cls("active", long_url)


@dataclass(slots=True, frozen=True)
class AggregateStats:
    total_links: int = 0
    total_clicks: int = 0
    active_links: int = 0
    expired_links: int = 0


@dataclass(slots=True, frozen=True)
class LinkView:
    """A stored link annotated for display."""

    link: Link
    is_expired: bool
    short_url: str


@dataclass(slots=True, frozen=True)
class StatsReport:
    totals: AggregateStats
    links: list[LinkView]  # newest first
    generated_at: datetime
