"""Business rules of the link registry on top of LinkStore."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from shortlinks.db.repo.errors import CreateError, StorageError
from shortlinks.db.repo.link_store import LinkStore
from shortlinks.db.repo.schemas import (
    AggregateStats,
    ClickEvent,
    CreateResult,
    Link,
    LinkSummary,
    LinkView,
    Resolution,
    StatsReport,
    is_expired,
)
from shortlinks.logging_utils import log_event
from shortlinks.settings import (
    DEFAULT_VALIDITY_MINUTES,
    DIRECT_SOURCE,
    MAX_VALIDITY_MINUTES,
    SHORTCODE_ALPHABET,
    SHORTCODE_LENGTH,
)
from shortlinks.settings import origin as default_origin
from shortlinks.validation import is_valid_shortcode, is_valid_url


def utcnow() -> datetime:
    """Aware UTC now, truncated to milliseconds (the precision we persist)."""
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond - now.microsecond % 1000)


def _is_valid_validity(value: object) -> bool:
    # верхняя граница держит expiry_time в пределах datetime
    return isinstance(value, int) and not isinstance(value, bool) and 0 < value <= MAX_VALIDITY_MINUTES


class LinkService:
    """
    Shortcode generation, validation, expiry, click accounting and statistics.

    Every operation re-reads the store; nothing is cached between calls.
    Validation failures come back as `CreateResult.error`, never as exceptions.
    """

    def __init__(
        self,
        store: LinkStore,
        *,
        origin: str | None = None,
        logger: logging.Logger | None = None,
        now_fn: Callable[[], datetime] = utcnow,
        rng: random.Random | None = None,
    ):
        self.store = store
        self.origin = (origin if origin is not None else default_origin()).rstrip("/")
        self.logger = logger
        self._now = now_fn
        self._rng = rng or random.SystemRandom()

    # ---------- helpers ----------

    def short_url(self, shortcode: str) -> str:
        return f"{self.origin}/{shortcode}"

    @staticmethod
    def is_valid_url(candidate: object) -> bool:
        return is_valid_url(candidate)

    def _reject(self, error: CreateError, long_url: str) -> CreateResult:
        log_event(self.logger, "info", "component", f"create_reject reason={error} url={long_url!r}")
        return CreateResult.failure(error)

    # ---------- operations ----------

    def generate_shortcode(self, snapshot: list[Link] | None = None) -> str:
        """Random 6-char code, redrawn until unused in `snapshot` (read from the store if omitted)."""
        links = snapshot if snapshot is not None else self.store.load_all()
        taken = {link.shortcode for link in links}
        while True:
            code = "".join(self._rng.choices(SHORTCODE_ALPHABET, k=SHORTCODE_LENGTH))
            if code not in taken:
                return code

    def create(
        self,
        long_url: str,
        custom_shortcode: str | None = None,
        validity_minutes: int = DEFAULT_VALIDITY_MINUTES,
    ) -> CreateResult:
        url = (long_url or "").strip()
        if not url:
            return self._reject(CreateError.EMPTY_URL, url)
        if not is_valid_url(url):
            return self._reject(CreateError.INVALID_URL, url)
        if not _is_valid_validity(validity_minutes):
            return self._reject(CreateError.INVALID_VALIDITY, url)

        snapshot = self.store.load_all()

        code = (custom_shortcode or "").strip()
        if not code:
            code = self.generate_shortcode(snapshot)
        else:
            if not is_valid_shortcode(code):
                return self._reject(CreateError.INVALID_SHORTCODE, url)
            if any(link.shortcode == code for link in snapshot):
                return self._reject(CreateError.SHORTCODE_TAKEN, url)

        now = self._now()
        link = Link(
            shortcode=code,
            long_url=url,
            creation_time=now,
            expiry_time=now + timedelta(minutes=validity_minutes),
            validity_minutes=validity_minutes,
        )

        try:
            self.store.save_all([*snapshot, link])
        except StorageError as e:
            log_event(self.logger, "error", "component", f"create_failed shortcode={code} err={e}")
            return CreateResult.failure(CreateError.STORAGE_FAILURE)

        log_event(self.logger, "info", "component", f"create_success shortcode={code} url={url!r}")
        return CreateResult.success(
            LinkSummary(shortcode=code, short_url=self.short_url(code), expiry_time=link.expiry_time)
        )

    def resolve(self, shortcode: str, *, source: str = DIRECT_SOURCE, location: str | None = None) -> Resolution:
        """Look up `shortcode`; an active link gets one click recorded before returning."""
        link = self.store.find_by_shortcode(shortcode)
        if link is None:
            log_event(self.logger, "error", "redirect", f"Shortcode not found: {shortcode}")
            return Resolution.not_found()

        if is_expired(link, self._now()):
            log_event(self.logger, "error", "redirect", f"Shortcode {shortcode} has expired")
            return Resolution.expired()

        self.record_click(shortcode, source, location if location is not None else self.origin)
        log_event(self.logger, "info", "redirect", f"Redirecting shortcode {shortcode} to {link.long_url}")
        return Resolution.active(link.long_url)

    def record_click(self, shortcode: str, source: str, location: str) -> None:
        snapshot = self.store.load_all()
        idx = next((i for i, link in enumerate(snapshot) if link.shortcode == shortcode), None)
        if idx is None:
            # ссылка исчезла между поиском и записью клика: не ошибка
            log_event(self.logger, "debug", "redirect", f"record_click skipped shortcode={shortcode} reason=absent")
            return

        event = ClickEvent(timestamp=self._now(), source=source or DIRECT_SOURCE, location=location)
        snapshot[idx] = snapshot[idx].with_click(event)
        try:
            self.store.save_all(snapshot)
        except StorageError as e:
            log_event(self.logger, "error", "redirect", f"record_click_failed shortcode={shortcode} err={e}")

    def compute_stats(self) -> StatsReport:
        now = self._now()
        total_clicks = active = expired = 0
        views: list[LinkView] = []

        links = self.store.load_all()
        for link in links:
            expired_flag = is_expired(link, now)
            total_clicks += link.clicks
            if expired_flag:
                expired += 1
            else:
                active += 1
            views.append(LinkView(link=link, is_expired=expired_flag, short_url=self.short_url(link.shortcode)))

        # sort стабилен и при reverse=True: равные creation_time остаются в порядке вставки
        views.sort(key=lambda v: v.link.creation_time, reverse=True)

        totals = AggregateStats(
            total_links=len(links),
            total_clicks=total_clicks,
            active_links=active,
            expired_links=expired,
        )
        log_event(
            self.logger,
            "info",
            "page",
            f"stats_loaded total={totals.total_links} clicks={totals.total_clicks} "
            f"active={totals.active_links} expired={totals.expired_links}",
        )
        return StatsReport(totals=totals, links=views, generated_at=now)
