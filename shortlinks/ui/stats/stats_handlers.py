# ui/stats/stats_handlers.py
from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from shortlinks.logging_utils import log_event
from shortlinks.settings import STATS_REFRESH_SEC


def fmt_local_dt(dt: datetime | None) -> str:
    if not dt:
        return "—"
    # наивное время считаем UTC, показываем в локальной TZ системы
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def time_remaining_label(expiry_time: datetime, now: datetime) -> str:
    diff = expiry_time - now
    if diff <= timedelta(0):
        return "Expired"

    hours, minutes = divmod(int(diff.total_seconds() // 60), 60)
    if hours > 0:
        return f"{hours}h {minutes}m remaining"
    return f"{minutes}m remaining"


class StatsPoller:
    """
    Calls `callback` every `interval` seconds until `stop()`.

    The refresh only reads the store, so it may be stopped and restarted at any time.
    A failing refresh is logged and the next tick is still scheduled.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        interval: float = STATS_REFRESH_SEC,
        *,
        logger: logging.Logger | None = None,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ):
        self._callback = callback
        self.interval = interval
        self.logger = logger
        self._timer_factory = timer_factory
        self._timer: threading.Timer | None = None
        self._running = False
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True
            self._schedule_locked()

    def stop(self) -> None:
        with self._lock:
            self._running = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _schedule_locked(self) -> None:
        timer = self._timer_factory(self.interval, self._tick)
        timer.daemon = True
        timer.start()
        self._timer = timer

    def _tick(self) -> None:
        with self._lock:
            if not self._running:
                return
        try:
            self._callback()
        except Exception as e:
            log_event(self.logger, "error", "page", f"Error loading statistics: {e}")
        with self._lock:
            if self._running:
                self._schedule_locked()
