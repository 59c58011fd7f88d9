import logging
from collections.abc import Callable
from urllib.parse import unquote

import flet as ft
import pyperclip

from shortlinks.db.repo.errors import CreateError
from shortlinks.db.repo.link_service import LinkService
from shortlinks.db.repo.schemas import CreateResult, LinkSummary
from shortlinks.logging_utils import log_event
from shortlinks.settings import DEFAULT_VALIDITY_MINUTES, DIRECT_SOURCE, MAX_VALIDITY_MINUTES, STATS_REFRESH_SEC
from shortlinks.ui_builders import SlotControls

from .ui.stats.stats_handlers import StatsPoller, fmt_local_dt
from .ui.stats.view import make_stats_screen

ROUTE_HOME = "/"
ROUTE_STATS = "/stats"

ERROR_MESSAGES = {
    CreateError.EMPTY_URL: "URL is required",
    CreateError.INVALID_URL: "Invalid URL format",
    CreateError.INVALID_VALIDITY: f"Validity must be between 1 and {MAX_VALIDITY_MINUTES} minutes",
    CreateError.INVALID_SHORTCODE: "Shortcode cannot be 'stats' or contain / ? # %",
    CreateError.SHORTCODE_TAKEN: "Shortcode already exists",
    CreateError.STORAGE_FAILURE: "Failed to shorten URL",
}


def parse_validity(raw: str | None) -> int:
    """Blank -> default; anything that is not an integer -> 0 (rejected by the service)."""
    s = (raw or "").strip()
    if not s:
        return DEFAULT_VALIDITY_MINUTES
    try:
        return int(s)
    except ValueError:
        return 0


class Handlers:
    def __init__(  # noqa: PLR0913
        self,
        page: ft.Page,
        logger: logging.Logger,
        service: LinkService,
        slots: list[SlotControls],
        *,
        refresh_sec: float = STATS_REFRESH_SEC,
        poller_factory: Callable[..., StatsPoller] = StatsPoller,
    ):
        self.page = page
        self.logger = logger
        self.service = service
        self.slots = slots
        self.refresh_sec = refresh_sec
        self._poller_factory = poller_factory

        self.main_body: ft.Container | None = None
        self.shortener_view: ft.Control | None = None
        self.results: dict[int, LinkSummary] = {}
        self.poller: StatsPoller | None = None

    # UX-утилиты
    def toast(self, msg: str, ms: int = 1500):
        sb = ft.SnackBar(ft.Text(msg), bgcolor=ft.Colors.BLACK, duration=ms)
        self.page.overlay.append(sb)
        sb.open = True
        self.page.update()

    def attach_main_body(self, main_body: ft.Container):
        """Вызывается один раз при сборке UI: запоминаем экран шортенера для возврата."""
        self.main_body = main_body
        self.shortener_view = main_body.content

    @staticmethod
    def _slot_index(e) -> int:
        return int(e.control.data)

    def _set_status(self, slot: SlotControls, text: str, *, error: bool):
        slot.status_text.value = text
        slot.status_text.color = ft.Colors.RED_700 if error else ft.Colors.GREEN_800
        slot.status_text.visible = bool(text)

    # ---------- shortener form ----------

    def shorten_slot(self, index: int) -> CreateResult:
        slot = self.slots[index]
        slot.shorten_button.disabled = True
        self.page.update()
        try:
            result = self.service.create(
                slot.long_url_field.value or "",
                slot.shortcode_field.value or "",
                parse_validity(slot.validity_field.value),
            )
        finally:
            slot.shorten_button.disabled = False

        if result.ok:
            summary = result.summary
            self.results[index] = summary
            self._set_status(
                slot,
                f"Short URL Created: {summary.short_url}\nExpires: {fmt_local_dt(summary.expiry_time)}",
                error=False,
            )
            slot.copy_button.disabled = False
            log_event(self.logger, "info", "component", f"URL {index + 1}: shortened to {summary.shortcode}")
        else:
            self.results.pop(index, None)
            self._set_status(slot, ERROR_MESSAGES.get(result.error, "Failed to shorten URL"), error=True)
            slot.copy_button.disabled = True
            log_event(self.logger, "info", "component", f"URL {index + 1}: rejected reason={result.error}")

        self.page.update()
        return result

    def on_shorten(self, e):
        self.shorten_slot(self._slot_index(e))

    def on_shorten_all(self, _):
        pending = [s.index for s in self.slots if (s.long_url_field.value or "").strip()]
        log_event(self.logger, "info", "component", f"bulk_shorten slots={len(pending)}")
        if not pending:
            self.toast("Enter at least one URL.")
            return
        results = [self.shorten_slot(i) for i in pending]
        done = sum(1 for r in results if r.ok)
        self.toast(f"Shortened {done} of {len(results)} URLs.")

    def _reset_slot(self, slot: SlotControls):
        slot.long_url_field.value = ""
        slot.shortcode_field.value = ""
        slot.validity_field.value = str(DEFAULT_VALIDITY_MINUTES)
        slot.copy_button.disabled = True
        self._set_status(slot, "", error=False)
        self.results.pop(slot.index, None)

    def on_clear(self, e):
        self._reset_slot(self.slots[self._slot_index(e)])
        self.page.update()

    def on_clear_all(self, _):
        for slot in self.slots:
            self._reset_slot(slot)
        self.page.update()

    def on_paste(self, e):
        slot = self.slots[self._slot_index(e)]
        slot.long_url_field.value = (pyperclip.paste() or "").strip()
        self.page.update()

    def on_copy(self, e):
        summary = self.results.get(self._slot_index(e))
        if summary is None:
            self.toast("Nothing to copy!")
            self.logger.info("copy_to_clipboard skipped reason=empty")
            return
        self.page.set_clipboard(summary.short_url)
        self.toast("Copied to clipboard!")
        self.logger.info("copy_to_clipboard ok shortcode=%s", summary.shortcode)

    # ---------- navigation ----------

    def on_open_stats(self, _=None):
        self.page.go(ROUTE_STATS)

    def on_open_shortener(self, _=None):
        self.page.go(ROUTE_HOME)

    def on_close(self, _):
        self.stop_polling()
        self.page.window.close()

    def on_minimize(self, _):
        self.page.window.minimized = True
        self.page.update()

    def on_route_change(self, _=None):
        route = (self.page.route or ROUTE_HOME).split("?", 1)[0]
        self.logger.debug("route_change route=%s", route)
        if route in ("", ROUTE_HOME):
            self.show_shortener()
        elif route == ROUTE_STATS:
            self.show_stats()
        else:
            # flet отдаёт маршрут в percent-encoding
            self.redirect(unquote(route.strip("/")))

    def show_shortener(self):
        self.stop_polling()
        if self.main_body is not None:
            self.main_body.content = self.shortener_view
        self.page.update()

    # ---------- statistics ----------

    def render_stats(self):
        report = self.service.compute_stats()
        if self.main_body is not None:
            self.main_body.content = make_stats_screen(report, on_back=self.on_open_shortener)
        self.page.update()

    def show_stats(self):
        try:
            self.render_stats()
        except Exception as e:
            log_event(self.logger, "error", "page", f"Error loading statistics: {e}")
            self.toast("Failed to load statistics.")
            return
        if self.poller is None:
            self.poller = self._poller_factory(self.render_stats, self.refresh_sec, logger=self.logger)
        self.poller.start()

    def stop_polling(self):
        if self.poller is not None:
            self.poller.stop()

    # ---------- redirect ----------

    def redirect(self, shortcode: str):
        resolution = self.service.resolve(shortcode, source=DIRECT_SOURCE, location=self.service.origin)
        if resolution.is_active:
            self.page.launch_url(resolution.long_url)
        elif resolution.status == "expired":
            self.toast(f"Link {shortcode} has expired.")
        else:
            self.toast(f"Link {shortcode} not found.")
        self.page.go(ROUTE_HOME)
