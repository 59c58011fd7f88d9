# 1) Imports
from __future__ import annotations

from shortlinks.logging_utils import setup_logging
from shortlinks.settings import FORM_SLOTS, STATS_REFRESH_SEC, debug_enabled, origin

# 2) Константы / Конфигурация

# ---- Логирование ----
LOG_ENABLED = True
LOG_DEBUG = debug_enabled()
LOG_FILE = "logs/app.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUPS = 3


# 3) Точка входа (инициализация и «провода»)
def main(page):  # можно без аннотации, чтобы не держать Flet на импорте
    # локальные импорты: так тестовый monkeypatch их перехватывает
    import flet as ft  # noqa: PLC0415

    import shortlinks.ui_builders as U  # noqa: PLC0415
    from shortlinks.db.migrate import upgrade_to_head  # noqa: PLC0415
    from shortlinks.db.repo.link_service import LinkService  # noqa: PLC0415
    from shortlinks.db.repo.link_sql import SqlAlchemyLinkStore  # noqa: PLC0415
    from shortlinks.handlers import Handlers  # noqa: PLC0415

    upgrade_to_head()

    logger = setup_logging(
        enabled=LOG_ENABLED,
        debug=LOG_DEBUG,
        file_path=LOG_FILE,
        max_bytes=LOG_MAX_BYTES,
        backups=LOG_BACKUPS,
    )
    U.configure_window_and_theme(page)

    service = LinkService(SqlAlchemyLinkStore(logger=logger), origin=origin(), logger=logger)

    header_col = U.build_header()
    slots = U.build_slots(FORM_SLOTS)
    bulk_row, shorten_all_button, clear_all_button, stats_button = U.build_bulk_buttons()

    main_body = ft.Container(expand=True)

    handlers = Handlers(page, logger, service, slots, refresh_sec=STATS_REFRESH_SEC)

    title_row, _menu_btn, _minimize_btn, _close_btn, _drag_area = U.build_title_bar(
        on_open_shortener=handlers.on_open_shortener,
        on_open_stats=handlers.on_open_stats,
        on_minimize=handlers.on_minimize,
        on_close=handlers.on_close,
    )

    root = U.compose_page(title_row, header_col, slots, bulk_row, main_body=main_body)
    page.add(root)
    handlers.attach_main_body(main_body)

    # бинды кнопок: индекс слота лежит в control.data
    for slot in slots:
        slot.long_url_field.suffix.on_click = handlers.on_paste
        slot.shorten_button.on_click = handlers.on_shorten
        slot.clear_button.on_click = handlers.on_clear
        slot.copy_button.on_click = handlers.on_copy
    shorten_all_button.on_click = handlers.on_shorten_all
    clear_all_button.on_click = handlers.on_clear_all
    stats_button.on_click = handlers.on_open_stats

    page.on_route_change = handlers.on_route_change
    logger.info("app_started origin=%s slots=%d", service.origin, len(slots))
    page.go(page.route or "/")


def run():  # pragma: no cover
    import multiprocessing as mp

    import flet as ft

    mp.freeze_support()
    ft.app(target=main, view=ft.AppView.FLET_APP)


if __name__ == "__main__":  # pragma: no cover
    run()
