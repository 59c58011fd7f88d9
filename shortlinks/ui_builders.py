from dataclasses import dataclass

import flet as ft

from shortlinks.settings import DEFAULT_VALIDITY_MINUTES, FORM_SLOTS, MAX_VALIDITY_MINUTES

ACCENT = "#EB244E"


@dataclass
class SlotControls:
    """Controls of one URL entry on the shortener form."""

    index: int
    long_url_field: ft.TextField
    shortcode_field: ft.TextField
    validity_field: ft.TextField
    shorten_button: ft.ElevatedButton
    clear_button: ft.ElevatedButton
    copy_button: ft.IconButton
    status_text: ft.Text
    container: ft.Control | None = None


def configure_window_and_theme(page: ft.Page):
    page.window.center()
    page.title = "SHORTLINKS"
    page.vertical_alignment = ft.MainAxisAlignment.START
    page.horizontal_alignment = ft.CrossAxisAlignment.CENTER
    page.window.resizable = True
    page.adaptive = True
    page.window.width = 640
    page.window.height = 820
    page.window.title_bar_hidden = True
    page.window.frameless = False

    page.theme_mode = ft.ThemeMode.LIGHT
    page.theme = ft.Theme(color_scheme=ft.ColorScheme(primary=ft.Colors.RED))


def build_title_bar(
    *,
    t=lambda k: k,
    on_open_shortener=None,
    on_open_stats=None,
    on_minimize=None,
    on_close=None,
) -> tuple[ft.Row, ft.PopupMenuButton, ft.IconButton, ft.IconButton, ft.WindowDragArea]:
    """Верхняя полоса с меню ≡, перетаскиванием окна и кнопками мин/закрыть."""
    menu_button = ft.PopupMenuButton(
        icon=ft.Icons.MENU,
        items=[
            ft.PopupMenuItem(text=t("Shorten URLs"), on_click=lambda e: on_open_shortener and on_open_shortener(e)),
            ft.PopupMenuItem(text=t("View Statistics"), on_click=lambda e: on_open_stats and on_open_stats(e)),
        ],
    )
    minimize_button = ft.IconButton(ft.Icons.REMOVE, on_click=on_minimize)
    close_button = ft.IconButton(ft.Icons.CLOSE, on_click=on_close)

    drag_area = ft.WindowDragArea(ft.Container(height=50, width=1000), expand=True, maximizable=False)
    row = ft.Row(
        controls=[menu_button, drag_area, minimize_button, close_button],
        alignment=ft.MainAxisAlignment.END,
        vertical_alignment=ft.CrossAxisAlignment.START,
    )
    return row, menu_button, minimize_button, close_button, drag_area


def build_header(t=lambda k: k) -> ft.Column:
    return ft.Column(
        controls=[
            ft.Text(t("Shorten Your URLs"), size=26, weight=ft.FontWeight.BOLD),
            ft.Text(
                t(f"Shorten up to {FORM_SLOTS} URLs simultaneously with custom expiry times"),
                color=ft.Colors.GREY_600,
            ),
        ],
        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        spacing=4,
    )


def build_slot(index: int, t=lambda k: k) -> SlotControls:
    long_url_field = ft.TextField(
        label=t("Enter Long URL"),
        hint_text="https://example.com/very/long/url",
        label_style=ft.TextStyle(color=ACCENT),
        border_color=ACCENT,
        suffix=ft.IconButton(icon=ft.Icons.CONTENT_PASTE, data=index),
        expand=True,
    )
    shortcode_field = ft.TextField(
        label=t("Custom Shortcode (Optional)"),
        hint_text="mycode123",
        helper_text=t("Leave empty for auto-generation"),
        border_color=ACCENT,
        expand=True,
    )
    validity_field = ft.TextField(
        label=t("Validity Period (Minutes)"),
        value=str(DEFAULT_VALIDITY_MINUTES),
        helper_text=t(f"Default: {DEFAULT_VALIDITY_MINUTES}, max {MAX_VALIDITY_MINUTES} minutes"),
        max_length=len(str(MAX_VALIDITY_MINUTES)),
        keyboard_type=ft.KeyboardType.NUMBER,
        input_filter=ft.NumbersOnlyInputFilter(),
        border_color=ACCENT,
        width=200,
    )
    shorten_button = ft.ElevatedButton(
        t("SHORTEN"),
        color=ft.Colors.WHITE,
        bgcolor=ACCENT,
        data=index,
        style=ft.ButtonStyle(shape=ft.RoundedRectangleBorder(radius=8)),
    )
    clear_button = ft.ElevatedButton(
        t("CLEAR"),
        color=ACCENT,
        data=index,
        style=ft.ButtonStyle(shape=ft.RoundedRectangleBorder(radius=8)),
    )
    copy_button = ft.IconButton(ft.Icons.CONTENT_COPY, tooltip=t("Copy short URL"), data=index, disabled=True)
    status_text = ft.Text("", selectable=True, visible=False)

    slot = SlotControls(
        index=index,
        long_url_field=long_url_field,
        shortcode_field=shortcode_field,
        validity_field=validity_field,
        shorten_button=shorten_button,
        clear_button=clear_button,
        copy_button=copy_button,
        status_text=status_text,
    )
    slot.container = ft.Card(
        content=ft.Container(
            content=ft.Column(
                controls=[
                    ft.Text(f"URL #{index + 1}", weight=ft.FontWeight.BOLD),
                    ft.Row(controls=[long_url_field]),
                    ft.Row(controls=[shortcode_field, validity_field], vertical_alignment=ft.CrossAxisAlignment.START),
                    status_text,
                    ft.Row(controls=[shorten_button, clear_button, copy_button], spacing=8),
                ],
                spacing=8,
            ),
            padding=12,
        )
    )
    return slot


def build_slots(count: int = FORM_SLOTS, t=lambda k: k) -> list[SlotControls]:
    return [build_slot(i, t) for i in range(count)]


def build_bulk_buttons(t=lambda k: k) -> tuple[ft.Row, ft.ElevatedButton, ft.ElevatedButton, ft.ElevatedButton]:
    shorten_all_button = ft.ElevatedButton(
        t("SHORTEN ALL URLS"),
        color=ft.Colors.WHITE,
        bgcolor=ACCENT,
        height=40,
        style=ft.ButtonStyle(shape=ft.RoundedRectangleBorder(radius=8)),
    )
    clear_all_button = ft.ElevatedButton(
        t("CLEAR ALL"),
        color=ACCENT,
        height=40,
        style=ft.ButtonStyle(shape=ft.RoundedRectangleBorder(radius=8)),
    )
    stats_button = ft.ElevatedButton(
        t("VIEW STATISTICS"),
        color=ACCENT,
        height=40,
        style=ft.ButtonStyle(shape=ft.RoundedRectangleBorder(radius=8)),
    )
    row = ft.Row(
        controls=[shorten_all_button, clear_all_button, stats_button],
        alignment=ft.MainAxisAlignment.CENTER,
        spacing=12,
        wrap=True,
    )
    return row, shorten_all_button, clear_all_button, stats_button


def compose_page(
    title_bar,
    header_col,
    slots: list[SlotControls],
    bulk_row,
    *,
    main_body: ft.Container | None = None,
) -> ft.Column:
    """Собирает вид основной страницы: title_bar сверху, контент внутри main_body."""
    if main_body is None:
        main_body = ft.Container(expand=True)

    shortener_layout = ft.Column(
        controls=[header_col, *[s.container for s in slots], ft.Divider(), bulk_row, ft.Container(height=16)],
        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        scroll=ft.ScrollMode.AUTO,
        spacing=10,
        expand=True,
    )
    main_body.content = shortener_layout

    return ft.Column(
        controls=[title_bar, main_body],
        alignment=ft.MainAxisAlignment.START,
        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        spacing=0,
        expand=True,
    )
