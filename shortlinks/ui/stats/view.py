"""Statistics screen: summary cards + one expandable entry per link (newest first).

- Только разметка: данные приходят готовым StatsReport из LinkService.compute_stats().
- I18n: принимает функцию `t(key: str) -> str`, по умолчанию возвращает ключ.
"""

from __future__ import annotations

from collections.abc import Callable

import flet as ft

from shortlinks.db.repo.schemas import LinkView, StatsReport

from .stats_handlers import fmt_local_dt, time_remaining_label

ACCENT = "#EB244E"


def _summary_card(label: str, value: int, color: str) -> ft.Card:
    return ft.Card(
        content=ft.Container(
            content=ft.Column(
                controls=[
                    ft.Text(str(value), size=26, weight=ft.FontWeight.BOLD, color=color),
                    ft.Text(label, size=12, color=ft.Colors.GREY_700),
                ],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                spacing=2,
            ),
            padding=12,
            width=130,
        )
    )


def _status_chip(view: LinkView, t) -> ft.Container:
    label, color = (t("Expired"), ft.Colors.RED_400) if view.is_expired else (t("Active"), ft.Colors.GREEN_600)
    return ft.Container(
        content=ft.Text(label, size=11, color=ft.Colors.WHITE),
        bgcolor=color,
        border_radius=10,
        padding=ft.padding.symmetric(horizontal=8, vertical=2),
    )


def _clicks_table(view: LinkView, t) -> ft.Control:
    if not view.link.click_data:
        return ft.Text(t("No clicks yet"), italic=True, color=ft.Colors.GREY_600)

    return ft.DataTable(
        columns=[
            ft.DataColumn(ft.Text(t("Timestamp"))),
            ft.DataColumn(ft.Text(t("Source"))),
            ft.DataColumn(ft.Text(t("Location"))),
        ],
        rows=[
            ft.DataRow(
                cells=[
                    ft.DataCell(ft.Text(fmt_local_dt(ev.timestamp), size=12)),
                    ft.DataCell(ft.Text(ev.source, size=12)),
                    ft.DataCell(ft.Text(ev.location, size=12)),
                ]
            )
            for ev in view.link.click_data
        ],
        heading_row_height=32,
        data_row_min_height=28,
        column_spacing=16,
    )


def make_link_tile(view: LinkView, report: StatsReport, t=lambda k: k) -> ft.ExpansionTile:
    link = view.link
    details = ft.Column(
        controls=[
            ft.Text(f"{t('Original URL')}: {link.long_url}", selectable=True, size=12),
            ft.Text(f"{t('Created')}: {fmt_local_dt(link.creation_time)}", size=12),
            ft.Text(f"{t('Expires')}: {fmt_local_dt(link.expiry_time)}", size=12),
            ft.Text(f"{t('Validity')}: {link.validity_minutes} min", size=12),
            ft.Text(time_remaining_label(link.expiry_time, report.generated_at), size=12),
            ft.Divider(height=8),
            ft.Text(f"{t('Click details')} ({link.clicks})", weight=ft.FontWeight.BOLD, size=13),
            _clicks_table(view, t),
        ],
        spacing=4,
    )
    return ft.ExpansionTile(
        title=ft.Row(
            controls=[ft.Text(view.short_url, selectable=True, weight=ft.FontWeight.BOLD), _status_chip(view, t)],
            spacing=8,
        ),
        subtitle=ft.Text(f"{link.clicks} {t('clicks')}", size=12),
        controls=[ft.Container(content=details, padding=ft.padding.only(left=16, right=16, bottom=12))],
    )


def make_stats_screen(
    report: StatsReport,
    *,
    t=lambda k: k,
    on_back: Callable | None = None,
) -> ft.Container:
    totals = report.totals

    btn_back = ft.IconButton(ft.Icons.ARROW_BACK, tooltip=t("Back"), icon_size=24, on_click=on_back)

    summary = ft.Row(
        controls=[
            _summary_card(t("Total Links"), totals.total_links, ACCENT),
            _summary_card(t("Total Clicks"), totals.total_clicks, ft.Colors.BLUE_600),
            _summary_card(t("Active Links"), totals.active_links, ft.Colors.GREEN_600),
            _summary_card(t("Expired Links"), totals.expired_links, ft.Colors.RED_400),
        ],
        wrap=True,
        alignment=ft.MainAxisAlignment.CENTER,
    )

    if report.links:
        body: list[ft.Control] = [make_link_tile(v, report, t) for v in report.links]
    else:
        body = [ft.Text(t("No shortened URLs yet. Create some links first."), color=ft.Colors.GREY_600)]

    return ft.Container(
        content=ft.Column(
            controls=[
                ft.Row(
                    controls=[btn_back, ft.Text(t("URL Statistics"), size=20, weight=ft.FontWeight.BOLD)],
                    vertical_alignment=ft.CrossAxisAlignment.CENTER,
                ),
                summary,
                ft.Text(
                    f"{t('Updated')}: {fmt_local_dt(report.generated_at)}",
                    size=11,
                    color=ft.Colors.GREY_600,
                ),
                ft.Divider(),
                *body,
            ],
            scroll=ft.ScrollMode.AUTO,
            spacing=8,
            expand=True,
        ),
        padding=12,
        expand=True,
    )
