"""Application-wide constants and environment overrides for ShortLinks."""

from __future__ import annotations

import os

__all__ = [
    "STORAGE_KEY",
    "SHORTCODE_ALPHABET",
    "SHORTCODE_LENGTH",
    "RESERVED_SHORTCODES",
    "ROUTE_UNSAFE_CHARS",
    "DEFAULT_VALIDITY_MINUTES",
    "MAX_VALIDITY_MINUTES",
    "FORM_SLOTS",
    "STATS_REFRESH_SEC",
    "DIRECT_SOURCE",
    "DEFAULT_ORIGIN",
    "origin",
    "debug_enabled",
]

# --- Хранилище ---
STORAGE_KEY = "shortLinks"  # имя единственной записи с коллекцией ссылок

# --- Шорткоды ---
SHORTCODE_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
SHORTCODE_LENGTH = 6
RESERVED_SHORTCODES = frozenset({"stats"})  # заняты маршрутами приложения
ROUTE_UNSAFE_CHARS = frozenset("/?#%")  # не переживают маршрут /<shortcode>

# --- Срок жизни ссылки (минуты) ---
DEFAULT_VALIDITY_MINUTES = 30
MAX_VALIDITY_MINUTES = 10080  # неделя

# --- UI ---
FORM_SLOTS = 5
STATS_REFRESH_SEC = 30

# --- Клики ---
DIRECT_SOURCE = "direct"  # источник клика без реферера

DEFAULT_ORIGIN = "http://localhost:3000"


def origin() -> str:
    """
    Origin used for short URLs and for the click `location`.

    Override with env SHORTLINKS_ORIGIN (trailing slash is dropped).
    """
    value = os.getenv("SHORTLINKS_ORIGIN") or DEFAULT_ORIGIN
    return value.strip().rstrip("/")


def debug_enabled() -> bool:
    return os.getenv("SHORTLINKS_DEBUG") == "1"
