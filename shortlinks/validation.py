from urllib.parse import urlsplit

import validators

from shortlinks.settings import RESERVED_SHORTCODES, ROUTE_UNSAFE_CHARS


def is_valid_url(candidate: object) -> bool:
    """
    True iff `candidate` is an absolute URL: scheme + authority at minimum.

    Pure predicate: parse failures become False, nothing is raised.
    """
    if not isinstance(candidate, str):
        return False
    s = candidate.strip()
    if not s or any(ch.isspace() for ch in s):
        return False

    # строгий валидатор (не даём ему уронить нас исключением)
    try:
        if validators.url(s) is True:
            return True
    except Exception:
        pass

    # fallback: любая схема с authority (ftp://, custom://host, localhost и т.п.)
    try:
        parts = urlsplit(s)
        _ = parts.port  # кривой порт -> ValueError
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc) and bool(parts.hostname)


def is_valid_shortcode(code: object) -> bool:
    """Non-blank, not a reserved route name, nothing the /<shortcode> route cannot carry."""
    if not isinstance(code, str) or not code.strip():
        return False
    if code in RESERVED_SHORTCODES:
        return False
    return not any(ch in ROUTE_UNSAFE_CHARS for ch in code)
