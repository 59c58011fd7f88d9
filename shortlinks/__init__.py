from .logging_utils import log_event, setup_logging
from .settings import (
    DEFAULT_VALIDITY_MINUTES,
    DIRECT_SOURCE,
    FORM_SLOTS,
    MAX_VALIDITY_MINUTES,
    SHORTCODE_ALPHABET,
    SHORTCODE_LENGTH,
    STATS_REFRESH_SEC,
    STORAGE_KEY,
)
from .validation import is_valid_shortcode, is_valid_url

__all__ = [
    "setup_logging",
    "log_event",
    "is_valid_url",
    "is_valid_shortcode",
    "DEFAULT_VALIDITY_MINUTES",
    "DIRECT_SOURCE",
    "FORM_SLOTS",
    "MAX_VALIDITY_MINUTES",
    "SHORTCODE_ALPHABET",
    "SHORTCODE_LENGTH",
    "STATS_REFRESH_SEC",
    "STORAGE_KEY",
]
__version__ = "0.1.0"
