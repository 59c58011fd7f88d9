"""Typed exceptions and rejection codes for the link registry."""

from enum import StrEnum


class CreateError(StrEnum):
    """Why `LinkService.create` rejected the input. Returned, never raised."""

    EMPTY_URL = "EmptyUrl"
    INVALID_URL = "InvalidUrl"
    INVALID_VALIDITY = "InvalidValidity"
    INVALID_SHORTCODE = "InvalidShortcode"
    SHORTCODE_TAKEN = "ShortcodeTaken"
    STORAGE_FAILURE = "StorageFailure"


class StorageError(Exception):
    """Persistent storage failure (DB I/O) on write."""


class CorruptStoreError(Exception):
    """Persisted blob cannot be decoded into links."""
