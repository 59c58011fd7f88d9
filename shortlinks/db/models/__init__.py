"""ORM models for ShortLinks."""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


# export models
from .kv import KeyValue  # noqa: E402,F401
