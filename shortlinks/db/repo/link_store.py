"""Abstract interface for the link store."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .schemas import Link


class LinkStore(ABC):
    """
    Contract for the persisted link collection.

    The whole collection is one serialized unit. There is no partial update:
    every mutation is load_all -> transform -> save_all, a full snapshot replace.

    Two independent processes working on the same storage can lose updates:
    whichever saves last overwrites the other's snapshot. No version token, no merge.
    """

    @abstractmethod
    def load_all(self) -> list[Link]:
        """
        Return the persisted collection in insertion order.
        Missing record -> []. Undecodable record or read failure -> [] (logged, never raised).
        """
        raise NotImplementedError

    @abstractmethod
    def save_all(self, links: list[Link]) -> None:
        """Replace the persisted collection. May raise StorageError."""
        raise NotImplementedError

    def find_by_shortcode(self, code: str) -> Link | None:
        return next((link for link in self.load_all() if link.shortcode == code), None)
