"""SQLAlchemy-backed implementation of LinkStore (one kv_store row per collection)."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from shortlinks.db.engine import get_session
from shortlinks.db.models import KeyValue
from shortlinks.db.repo.codec import dumps_links, loads_links
from shortlinks.db.repo.errors import CorruptStoreError, StorageError
from shortlinks.db.repo.link_store import LinkStore
from shortlinks.db.repo.schemas import Link
from shortlinks.logging_utils import log_event
from shortlinks.settings import STORAGE_KEY


class SqlAlchemyLinkStore(LinkStore):
    """Конкретная реализация LinkStore на SQLAlchemy: JSON-блоб под одним ключом."""

    def __init__(self, key: str = STORAGE_KEY, *, logger: logging.Logger | None = None):
        self.key = key
        self.logger = logger

    def _read_blob(self) -> str | None:
        with get_session() as s:
            row = s.get(KeyValue, self.key)
            # читаем значение внутри сессии
            return row.value if row is not None else None

    def load_all(self) -> list[Link]:
        try:
            blob = self._read_blob()
        except SQLAlchemyError as e:
            log_event(self.logger, "error", "component", f"store_read_failed key={self.key} err={e}")
            return []

        if blob is None:
            return []

        try:
            return loads_links(blob)
        except CorruptStoreError as e:
            # доступность важнее: повреждённый блоб == пустая коллекция
            log_event(self.logger, "error", "component", f"store_corrupt key={self.key} err={e}")
            return []

    def save_all(self, links: list[Link]) -> None:
        blob = dumps_links(list(links))
        try:
            with get_session() as s:
                row = s.get(KeyValue, self.key)
                if row is None:
                    s.add(KeyValue(key=self.key, value=blob))
                else:
                    row.value = blob
                s.commit()
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e
        log_event(self.logger, "debug", "component", f"store_saved key={self.key} links={len(links)}")
