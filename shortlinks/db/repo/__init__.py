"""Link registry: store contract, SQLite store and the service layer."""

__all__ = ["LinkStore", "SqlAlchemyLinkStore", "LinkService"]

from .link_service import LinkService  # noqa: E402
from .link_sql import SqlAlchemyLinkStore  # noqa: E402
from .link_store import LinkStore  # noqa: E402
