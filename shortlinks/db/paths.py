"""Where ShortLinks keeps its SQLite file and where Alembic looks for migrations."""

from __future__ import annotations

import os
import platform
import sys
from pathlib import Path

APP_NAME = "ShortLinks"
DB_FILENAME = "links.db"
MIGRATIONS_DIRNAME = "alembic_migrations"

__all__ = ["APP_NAME", "user_data_dir", "db_path", "db_url", "alembic_dir"]


def _is_frozen() -> bool:
    return bool(getattr(sys, "frozen", False)) and hasattr(sys, "_MEIPASS")


def _platform_base() -> Path:
    """Per-OS parent of the app folder (APPDATA, Application Support, XDG share)."""
    system = platform.system()
    if system == "Windows":
        return Path(os.getenv("APPDATA", str(Path.home() / "AppData" / "Roaming")))
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support"
    return Path.home() / ".local" / "share"


def user_data_dir() -> Path:
    """
    Folder with links.db; created on first access.

    SHORTLINKS_DATA_DIR replaces the per-OS location (tests point it at tmp).
    """
    override = os.getenv("SHORTLINKS_DATA_DIR")
    folder = Path(override).expanduser().resolve() if override else _platform_base() / APP_NAME
    folder.mkdir(parents=True, exist_ok=True)
    return folder


def db_path() -> Path:
    return user_data_dir() / DB_FILENAME


def db_url() -> str:
    """SQLAlchemy URL of the links database."""
    return f"sqlite:///{db_path().as_posix()}"


def alembic_dir() -> Path:
    """
    Locate the migrations folder.

    Candidates are tried in order: SHORTLINKS_ALEMBIC_DIR, the PyInstaller
    bundle, the source checkout. If none exists an empty folder under the
    data dir is returned.
    """
    candidates: list[Path] = []
    override = os.getenv("SHORTLINKS_ALEMBIC_DIR")
    if override:
        candidates.append(Path(override).expanduser().resolve())
    if _is_frozen():
        candidates.append(Path(sys._MEIPASS) / MIGRATIONS_DIRNAME)  # type: ignore[attr-defined]
    # shortlinks/db/paths.py → корень проекта это parents[2]
    candidates.append(Path(__file__).resolve().parents[2] / MIGRATIONS_DIRNAME)

    for p in candidates:
        if p.exists():
            return p

    fallback = user_data_dir() / MIGRATIONS_DIRNAME
    fallback.mkdir(parents=True, exist_ok=True)
    return fallback
