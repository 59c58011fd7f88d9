import contextlib
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal

DEFAULT_LOGGER_NAME = "shortlinks"

LogLevel = Literal["debug", "info", "warning", "error"]
LogCategory = Literal["redirect", "component", "page"]

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _handlers(file_path: str | None, max_bytes: int, backups: int) -> list[logging.Handler]:
    out: list[logging.Handler] = [logging.StreamHandler()]
    if file_path:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        out.append(RotatingFileHandler(file_path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8"))
    return out


def setup_logging(  # noqa: PLR0913
    *,
    enabled: bool = True,
    debug: bool = False,
    logger_name: str = DEFAULT_LOGGER_NAME,
    file_path: str | None = "logs/app.log",
    max_bytes: int = 500_000,
    backups: int = 3,
) -> logging.Logger:
    """
    Логгер приложения: консоль + ротация файла (если file_path задан).

    enabled=False оставляет только NullHandler; уровень WARNING, при debug=True DEBUG.
    Повторный вызов заменяет хендлеры, а не добавляет новые.
    """
    logger = logging.getLogger(logger_name)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    if not enabled:
        logger.setLevel(logging.DEBUG if debug else logging.WARNING)
        logger.addHandler(logging.NullHandler())
        return logger

    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    fmt = logging.Formatter(LOG_FORMAT)
    for h in _handlers(file_path, max_bytes, backups):
        h.setFormatter(fmt)
        logger.addHandler(h)
    return logger


def log_event(
    logger: logging.Logger | None,
    level: LogLevel,
    category: LogCategory,
    message: str,
) -> None:
    """
    Fire-and-forget event log: `category=<category> <message>`.

    Never raises. A broken handler or a fake logger must not affect the caller.
    """
    with contextlib.suppress(Exception):
        lg = logger if logger is not None else logging.getLogger(DEFAULT_LOGGER_NAME)
        lg.log(_LEVELS.get(level, logging.INFO), "category=%s %s", category, message)
