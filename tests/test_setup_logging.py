import logging
from logging.handlers import RotatingFileHandler

from shortlinks.logging_utils import log_event, setup_logging


def _levels(logger):
    lvl = logger.level
    handlers = [h.level for h in logger.handlers]
    return lvl, handlers


def test_setup_logging_disabled_debug_off():
    lg = setup_logging(enabled=False, debug=False, logger_name="shortlinks.test.off")
    lvl, _handlers = _levels(lg)
    assert lvl in (logging.WARNING, logging.ERROR, logging.CRITICAL)
    assert all(isinstance(h, logging.NullHandler) for h in lg.handlers)


def test_setup_logging_enabled_debug_off():
    lg = setup_logging(enabled=True, debug=False, logger_name="shortlinks.test.on", file_path=None)
    lvl, _handlers = _levels(lg)
    assert lvl <= logging.INFO
    assert len(lg.handlers) >= 1


def test_setup_logging_enabled_debug_on_with_file(tmp_path):
    log_file = tmp_path / "logs" / "app.log"
    lg = setup_logging(enabled=True, debug=True, logger_name="shortlinks.test.file", file_path=str(log_file))
    lvl, _handlers = _levels(lg)
    assert lvl <= logging.DEBUG
    assert any(isinstance(h, RotatingFileHandler) for h in lg.handlers)
    assert log_file.parent.exists()
    for h in lg.handlers:
        h.close()


def test_setup_logging_does_not_duplicate_handlers():
    lg = setup_logging(enabled=True, logger_name="shortlinks.test.dup", file_path=None)
    lg = setup_logging(enabled=True, logger_name="shortlinks.test.dup", file_path=None)
    assert len(lg.handlers) == 1


def test_log_event_formats_category(caplog):
    caplog.set_level(logging.DEBUG, logger="shortlinks")
    log_event(None, "error", "redirect", "Shortcode not found: abc")
    [rec] = [r for r in caplog.records if "abc" in r.getMessage()]
    assert rec.levelno == logging.ERROR
    assert rec.getMessage() == "category=redirect Shortcode not found: abc"


def test_log_event_never_raises():
    class Broken:
        def log(self, *a, **k):
            raise OSError("disk full")

    log_event(Broken(), "info", "page", "still fine")
    log_event(object(), "info", "page", "no log method")


def test_file_handler_uses_named_format(tmp_path):
    log_file = tmp_path / "app.log"
    lg = setup_logging(enabled=True, logger_name="shortlinks.test.fmt", file_path=str(log_file))
    lg.info("create_ok shortcode=abc123")
    for h in lg.handlers:
        h.flush()
        h.close()
    line = log_file.read_text(encoding="utf-8").strip()
    assert "[INFO] shortlinks.test.fmt: create_ok shortcode=abc123" in line
