"""Root logger and third party logger configuration."""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from swap_api.app.core.config import Settings
from swap_api.app.core.logging_config import HANDLER_NAME, setup_logging


def _own_handlers(root):
    return [handler for handler in root.handlers if handler.get_name() == HANDLER_NAME]


@pytest.fixture()
def root_logger():
    root = logging.getLogger()
    saved = _own_handlers(root)
    for handler in saved:
        root.removeHandler(handler)
    level = root.level
    pymongo_level = logging.getLogger("pymongo").level
    access = logging.getLogger("uvicorn.access")
    access_disabled = access.disabled
    yield root
    for handler in _own_handlers(root):
        root.removeHandler(handler)
        handler.close()
    for handler in saved:
        root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger("pymongo").setLevel(pymongo_level)
    access.disabled = access_disabled


def test_console_only_without_log_file(root_logger):
    setup_logging(Settings(log_level="debug", log_file=None))
    assert root_logger.level == logging.DEBUG
    handlers = _own_handlers(root_logger)
    assert len(handlers) == 1
    assert not isinstance(handlers[0], RotatingFileHandler)


def test_log_file_is_rotated(root_logger, tmp_path):
    log_file = tmp_path / "logs" / "api.log"
    setup_logging(Settings(log_file=str(log_file), log_max_bytes=1024, log_backup_count=2))
    rotating = [h for h in _own_handlers(root_logger) if isinstance(h, RotatingFileHandler)]
    assert len(rotating) == 1
    assert rotating[0].maxBytes == 1024
    assert rotating[0].backupCount == 2

    logging.getLogger("swap_api.test").warning("written to file")
    rotating[0].flush()
    assert "written to file" in log_file.read_text(encoding="utf-8")


def test_handlers_are_added_once(root_logger):
    setup_logging(Settings(log_file=None))
    setup_logging(Settings(log_file=None, log_level="WARNING"))
    assert len(_own_handlers(root_logger)) == 1
    assert root_logger.level == logging.WARNING


def test_library_loggers_follow_settings(root_logger):
    setup_logging(Settings(log_file=None, mongodb_log_level="ERROR", access_log=False))
    assert logging.getLogger("pymongo").level == logging.ERROR
    assert logging.getLogger("uvicorn.access").disabled


def test_unknown_level_falls_back_to_info(root_logger):
    setup_logging(Settings(log_level="chatty", log_file=None))
    assert root_logger.level == logging.INFO
