"""
Logging for the API process.

``setup_logging`` installs one formatter on the root logger, writing to
the console and, when ``LOG_FILE`` is set, to a size-rotated file.
PyMongo's command and connection loggers are very chatty at ``DEBUG``,
so they get their own threshold (``MONGODB_LOG_LEVEL``).  Uvicorn's
per-request access lines can be silenced with ``ACCESS_LOG=false``.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from swap_api.app.core.config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HANDLER_NAME = "swap_api"


def _level(name: str, default: int = logging.INFO) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def setup_logging(settings: Settings) -> None:
    """Configure the root logger and the third party loggers.

    Handlers are only added once; later calls (one per ``create_app``)
    just re-apply the levels.  Handlers installed by others, such as a
    test runner's capture handler, are left alone.
    """
    root = logging.getLogger()
    root.setLevel(_level(settings.log_level))

    if not any(handler.get_name() == HANDLER_NAME for handler in root.handlers):
        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
        handlers = [logging.StreamHandler()]
        if settings.log_file:
            log_path = Path(settings.log_file).resolve()
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(
                RotatingFileHandler(
                    log_path,
                    maxBytes=settings.log_max_bytes,
                    backupCount=settings.log_backup_count,
                    encoding="utf-8",
                )
            )
        for handler in handlers:
            handler.set_name(HANDLER_NAME)
            handler.setFormatter(formatter)
            root.addHandler(handler)

    logging.getLogger("pymongo").setLevel(_level(settings.mongodb_log_level, logging.WARNING))
    logging.getLogger("uvicorn.access").disabled = not settings.access_log
