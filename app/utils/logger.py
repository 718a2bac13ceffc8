# app/utils/logger.py
"""
Logging setup shared by every module.

One console handler, plus a size-rotated file under LOG_DIR unless
LOG_TO_FILE is off (the test suite turns it off).
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from app.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_FILE = "parking.log"
MAX_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 10

# Third-party loggers that drown out ours at DEBUG
QUIET_LOGGERS = ("sqlalchemy.engine", "urllib3", "httpx", "multipart")

_configured = False


def log_dir() -> str:
    if settings.LOG_DIR:
        return settings.LOG_DIR
    return os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs")


def _configure_root_logger():
    global _configured
    if _configured:
        return
    _configured = True

    level = settings.LOG_LEVEL.upper()
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    root = logging.getLogger()
    root.setLevel(level)

    handlers = [logging.StreamHandler()]
    if settings.LOG_TO_FILE:
        os.makedirs(log_dir(), exist_ok=True)
        handlers.append(RotatingFileHandler(
            filename=os.path.join(log_dir(), LOG_FILE),
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        ))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Named logger; configures the root logger on first use."""
    _configure_root_logger()
    return logging.getLogger(name)
