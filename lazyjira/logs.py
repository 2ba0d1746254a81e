"""File-based logging setup.

Logs go to a daily-rotated file under the user log directory; writing to the
terminal would corrupt the full-screen UI. ``LAZYJIRA_LOG`` sets the level.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from .config import log_directory

LOG_ENV_VAR = "LAZYJIRA_LOG"
LOG_FILENAME = "lazyjira.log"
DEFAULT_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(filename)s:%(lineno)d] %(message)s"
BACKUP_COUNT = 7

logger = logging.getLogger("lazyjira")


def resolve_level(level: str | None = None) -> int:
    """Map a level name (argument, then ``$LAZYJIRA_LOG``) to a logging level."""
    name = (level or os.environ.get(LOG_ENV_VAR, "") or DEFAULT_LEVEL).strip().upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def init_logging(level: str | None = None, log_dir: Path | None = None) -> Path | None:
    """Attach a rotating file handler to the ``lazyjira`` logger.

    Returns the log file path, or ``None`` when the directory cannot be
    created; the app keeps running without file logging in that case.
    """
    directory = log_directory() if log_dir is None else log_dir
    log_path = directory / LOG_FILENAME
    try:
        directory.mkdir(parents=True, exist_ok=True)
        handler = TimedRotatingFileHandler(log_path, when="midnight", backupCount=BACKUP_COUNT, encoding="utf-8")
    except OSError as exc:
        print(f"Warning: Failed to initialize logging: {exc}", file=sys.stderr)
        return None

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    for existing in list(logger.handlers):
        if isinstance(existing, TimedRotatingFileHandler):
            logger.removeHandler(existing)
            existing.close()
    logger.addHandler(handler)
    logger.setLevel(resolve_level(level))
    logger.propagate = False
    logger.info("lazyjira starting up")
    logger.debug("Log directory: %s", directory)
    return log_path


def shutdown_logging() -> None:
    logger.info("lazyjira shutting down")
    for handler in list(logger.handlers):
        handler.flush()
