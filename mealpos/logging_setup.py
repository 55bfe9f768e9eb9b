"""
File logging for the terminal app.

The Textual screen owns stdout, so log records go to a rotating file under
``logs/`` instead of the console.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

from mealpos import config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(log_path: str | None = None, level: int = logging.DEBUG) -> logging.Logger:
    """Attach a rotating file handler to the ``mealpos`` logger once."""
    path = os.path.abspath(log_path or config.LOG_PATH)
    logger = logging.getLogger("mealpos")

    existing = [
        h for h in logger.handlers if isinstance(h, RotatingFileHandler) and getattr(h, "baseFilename", "") == path
    ]
    if existing:
        return logger

    os.makedirs(os.path.dirname(path), exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=config.LOG_MAX_BYTES,
        backupCount=config.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
