from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "locatorrank"
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def build_logger(level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logger.handlers:
        return logger

    logger.propagate = False
    handler: logging.Handler
    if log_file:
        try:
            path = Path(log_file)
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(path, encoding="utf-8")
        except OSError:
            # Fall back to stderr when the log file cannot be opened.
            handler = logging.StreamHandler()
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
