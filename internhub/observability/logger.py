"""Structured logging for intern, notify and publish events."""

import logging
import os
import sys


def _default_level() -> int:
    level = logging.getLevelName((os.environ.get("LOG_LEVEL") or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str, level: int | None = None) -> logging.Logger:
    """Return a logger with a stdout handler attached once; LOG_LEVEL env sets the default level."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
            )
        )
        logger.addHandler(handler)
        logger.setLevel(level if level is not None else _default_level())
    return logger
