"""Logging setup used by the CLI and the HTTP server.

Modules only ever call ``logging.getLogger(__name__)``; the handlers are
installed once, here, on the ``ticketsheet`` package logger.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _normalize_level(level: str | int) -> int:
    """Accept ``'DEBUG'`` or ``logging.DEBUG``; anything unknown becomes INFO."""
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        value = getattr(logging, level.upper(), None)
        if isinstance(value, int):
            return value
    return logging.INFO


def configure_logging(
    level: str | int = "INFO",
    log_dir: Path | None = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """Configure the ``ticketsheet`` logger and return it.

    Args:
        level: Level name or number.
        log_dir: When set, also write to ``<log_dir>/ticketsheet.log`` with
            size-based rotation.
        max_bytes: Rotation threshold for the log file.
        backup_count: Number of rotated files to keep.
    """
    logger = logging.getLogger("ticketsheet")
    logger.setLevel(_normalize_level(level))

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_FORMAT)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / "ticketsheet.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
