"""Unified logging configuration for boardcore.

Usage:
    from boardcore.logging_config import setup_logging, get_logger

    logger = setup_logging("boardcore", level="DEBUG", format_style="compact")

    with LogContext(logger, logging.DEBUG):
        game.move("a1")
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from . import config

__all__ = [
    "DEFAULT_FORMAT",
    "COMPACT_FORMAT",
    "DETAILED_FORMAT",
    "LogContext",
    "get_logger",
    "setup_logging",
]

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
COMPACT_FORMAT = "%(levelname)s %(name)s: %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"
)

_FORMATS = {
    "default": DEFAULT_FORMAT,
    "compact": COMPACT_FORMAT,
    "detailed": DETAILED_FORMAT,
}


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = config.LOG_LEVEL
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def setup_logging(
    name: str = "boardcore",
    level: int | str | None = None,
    format_style: str | None = None,
    console: bool = True,
    log_file: str | Path | None = None,
    propagate: bool = False,
) -> logging.Logger:
    """Configure and return the logger called ``name``.

    Calling this twice for the same name does not attach duplicate handlers.
    Unknown format presets fall back to the default format.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))
    logger.propagate = propagate

    fmt = _FORMATS.get((format_style or config.LOG_FORMAT).lower(), DEFAULT_FORMAT)
    formatter = logging.Formatter(fmt)

    if console and not any(
        getattr(h, "_boardcore_console", False) for h in logger.handlers
    ):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        handler._boardcore_console = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        existing = {
            getattr(h, "baseFilename", None) for h in logger.handlers
        }
        if str(path.resolve()) not in existing:
            file_handler = logging.FileHandler(path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a module logger without touching its handlers."""
    return logging.getLogger(name)


class LogContext:
    """Temporarily change a logger's level inside a ``with`` block."""

    def __init__(self, logger: logging.Logger, level: int):
        self.logger = logger
        self.level = level
        self._previous = logger.level

    def __enter__(self) -> logging.Logger:
        self._previous = self.logger.level
        self.logger.setLevel(self.level)
        return self.logger

    def __exit__(self, exc_type, exc, tb) -> None:
        self.logger.setLevel(self._previous)
