"""Logging setup: console output plus ``error.log`` and ``combined.log`` files."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from expense_bot.config import DEFAULT_LOG_DIR, LoggingConfig

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "%(levelname)s | %(name)s | %(message)s"
ERROR_LOG_NAME = "error.log"
COMBINED_LOG_NAME = "combined.log"

logger = logging.getLogger(__name__)


def resolve_log_directory(directory: str) -> Path:
    """Create the log directory, falling back to the local one on failure."""

    path = Path(directory)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        fallback = Path(DEFAULT_LOG_DIR)
        print(
            f"Failed to create log directory {path}: {error}; using {fallback}",
            file=sys.stderr,
        )
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback
    return path


def setup_logging(config: LoggingConfig) -> Path:
    """Configure the root logger and return the directory holding log files."""

    directory = resolve_log_directory(config.directory)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    error_handler = logging.FileHandler(directory / ERROR_LOG_NAME, encoding="utf-8")
    error_handler.setLevel(logging.ERROR)
    combined_handler = logging.FileHandler(directory / COMBINED_LOG_NAME, encoding="utf-8")
    for handler in (error_handler, combined_handler):
        handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        formatter if config.is_production else logging.Formatter(CONSOLE_FORMAT)
    )

    logging.basicConfig(
        level=config.level,
        handlers=[error_handler, combined_handler, console_handler],
        force=True,
    )
    logger.debug("Logging to %s", directory)
    return directory


__all__ = ["setup_logging", "resolve_log_directory"]
