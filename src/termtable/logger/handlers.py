"""Handlers fed by the termtable log queue.

The console handler writes to stderr, leaving stdout to the table. The
file handler rotates once the log reaches LOG_ROTATION_THRESHOLD_BYTES.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from termtable.constants import (
    LOG_BACKUP_COUNT,
    LOG_CONSOLE_DATE_FORMAT,
    LOG_CONSOLE_FORMAT,
    LOG_FILE_DATE_FORMAT,
    LOG_FILE_FORMAT,
    LOG_ROTATION_THRESHOLD_BYTES,
)
from termtable.logger.formatters import ConsoleFormatter


class ConfigurationError(Exception):
    """Raised when the log file cannot be opened."""


def level_number(name: str, default: int) -> int:
    """Map a level name such as ``"debug"`` to its number.

    Args:
        name: Level name, any case
        default: Returned for unknown names

    Returns:
        The numeric level

    """
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else default


def is_console_handler(handler: logging.Handler) -> bool:
    """Whether ``handler`` writes to a stream rather than a file."""
    return isinstance(handler, logging.StreamHandler) and not isinstance(
        handler, logging.FileHandler
    )


def build_handlers(
    console_level: str,
    file_level: str,
    log_file: Path | None,
) -> list[logging.Handler]:
    """Create the console handler and, if ``log_file`` is set, the file one.

    Args:
        console_level: Level name for stderr output
        file_level: Level name for the log file
        log_file: Log file path, or None for console-only logging

    Returns:
        Handlers for the queue listener, console first

    Raises:
        ConfigurationError: If the log directory or file cannot be opened

    """
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(
        ConsoleFormatter(LOG_CONSOLE_FORMAT, datefmt=LOG_CONSOLE_DATE_FORMAT)
    )
    console.setLevel(level_number(console_level, logging.WARNING))
    handlers: list[logging.Handler] = [console]

    if log_file is None:
        return handlers

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            log_file,
            maxBytes=LOG_ROTATION_THRESHOLD_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        msg = f"cannot open log file {log_file}: {e}"
        raise ConfigurationError(msg) from e

    rotating.setFormatter(
        logging.Formatter(LOG_FILE_FORMAT, datefmt=LOG_FILE_DATE_FORMAT)
    )
    rotating.setLevel(level_number(file_level, logging.INFO))
    handlers.append(rotating)
    return handlers
