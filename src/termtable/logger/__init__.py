"""Logging for termtable.

Records flow from module loggers through one queue to a listener thread:

    termtable.* logger -> QueueHandler -> queue -> QueueListener thread
        -> stderr StreamHandler (ConsoleFormatter)
        -> RotatingFileHandler

Usage:
    >>> from termtable.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Downloading %s", name)

Modules never call ``logging.basicConfig()`` or attach handlers of their
own; use %-style arguments rather than f-strings in log calls.
"""

from termtable.logger.config import apply_config_levels
from termtable.logger.formatters import ConsoleFormatter
from termtable.logger.handlers import ConfigurationError
from termtable.logger.logger import (
    LoggerState,
    _state,
    clear_logger_state,
    console_handlers,
    flush_all_handlers,
    get_logger,
    get_state,
    set_console_level,
    setup_logging,
)
from termtable.types import GlobalConfig

__all__ = [
    "ConfigurationError",
    "ConsoleFormatter",
    "LoggerState",
    "_state",  # tests only
    "clear_logger_state",
    "console_handlers",
    "flush_all_handlers",
    "get_logger",
    "get_state",
    "set_console_level",
    "setup_logging",
    "update_logger_from_config",
]


def update_logger_from_config(config: GlobalConfig) -> None:
    """Apply the configured log levels to the running handlers."""
    apply_config_levels(get_state(), config)
