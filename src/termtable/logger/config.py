"""Where logs go and at which levels.

Logging starts before the INI file is read, from the bootstrap values of
``load_log_settings()``. Once a command has loaded its configuration,
``apply_config_levels()`` moves the running handlers to the configured
levels.
"""

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from termtable.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    LOG_DIR_ENV_VAR,
    LOG_FILE_NAME,
)
from termtable.logger.handlers import is_console_handler, level_number

if TYPE_CHECKING:
    from termtable.logger.logger import LoggerState
    from termtable.types import GlobalConfig


def load_log_settings() -> tuple[str, str, Path]:
    """Return the bootstrap console level, file level and log path.

    ``TERMTABLE_LOG_DIR`` replaces the log directory; the test suite sets
    it so test runs never write under the user's home.
    """
    override = os.getenv(LOG_DIR_ENV_VAR)
    if override:
        log_dir = Path(override).expanduser()
    else:
        log_dir = (
            Path.home() / CONFIG_DIR_NAME / DEFAULT_CONFIG_SUBDIR / "logs"
        )
    log_file = log_dir / LOG_FILE_NAME
    return DEFAULT_CONSOLE_LOG_LEVEL, DEFAULT_LOG_LEVEL, log_file


def apply_config_levels(state: "LoggerState", config: "GlobalConfig") -> None:
    """Set handler levels from ``console_log_level`` and ``log_level``.

    Handlers are neither added nor removed.

    Args:
        state: Process-wide logger state
        config: Loaded global configuration

    """
    console_level = level_number(config["console_log_level"], logging.WARNING)
    file_level = level_number(config["log_level"], logging.INFO)

    for handler in state.handlers:
        if is_console_handler(handler):
            handler.setLevel(console_level)
        else:
            handler.setLevel(file_level)

    state.config_applied = True
