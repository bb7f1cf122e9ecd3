"""Centralized constants module for termtable.

This module serves as the single source of truth for all shared constants
across the termtable codebase. Constants are organized by logical categories
and use typing.Final annotations to ensure immutability.

Usage:
    from termtable.constants import REFRESH_INTERVAL_SECONDS
"""

from typing import Final

# =============================================================================
# Terminal Control Sequences
# =============================================================================

CSI: Final[str] = "\033["

# Cursor to the beginning of the line N lines up (format with N)
CURSOR_PREVIOUS_LINE: Final[str] = CSI + "{}F"

# Cursor one line down, same column
CURSOR_DOWN_ONE: Final[str] = CSI + "1B"

CARRIAGE_RETURN: Final[str] = "\r"

# Device status report: request the cursor position
CURSOR_POSITION_QUERY: Final[str] = CSI + "6n"

# Reply is ESC [ row ; col R, never longer than this many bytes in practice
CURSOR_REPLY_TERMINATOR: Final[bytes] = b"R"
CURSOR_REPLY_MAX_BYTES: Final[int] = 32

# =============================================================================
# Rendering Constants
# =============================================================================

REFRESH_INTERVAL_SECONDS: Final[float] = 0.03

BLANK_CHAR: Final[str] = " "
BAR_OPEN_CHAR: Final[str] = "["
BAR_CLOSE_CHAR: Final[str] = "]"
DEFAULT_FILL_SYMBOL: Final[str] = "="

# Completed percentage at which a progress bar stops accepting progress
PROGRESS_COMPLETE: Final[int] = 100

# Share of the line taken by each block of a standard producer row
PROGRESS_LINE_INFO_PERCENTAGE: Final[float] = 40
PROGRESS_LINE_BLANK_PERCENTAGE: Final[float] = 20
PROGRESS_LINE_BAR_PERCENTAGE: Final[float] = 40

# =============================================================================
# Configuration Constants
# =============================================================================

CONFIG_VERSION: Final[str] = "1.0.0"
CONFIG_FILE_NAME: Final[str] = "settings.conf"
CONFIG_DIR_NAME: Final[str] = ".config"
DEFAULT_CONFIG_SUBDIR: Final[str] = "termtable"

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "WARNING"
DEFAULT_REFRESH_INTERVAL_MS: Final[int] = 30
DEFAULT_MAX_CONCURRENT_DOWNLOADS: Final[int] = 3
DEFAULT_RETRY_ATTEMPTS: Final[int] = 3
DEFAULT_TIMEOUT_SECONDS: Final[int] = 10

ISO_DATETIME_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

SECTION_DEFAULT: Final[str] = "DEFAULT"
SECTION_NETWORK: Final[str] = "network"
SECTION_DIRECTORY: Final[str] = "directory"

KEY_CONFIG_VERSION: Final[str] = "config_version"
KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE_LOG_LEVEL: Final[str] = "console_log_level"
KEY_REFRESH_INTERVAL_MS: Final[str] = "refresh_interval_ms"
KEY_FILL_SYMBOL: Final[str] = "fill_symbol"
KEY_MAX_CONCURRENT_DOWNLOADS: Final[str] = "max_concurrent_downloads"
KEY_RETRY_ATTEMPTS: Final[str] = "retry_attempts"
KEY_TIMEOUT_SECONDS: Final[str] = "timeout_seconds"

DIRECTORY_KEYS: Final[tuple[str, ...]] = ("download", "logs")

VALID_LOG_LEVELS: Final[tuple[str, ...]] = (
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
)

# =============================================================================
# Logging Constants
# =============================================================================

LOG_DIR_ENV_VAR: Final[str] = "TERMTABLE_LOG_DIR"
LOG_FILE_NAME: Final[str] = "termtable.log"
LOG_ROOT_NAME: Final[str] = "termtable"

LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 1024 * 1024  # 1 MB
LOG_BACKUP_COUNT: Final[int] = 3

LOG_CONSOLE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(threadName)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}

# =============================================================================
# Download Constants
# =============================================================================

CHUNK_SIZE: Final[int] = 8192
DEFAULT_OUTPUT_NAME: Final[str] = "download.bin"
