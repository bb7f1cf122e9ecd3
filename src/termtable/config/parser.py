"""Reading and annotating ``settings.conf``.

Values may carry trailing ``#`` or ``;`` comments. The file written by
``ConfigManager.save_global_config`` starts with a header and has a
comment block above every section explaining its keys.
"""

import configparser
from datetime import UTC, datetime

from termtable.constants import (
    CONFIG_VERSION,
    ISO_DATETIME_FORMAT,
    SECTION_DEFAULT,
    SECTION_DIRECTORY,
    SECTION_NETWORK,
)

SECTION_COMMENTS: dict[str, str] = {
    SECTION_DEFAULT: """\
# ----------------------------------------
# Table and logging
# ----------------------------------------
# log_level: log file detail (DEBUG, INFO, WARNING, ERROR, CRITICAL)
# console_log_level: stderr detail, same names
# refresh_interval_ms: milliseconds between redraws (10-1000)
# fill_symbol: one character drawn in progress bars ('#' and ';' not allowed)
# max_concurrent_downloads: parallel fetches (1-10)
""",
    SECTION_NETWORK: """
# ----------------------------------------
# Network
# ----------------------------------------
# retry_attempts: tries per URL before giving up (1-10)
# timeout_seconds: connect timeout; reads get 3x, whole requests 60x (5-60)
""",
    SECTION_DIRECTORY: """
# ----------------------------------------
# Directories
# ----------------------------------------
# download: where `termtable fetch` saves files without -o
# logs: where termtable.log is written
""",
}


class CommentAwareConfigParser(configparser.ConfigParser):
    """ConfigParser with inline comments and no ``%`` interpolation."""

    def __init__(self) -> None:
        super().__init__(
            inline_comment_prefixes=("#", ";"),
            interpolation=None,
        )


def file_header(now: datetime | None = None) -> str:
    """Return the comment block written at the top of ``settings.conf``.

    Args:
        now: Timestamp to record (defaults to the current UTC time)

    """
    stamp = (now or datetime.now(tz=UTC)).strftime(ISO_DATETIME_FORMAT)
    return (
        "# termtable configuration\n"
        "# Edit values in place; unknown or invalid values fall back to\n"
        "# their defaults with a warning.\n"
        "#\n"
        f"# Written: {stamp}\n"
        f"# Configuration version: {CONFIG_VERSION}\n"
        "\n"
    )
