"""Console formatting for termtable log records."""

import logging

from termtable.constants import LOG_COLORS


class ConsoleFormatter(logging.Formatter):
    """Bare text for INFO records, a structured line for the rest.

    INFO records are command output ("Done a.bin") and print as the
    message alone. Other levels use the structured format with the level
    name wrapped in its ANSI color.

    Example Output:
        Done video.ts
        12:30:45 - termtable.cli - WARNING - no terminal

    """

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == logging.INFO:
            return record.getMessage()

        color = LOG_COLORS.get(record.levelname)
        if color is None:
            return super().format(record)

        # the record is shared with the file handler
        plain = record.levelname
        record.levelname = f"{color}{plain}{LOG_COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = plain
