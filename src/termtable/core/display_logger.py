"""Quiet console logging while the table owns the terminal.

An INFO line printed mid-redraw scrolls the table region and leaves torn
rows behind, so only WARNING and above reach the console while a table
is live. The log file keeps its level.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from termtable.logger import console_handlers


@contextmanager
def console_logging_suppressed(
    floor: int = logging.WARNING,
) -> Iterator[None]:
    """Raise every console handler to at least ``floor`` inside the block.

    Handlers already stricter than ``floor`` keep their level. Original
    levels are restored on exit, including when the block raises.

    Example:
        with console_logging_suppressed():
            logger.info("only in the log file")

    """
    saved = {handler: handler.level for handler in console_handlers()}
    for handler, level in saved.items():
        handler.setLevel(max(level, floor))
    try:
        yield
    finally:
        for handler, level in saved.items():
            handler.setLevel(level)
