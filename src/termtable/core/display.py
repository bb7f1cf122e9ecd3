"""Table session: terminal, table and refresh loop acquired together.

``table_session()`` is the entry point most callers want. It acquires the
terminal, sizes a ``WindowTable`` to it, starts the ``RefreshScheduler``
and, on the way out, stops the scheduler (drawing the final frame) and
restores the terminal on every exit path.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, TextIO

from termtable.constants import REFRESH_INTERVAL_SECONDS
from termtable.core.display_logger import console_logging_suppressed
from termtable.core.scheduler import RefreshScheduler
from termtable.core.table import WindowTable
from termtable.logger import get_logger
from termtable.terminal import TerminalSession

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = get_logger(__name__)


@asynccontextmanager
async def table_session(
    refresh_interval: float = REFRESH_INTERVAL_SECONDS,
    input_fd: int | None = None,
    output: TextIO | None = None,
) -> AsyncIterator[WindowTable]:
    """Run a live table for the duration of the ``async with`` block.

    Args:
        refresh_interval: Seconds between redraws
        input_fd: Terminal input descriptor (defaults to stdin)
        output: Terminal output stream (defaults to sys.stdout)

    Yields:
        The table; register rows with ``add_line``

    Raises:
        TerminalError: If the terminal cannot be set up. Nothing has been
            started in that case.

    Example:
        async with table_session() as table:
            line = ProgressLine()
            table.add_line(*line.blocks())
            await download(url, line)

    """
    session = TerminalSession.setup(input_fd=input_fd, output=output)
    try:
        with console_logging_suppressed():
            table = WindowTable.from_session(session)
            scheduler = RefreshScheduler(table, refresh_interval)
            scheduler.start(asyncio.Event())
            try:
                yield table
            finally:
                await scheduler.stop()
    finally:
        session.close()
        logger.debug("Table session closed")
