"""Background refresh of a WindowTable.

The scheduler redraws the table at a fixed interval until its cancel
event is set, then draws one last frame. Producer writes that finished
before the cancel event was observed are in that last frame; a write
racing the final tick may land one frame late and is not waited for.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from termtable.constants import REFRESH_INTERVAL_SECONDS
from termtable.logger import get_logger

if TYPE_CHECKING:
    from termtable.core.table import WindowTable

logger = get_logger(__name__)


class RefreshScheduler:
    """Periodic redraw task for one table.

    Example:
        cancel = asyncio.Event()
        scheduler = RefreshScheduler(table)
        scheduler.start(cancel)
        # ... producers update their blocks ...
        cancel.set()
        await scheduler.wait()  # final frame has been drawn

    """

    def __init__(
        self,
        table: WindowTable,
        interval: float = REFRESH_INTERVAL_SECONDS,
    ) -> None:
        """Initialize the scheduler.

        Args:
            table: Table to redraw
            interval: Seconds between redraws

        """
        if interval <= 0:
            msg = f"refresh interval must be > 0, got {interval}"
            raise ValueError(msg)
        self._table = table
        self._interval = interval
        self._task: asyncio.Task[None] | None = None
        self._cancel: asyncio.Event | None = None

    @property
    def interval(self) -> float:
        return self._interval

    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, cancel: asyncio.Event) -> asyncio.Task[None]:
        """Launch the redraw loop on the running event loop.

        Args:
            cancel: Event that stops the loop once set

        Returns:
            The background task

        Raises:
            RuntimeError: If the scheduler was already started

        """
        if self._task is not None:
            msg = "RefreshScheduler already started"
            raise RuntimeError(msg)
        self._cancel = cancel
        self._task = asyncio.create_task(
            self._refresh_loop(cancel), name="termtable-refresh"
        )
        logger.debug("Refresh loop started (interval=%.3fs)", self._interval)
        return self._task

    async def wait(self) -> None:
        """Wait for the loop to finish; render errors propagate here."""
        if self._task is not None:
            await self._task

    async def stop(self) -> None:
        """Set the cancel event and wait for the final frame."""
        if self._cancel is not None:
            self._cancel.set()
        await self.wait()

    async def _refresh_loop(self, cancel: asyncio.Event) -> None:
        try:
            while not cancel.is_set():
                self._table.render()
                try:
                    await asyncio.wait_for(cancel.wait(), self._interval)
                except TimeoutError:
                    continue
        except asyncio.CancelledError:
            self._table.render()
            raise

        self._table.render()
        logger.debug("Refresh loop stopped")
