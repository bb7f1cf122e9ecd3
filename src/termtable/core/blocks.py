"""Line blocks: the fixed-width cells a table row is made of.

Each block owns a share of the row (a percentage of the terminal width)
and a content buffer whose length equals the width allocated to it by
``WindowTable.add_line``. The set of block kinds is closed:

- ``ProgressBarBlock``: ``[====      ]`` advanced by percentage deltas
- ``BlankBlock``: spaces, used as a separator
- ``InfoBlock``: free text, padded or truncated to fit

Every mutable block guards its buffer with its own lock. A block never
touches the table, so holding a block lock can never wait on the table
lock.
"""

from __future__ import annotations

import math
import threading
from typing import Protocol, runtime_checkable

from termtable.constants import (
    BAR_CLOSE_CHAR,
    BAR_OPEN_CHAR,
    BLANK_CHAR,
    DEFAULT_FILL_SYMBOL,
    PROGRESS_COMPLETE,
    PROGRESS_LINE_BAR_PERCENTAGE,
    PROGRESS_LINE_BLANK_PERCENTAGE,
    PROGRESS_LINE_INFO_PERCENTAGE,
)
from termtable.exceptions import LayoutError

# Narrowest progress bar: the two brackets and nothing between them
MIN_BAR_WIDTH = 2


@runtime_checkable
class LineBlock(Protocol):
    """Capability shared by every block kind."""

    def init(self, width: int) -> None:
        """Allocate a buffer of exactly ``width`` characters (once)."""
        ...

    def content(self) -> str:
        """Return the current buffer."""
        ...

    def percentage(self) -> float:
        """Return the share of the line assigned at construction."""
        ...


def _validate_percentage(percentage: float) -> float:
    if percentage < 0:
        msg = f"block percentage must be >= 0, got {percentage}"
        raise ValueError(msg)
    return float(percentage)


def _truncated_index(percentage: int, size: int) -> int:
    """Index reached by ``percentage`` of ``size`` cells, rounded down."""
    return math.floor(percentage / 100 * size)


class _BaseBlock:
    """Percentage bookkeeping and the init-once guard."""

    def __init__(self, percentage: float) -> None:
        self._percentage = _validate_percentage(percentage)
        self._lock = threading.Lock()
        self._initialized = False

    def percentage(self) -> float:
        return self._percentage

    def _claim_init(self) -> None:
        # caller holds self._lock
        if self._initialized:
            msg = f"{type(self).__name__} is already placed on a line"
            raise LayoutError(msg)
        self._initialized = True


class ProgressBarBlock(_BaseBlock):
    """A bracketed bar filled left to right as progress is reported.

    Filling is floor-based over non-overlapping ranges, so the bar can lag
    behind the true percentage by a cell until it is complete. Once the
    completed counter reaches 100 the bar no longer changes.

    Example:
        >>> bar = ProgressBarBlock(40)
        >>> bar.init(12)
        >>> bar.progress(30)
        False
        >>> bar.content()
        '[==        ]'

    """

    def __init__(
        self,
        percentage: float,
        fill_symbol: str = DEFAULT_FILL_SYMBOL,
    ) -> None:
        """Initialize the bar.

        Args:
            percentage: Share of the line width
            fill_symbol: Single character drawn for completed cells

        """
        super().__init__(percentage)
        if len(fill_symbol) != 1:
            msg = f"fill_symbol must be one character, got {fill_symbol!r}"
            raise ValueError(msg)
        self._fill_symbol = fill_symbol
        self._content: list[str] = []
        self._completed = 0

    def init(self, width: int) -> None:
        """Draw the brackets and blank every cell between them.

        Raises:
            LayoutError: If ``width`` cannot hold both brackets, or the
                block was already initialized

        """
        with self._lock:
            if width < MIN_BAR_WIDTH:
                msg = (
                    f"progress bar needs at least {MIN_BAR_WIDTH} columns, "
                    f"got {width}"
                )
                raise LayoutError(msg)
            self._claim_init()
            self._content = [BLANK_CHAR] * width
            self._content[0] = BAR_OPEN_CHAR
            self._content[-1] = BAR_CLOSE_CHAR

    def content(self) -> str:
        with self._lock:
            return "".join(self._content)

    @property
    def completed(self) -> int:
        """Completed percentage, 0-100."""
        with self._lock:
            return self._completed

    @property
    def is_complete(self) -> bool:
        """Whether the bar has reached 100%."""
        with self._lock:
            return self._completed >= PROGRESS_COMPLETE

    def progress(self, delta: int) -> bool:
        """Advance the bar by ``delta`` percent.

        Only cells between the brackets are filled; index 0 always keeps
        the opening bracket.

        Args:
            delta: Percentage points to add (>= 0)

        Returns:
            True if the bar was already complete and nothing changed,
            False otherwise

        Raises:
            ValueError: If ``delta`` is negative

        """
        if delta < 0:
            msg = f"progress delta must be >= 0, got {delta}"
            raise ValueError(msg)

        with self._lock:
            if self._completed >= PROGRESS_COMPLETE:
                return True

            size = len(self._content)
            interior = size - 2
            from_idx = max(_truncated_index(self._completed, interior), 1)
            to_idx = min(
                _truncated_index(self._completed + delta, interior), size - 1
            )
            for i in range(from_idx, to_idx):
                self._content[i] = self._fill_symbol

            self._completed = min(
                PROGRESS_COMPLETE, self._completed + delta
            )
            return False


class BlankBlock(_BaseBlock):
    """Spaces only; its content never changes after ``init``."""

    def __init__(self, percentage: float) -> None:
        super().__init__(percentage)
        self._content = ""

    def init(self, width: int) -> None:
        with self._lock:
            self._claim_init()
            self._content = BLANK_CHAR * width

    def content(self) -> str:
        return self._content


class InfoBlock(_BaseBlock):
    """Free text fitted to the allocated width."""

    def __init__(self, percentage: float) -> None:
        super().__init__(percentage)
        self._content = ""
        self._max_width = 0

    def init(self, width: int) -> None:
        with self._lock:
            self._claim_init()
            self._max_width = width
            self._content = BLANK_CHAR * width

    def content(self) -> str:
        with self._lock:
            return self._content

    def update(self, text: str) -> None:
        """Replace the text.

        Shorter text is right-padded with blanks; longer text is cut at
        the maximum width without an ellipsis.

        Args:
            text: New text to show

        """
        with self._lock:
            self._content = text[: self._max_width].ljust(
                self._max_width, BLANK_CHAR
            )


class ProgressLine:
    """The standard producer row: info text, a gap, then a progress bar.

    Example:
        >>> line = ProgressLine()
        >>> table.add_line(*line.blocks())
        >>> line.update_info("Downloading part-001.ts")
        >>> line.progress(25)

    """

    def __init__(self, fill_symbol: str = DEFAULT_FILL_SYMBOL) -> None:
        self._info = InfoBlock(PROGRESS_LINE_INFO_PERCENTAGE)
        self._blank = BlankBlock(PROGRESS_LINE_BLANK_PERCENTAGE)
        self._bar = ProgressBarBlock(PROGRESS_LINE_BAR_PERCENTAGE, fill_symbol)

    @property
    def info(self) -> InfoBlock:
        return self._info

    @property
    def blank(self) -> BlankBlock:
        return self._blank

    @property
    def bar(self) -> ProgressBarBlock:
        return self._bar

    def blocks(self) -> tuple[LineBlock, ...]:
        """Return the blocks in left-to-right order for ``add_line``."""
        return (self._info, self._blank, self._bar)

    def update_info(self, text: str) -> None:
        self._info.update(text)

    def progress(self, delta: int) -> bool:
        return self._bar.progress(delta)
