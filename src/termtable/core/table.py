"""Window table: the fixed terminal region redrawn in place.

The table owns an append-only list of lines. Width is allocated to each
block once, when its line is added, from the block's percentage and the
terminal width. Structural changes and redraw passes are serialized by a
single table lock; block contents are read through each block's own lock
while the table lock is held, never the other way round.
"""

from __future__ import annotations

import math
import sys
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, TextIO

from termtable.constants import (
    CARRIAGE_RETURN,
    CURSOR_DOWN_ONE,
    CURSOR_PREVIOUS_LINE,
)
from termtable.exceptions import LayoutError
from termtable.logger import get_logger

if TYPE_CHECKING:
    from termtable.core.blocks import LineBlock
    from termtable.terminal import TerminalSession

logger = get_logger(__name__)

FULL_LINE_PERCENTAGE = 100.0


@dataclass(frozen=True, slots=True)
class PlacedBlock:
    """A block together with the width allocated to it."""

    block: LineBlock
    width: int


@dataclass(frozen=True, slots=True)
class Line:
    """One terminal row; its blocks are fixed once the line exists."""

    blocks: tuple[PlacedBlock, ...]

    def render(self) -> str:
        """Concatenate the current content of every block."""
        return "".join(placed.block.content() for placed in self.blocks)


def allocate_width(percentage: float, terminal_width: int) -> int:
    """Columns granted to a block: floor(percentage% of the terminal)."""
    return math.floor(percentage / 100 * terminal_width)


class WindowTable:
    """Ordered rows of blocks drawn at a fixed place in the terminal.

    Rows are only ever appended. ``render()`` redraws every row with a
    single write so the region never flickers row by row.

    Attributes:
        terminal_width: Column count every line is laid out against
        output: Stream the table is drawn on

    """

    def __init__(
        self, terminal_width: int, output: TextIO | None = None
    ) -> None:
        """Initialize an empty table.

        Args:
            terminal_width: Terminal column count
            output: Output stream (defaults to sys.stdout)

        """
        self.terminal_width = terminal_width
        self.output = output or sys.stdout
        self._lines: list[Line] = []
        self._lock = threading.Lock()

    @classmethod
    def from_session(cls, session: TerminalSession) -> WindowTable:
        """Create a table sized to ``session`` and drawing on its output."""
        return cls(session.width, session.output)

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)

    @property
    def lines(self) -> tuple[Line, ...]:
        """Snapshot of the current lines."""
        with self._lock:
            return tuple(self._lines)

    def add_line(self, *blocks: LineBlock) -> Line:
        """Lay out ``blocks`` as a new row at the bottom of the table.

        Blocks are placed left to right in the order given. Each block is
        initialized with its allocated width as it is laid out.

        Args:
            *blocks: Blocks in visual order

        Returns:
            The new line

        Raises:
            LayoutError: If a block is wider than the terminal, the
                blocks claim more than 100% of the line, or a block
                refuses its width. The table is left unchanged.

        """
        with self._lock:
            placed: list[PlacedBlock] = []
            remaining = FULL_LINE_PERCENTAGE

            for blk in blocks:
                percentage = blk.percentage()
                width = allocate_width(percentage, self.terminal_width)
                blk.init(width)

                if len(blk.content()) > self.terminal_width:
                    msg = (
                        f"block of {len(blk.content())} columns exceeds "
                        f"terminal width {self.terminal_width}"
                    )
                    raise LayoutError(msg)
                if percentage > remaining:
                    msg = (
                        f"blocks claim more than {FULL_LINE_PERCENTAGE:g}% "
                        "of the line"
                    )
                    raise LayoutError(msg)

                remaining -= percentage
                placed.append(PlacedBlock(blk, width))

            line = Line(tuple(placed))
            self._lines.append(line)

            # make room for the new row below the existing ones
            self.output.write("\n")
            self.output.flush()

            logger.debug(
                "Added line %d with widths %s",
                len(self._lines),
                [p.width for p in placed],
            )
            return line

    def render(self) -> None:
        """Redraw every row in place with one write.

        Moves the cursor to the first row, writes each row followed by a
        cursor-down and carriage return, and leaves the cursor below the
        last row. Does nothing while the table is empty.
        """
        with self._lock:
            if not self._lines:
                return

            rows = "".join(
                f"{line.render()}{CURSOR_DOWN_ONE}{CARRIAGE_RETURN}"
                for line in self._lines
            )
            self.output.write(
                CURSOR_PREVIOUS_LINE.format(len(self._lines)) + rows
            )
            self.output.flush()
