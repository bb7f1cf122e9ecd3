"""Terminal session: width, raw input mode and initial cursor row.

A session is acquired once at startup and released exactly once at
shutdown. While it is held the terminal neither echoes input nor buffers
it by line, so the cursor-position reply can be read byte by byte and
typed characters never land inside the redraw region.

Known limitation:
    The cursor-position reply is read with a blocking ``os.read`` on the
    input descriptor. It cannot be interrupted by asyncio cancellation; a
    terminal that never answers ``ESC[6n`` hangs ``setup()``.
"""

from __future__ import annotations

import os
import re
import sys
import termios
import tty
from typing import TYPE_CHECKING, TextIO

from termtable.constants import (
    CURSOR_POSITION_QUERY,
    CURSOR_REPLY_MAX_BYTES,
    CURSOR_REPLY_TERMINATOR,
)
from termtable.exceptions import TerminalError
from termtable.logger import get_logger

if TYPE_CHECKING:
    from typing import Self

logger = get_logger(__name__)

# Expected format: ESC [ {row} ; {col} R, possibly after type-ahead bytes
_CURSOR_REPLY_RE = re.compile(r"\x1b\[(\d+);(\d+)R$")


def parse_cursor_reply(reply: str) -> tuple[int, int]:
    """Parse a cursor-position report.

    Args:
        reply: Bytes read from the terminal, decoded

    Returns:
        Tuple of (row, col), both 1-based

    Raises:
        TerminalError: If the reply does not end in ``ESC[row;colR``

    """
    match = _CURSOR_REPLY_RE.search(reply)
    if match is None:
        msg = f"unexpected cursor position reply {reply!r}"
        raise TerminalError(msg)
    return int(match.group(1)), int(match.group(2))


def _read_cursor_reply(fd: int) -> str:
    """Read the terminal's reply up to and including the ``R`` marker."""
    buf = bytearray()
    while len(buf) < CURSOR_REPLY_MAX_BYTES:
        chunk = os.read(fd, 1)
        if not chunk:
            msg = "terminal closed before answering cursor query"
            raise TerminalError(msg)
        buf += chunk
        if chunk == CURSOR_REPLY_TERMINATOR:
            return buf.decode("ascii", errors="replace")
    msg = f"cursor position reply exceeded {CURSOR_REPLY_MAX_BYTES} bytes"
    raise TerminalError(msg)


def _query_cursor_position(fd: int, output: TextIO) -> tuple[int, int]:
    """Ask the terminal where the cursor is and parse the answer."""
    try:
        output.write(CURSOR_POSITION_QUERY)
        output.flush()
        reply = _read_cursor_reply(fd)
    except OSError as e:
        msg = f"cannot query cursor position: {e}"
        raise TerminalError(msg) from e
    return parse_cursor_reply(reply)


class TerminalSession:
    """An acquired terminal: fixed width, raw input, known start row.

    Use ``TerminalSession.setup()`` rather than the constructor. The
    session is a context manager; leaving the block restores the saved
    terminal mode.

    Attributes:
        width: Terminal column count, fixed for the whole session
        initial_row: 1-based cursor row when the session started
        input_fd: Descriptor raw mode was applied to
        output: Stream redraws are written to

    """

    def __init__(
        self,
        width: int,
        initial_row: int,
        input_fd: int,
        output: TextIO,
        saved_mode: list,
    ) -> None:
        self.width = width
        self.initial_row = initial_row
        self.input_fd = input_fd
        self.output = output
        self._saved_mode = saved_mode
        self._closed = False

    @classmethod
    def setup(
        cls,
        input_fd: int | None = None,
        output: TextIO | None = None,
    ) -> TerminalSession:
        """Acquire the terminal.

        Args:
            input_fd: Terminal input descriptor (defaults to stdin)
            output: Terminal output stream (defaults to sys.stdout)

        Returns:
            The acquired session

        Raises:
            TerminalError: If the width cannot be read, raw mode cannot be
                enabled, or the cursor position reply is malformed. Raw mode
                is restored before any error leaves this method, including
                KeyboardInterrupt while waiting for the reply.

        """
        output = output or sys.stdout
        if input_fd is None:
            input_fd = sys.stdin.fileno()

        try:
            width = os.get_terminal_size(output.fileno()).columns
        except (OSError, ValueError) as e:
            msg = f"cannot read terminal width: {e}"
            raise TerminalError(msg) from e

        try:
            saved_mode = termios.tcgetattr(input_fd)
            tty.setcbreak(input_fd, termios.TCSANOW)
        except (termios.error, OSError) as e:
            msg = f"cannot enable raw mode: {e}"
            raise TerminalError(msg) from e

        try:
            row, _col = _query_cursor_position(input_fd, output)
        except BaseException:
            termios.tcsetattr(input_fd, termios.TCSADRAIN, saved_mode)
            raise

        logger.debug("Terminal session started: width=%d row=%d", width, row)
        return cls(width, row, input_fd, output, saved_mode)

    @property
    def closed(self) -> bool:
        """Whether the saved mode has already been restored."""
        return self._closed

    def close(self) -> None:
        """Restore the saved terminal mode; later calls do nothing."""
        if self._closed:
            return
        self._closed = True
        termios.tcsetattr(self.input_fd, termios.TCSADRAIN, self._saved_mode)
        logger.debug("Terminal mode restored")

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()
