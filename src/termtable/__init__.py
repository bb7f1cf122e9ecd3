"""Live, concurrently updated multi-row progress table for ANSI terminals.

Usage:
    >>> from termtable import ProgressLine, table_session
    >>> async with table_session() as table:
    ...     line = ProgressLine()
    ...     table.add_line(*line.blocks())
    ...     line.progress(10)
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("termtable")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"

from termtable.core import (  # noqa: E402
    BlankBlock,
    InfoBlock,
    LineBlock,
    ProgressBarBlock,
    ProgressLine,
    RefreshScheduler,
    WindowTable,
    table_session,
)
from termtable.exceptions import (  # noqa: E402
    LayoutError,
    TerminalError,
    TermTableError,
)
from termtable.terminal import TerminalSession  # noqa: E402

__all__ = [
    "BlankBlock",
    "InfoBlock",
    "LayoutError",
    "LineBlock",
    "ProgressBarBlock",
    "ProgressLine",
    "RefreshScheduler",
    "TermTableError",
    "TerminalError",
    "TerminalSession",
    "WindowTable",
    "__version__",
    "table_session",
]
