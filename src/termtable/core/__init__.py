"""Core rendering engine: blocks, table layout and refresh scheduling."""

from termtable.core.blocks import (
    BlankBlock,
    InfoBlock,
    LineBlock,
    ProgressBarBlock,
    ProgressLine,
)
from termtable.core.display import table_session
from termtable.core.scheduler import RefreshScheduler
from termtable.core.table import Line, PlacedBlock, WindowTable

__all__ = [
    "BlankBlock",
    "InfoBlock",
    "Line",
    "LineBlock",
    "PlacedBlock",
    "ProgressBarBlock",
    "ProgressLine",
    "RefreshScheduler",
    "WindowTable",
    "table_session",
]
