"""Terminal session handling."""

from termtable.terminal.session import TerminalSession, parse_cursor_reply

__all__ = ["TerminalSession", "parse_cursor_reply"]
