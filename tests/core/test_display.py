"""Tests for table_session and console log suppression."""

import logging
import os

import pytest

from termtable.core import ProgressLine, table_session
from termtable.core.display_logger import console_logging_suppressed
from termtable.exceptions import TerminalError
from termtable.logger import console_handlers, get_logger, set_console_level


def _console_handlers() -> list[logging.Handler]:
    get_logger("termtable.tests")
    return console_handlers()


class TestTableSession:
    """Tests for the table_session context manager."""

    @pytest.mark.asyncio
    async def test_session_draws_and_restores(
        self, fake_tty, cursor_pipe, terminal_output
    ) -> None:
        """The final frame is drawn and the terminal mode restored."""
        read_fd, write_fd = cursor_pipe
        os.write(write_fd, b"\x1b[3;1R")

        async with table_session(
            refresh_interval=0.01, input_fd=read_fd, output=terminal_output
        ) as table:
            line = ProgressLine()
            table.add_line(*line.blocks())
            line.update_info("done")
            line.progress(100)
            fake_tty.tcsetattr.assert_not_called()

        written = terminal_output.getvalue()
        assert written.startswith("\x1b[6n\n")
        final_row = "done".ljust(32) + " " * 16 + "[" + "=" * 29 + " ]"
        assert written.endswith("\x1b[1F" + final_row + "\x1b[1B\r")
        fake_tty.tcsetattr.assert_called_once()
        assert fake_tty.tcsetattr.call_args.args[2] == (
            fake_tty.tcgetattr.return_value
        )

    @pytest.mark.asyncio
    async def test_restores_terminal_when_body_raises(
        self, fake_tty, cursor_pipe, terminal_output
    ) -> None:
        """Errors inside the block still stop the loop and restore."""
        read_fd, write_fd = cursor_pipe
        os.write(write_fd, b"\x1b[3;1R")

        with pytest.raises(RuntimeError, match="boom"):
            async with table_session(
                refresh_interval=0.01,
                input_fd=read_fd,
                output=terminal_output,
            ):
                raise RuntimeError("boom")

        fake_tty.tcsetattr.assert_called_once()

    @pytest.mark.asyncio
    async def test_setup_failure_starts_nothing(
        self, fake_tty, terminal_output
    ) -> None:
        """A terminal that cannot be sized raises before any drawing."""
        fake_tty.get_terminal_size.side_effect = OSError("not a tty")

        with pytest.raises(TerminalError):
            async with table_session(input_fd=0, output=terminal_output):
                pytest.fail("body must not run")

        assert terminal_output.getvalue() == ""
        fake_tty.tcgetattr.assert_not_called()


class TestConsoleLoggingSuppressed:
    """Tests for console_logging_suppressed."""

    def test_raises_console_level_then_restores(self) -> None:
        """Console handlers pass only WARNING+ while suppressed."""
        handlers = _console_handlers()
        assert handlers
        original = [h.level for h in handlers]
        set_console_level("DEBUG")
        try:
            with console_logging_suppressed():
                assert all(h.level == logging.WARNING for h in handlers)
            assert all(h.level == logging.DEBUG for h in handlers)
        finally:
            for handler, level in zip(handlers, original, strict=True):
                handler.setLevel(level)

    def test_keeps_stricter_level(self) -> None:
        """An ERROR console handler is not lowered to WARNING."""
        handlers = _console_handlers()
        original = [h.level for h in handlers]
        set_console_level("ERROR")
        try:
            with console_logging_suppressed():
                assert all(h.level == logging.ERROR for h in handlers)
        finally:
            for handler, level in zip(handlers, original, strict=True):
                handler.setLevel(level)
