"""Pytest configuration and fixtures for termtable tests."""

import contextlib
import io
import logging
import os
from types import SimpleNamespace

import pytest

# Attributes returned by the mocked termios.tcgetattr
SAVED_MODE = [0, 1, 2, 3, 4, 5, []]


class FakeTerminalOutput(io.StringIO):
    """StringIO that reports a descriptor, as a real terminal stream does."""

    def fileno(self) -> int:
        return 1


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for all loggers during tests.

    This allows pytest's caplog fixture to capture logs from all loggers,
    even those created with propagate=False in production code.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("termtable"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logger = logging.getLogger(name)
        logger.propagate = propagate_value


@pytest.fixture
def terminal_output() -> FakeTerminalOutput:
    """Capture everything written to the terminal."""
    return FakeTerminalOutput()


@pytest.fixture
def cursor_pipe():
    """A pipe standing in for the terminal input descriptor.

    Yields:
        Tuple of (read_fd, write_fd); write the cursor reply to write_fd

    """
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        with contextlib.suppress(OSError):
            os.close(fd)


@pytest.fixture
def fake_tty(mocker):
    """Mock the terminal-size and termios calls of the session module."""
    return SimpleNamespace(
        get_terminal_size=mocker.patch(
            "termtable.terminal.session.os.get_terminal_size",
            return_value=os.terminal_size((80, 24)),
        ),
        tcgetattr=mocker.patch(
            "termtable.terminal.session.termios.tcgetattr",
            return_value=SAVED_MODE,
        ),
        setcbreak=mocker.patch("termtable.terminal.session.tty.setcbreak"),
        tcsetattr=mocker.patch("termtable.terminal.session.termios.tcsetattr"),
    )
