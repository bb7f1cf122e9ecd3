"""Queue-backed logging for termtable.

Every ``termtable.*`` logger propagates to the ``termtable`` logger, whose
only handler is a QueueHandler. A QueueListener thread drains the queue
into the console and file handlers, so worker threads and the event loop
never block on log I/O.
"""

import atexit
import contextlib
import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from termtable.constants import LOG_ROOT_NAME
from termtable.logger.config import load_log_settings
from termtable.logger.handlers import (
    build_handlers,
    is_console_handler,
    level_number,
)

_FLUSH_TIMEOUT_SECONDS = 5.0


@dataclass
class LoggerState:
    """Process-wide logging state; ``lock`` serializes setup and teardown."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    records: queue.Queue | None = None
    listener: QueueListener | None = None
    config_applied: bool = False

    @property
    def handlers(self) -> tuple[logging.Handler, ...]:
        """Handlers behind the queue; empty before setup."""
        if self.listener is None:
            return ()
        return tuple(self.listener.handlers)


_state = LoggerState()


def get_state() -> LoggerState:
    return _state


def setup_logging(
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> None:
    """Install the queue and its handlers on the ``termtable`` logger.

    Only the first call has an effect until ``clear_logger_state()``.
    Arguments left as None take the values of ``load_log_settings()``.

    Args:
        console_level: Console level name
        file_level: File level name
        log_file: Log file path
        enable_file_logging: Whether to attach the file handler

    Raises:
        ConfigurationError: If the log file cannot be opened

    """
    with _state.lock:
        if _state.listener is not None:
            return

        default_console, default_file, default_path = load_log_settings()
        handlers = build_handlers(
            console_level or default_console,
            file_level or default_file,
            (log_file or default_path) if enable_file_logging else None,
        )

        root = logging.getLogger(LOG_ROOT_NAME)
        root.setLevel(logging.DEBUG)
        root.propagate = False
        for stale in root.handlers[:]:
            root.removeHandler(stale)
            stale.close()

        _state.records = queue.Queue()
        _state.listener = QueueListener(
            _state.records, *handlers, respect_handler_level=True
        )
        _state.listener.start()
        root.addHandler(QueueHandler(_state.records))


def get_logger(name: str = LOG_ROOT_NAME) -> logging.Logger:
    """Return the logger called ``name``, setting up logging on first use.

    Call it as ``get_logger(__name__)`` at module level.
    """
    setup_logging()
    return logging.getLogger(name)


def console_handlers() -> list[logging.Handler]:
    """Return the running stderr handlers."""
    return [h for h in _state.handlers if is_console_handler(h)]


def set_console_level(level: str) -> None:
    """Change the console level, e.g. to ``"DEBUG"`` for ``--verbose``."""
    for handler in console_handlers():
        handler.setLevel(level_number(level, logging.WARNING))


def flush_all_handlers() -> None:
    """Wait for queued records to be handled, then flush every handler."""
    records = _state.records
    if records is None:
        return

    # QueueListener never calls task_done(), so poll instead of join()
    deadline = time.monotonic() + _FLUSH_TIMEOUT_SECONDS
    while not records.empty() and time.monotonic() < deadline:
        time.sleep(0.01)
    # the listener may still be handling the last record it dequeued
    time.sleep(0.05)

    for handler in _state.handlers:
        with contextlib.suppress(OSError, ValueError):
            handler.flush()


def _stop_listener() -> None:
    if _state.listener is None:
        return
    flush_all_handlers()
    _state.listener.stop()
    for handler in _state.listener.handlers:
        handler.close()
    _state.listener = None
    _state.records = None


atexit.register(_stop_listener)


def clear_logger_state() -> None:
    """Stop the listener and detach every ``termtable`` handler.

    Warning:
        Intended for tests only. The next ``get_logger()`` call sets
        logging up again.

    """
    with _state.lock:
        _stop_listener()
        _state.config_applied = False

        for name in list(logging.Logger.manager.loggerDict):
            if name != LOG_ROOT_NAME and not name.startswith(
                f"{LOG_ROOT_NAME}."
            ):
                continue
            instance = logging.getLogger(name)
            for handler in instance.handlers[:]:
                instance.removeHandler(handler)
                handler.close()
