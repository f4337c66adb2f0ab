"""Logging setup for the OhMyRunPod dashboard.

The dashboard owns the terminal while the alternate screen is up. Records
go to a log file when one is configured. Otherwise they go to stderr
through a ``ConsoleLogHandler``, which holds them back while the terminal
is in full-screen mode and writes them out once it is restored.
"""

import logging
import os
import sys
from contextlib import contextmanager
from logging.handlers import MemoryHandler
from typing import Iterator, List, Optional, TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Records kept while held; the oldest are dropped beyond this
HELD_RECORD_LIMIT = 1000


class ConsoleLogHandler(MemoryHandler):
    """
    Stderr handler that can be held.

    Unheld, every record is written straight through. Held, records are
    buffered (at most ``capacity``) until ``release()``.
    """

    def __init__(self, stream: Optional[TextIO] = None, capacity: int = HELD_RECORD_LIMIT):
        super().__init__(capacity, target=logging.StreamHandler(stream or sys.stderr))
        self.held = False

    def setFormatter(self, fmt: Optional[logging.Formatter]) -> None:
        super().setFormatter(fmt)
        self.target.setFormatter(fmt)

    def shouldFlush(self, record: logging.LogRecord) -> bool:
        if not self.held:
            return True
        if len(self.buffer) > self.capacity:
            del self.buffer[0]
        return False

    def hold(self) -> None:
        self.held = True

    def release(self) -> None:
        """Stop holding and write out everything buffered so far."""
        self.held = False
        self.flush()


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """
    Configure the root logger, replacing any handlers already installed.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL); unknown
            names fall back to WARNING
        log_file: File to append records to instead of stderr
    """
    if log_file:
        handler: logging.Handler = logging.FileHandler(os.path.expanduser(log_file))
    else:
        handler = ConsoleLogHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        handlers=[handler],
        force=True,
    )


@contextmanager
def held_console_logging() -> Iterator[List[ConsoleLogHandler]]:
    """Hold the root logger's console handlers for the duration of the block."""
    handlers = [h for h in logging.getLogger().handlers if isinstance(h, ConsoleLogHandler)]
    for handler in handlers:
        handler.hold()
    try:
        yield handlers
    finally:
        for handler in handlers:
            handler.release()


def get_logger(name: str) -> logging.Logger:
    """Logger for a module; pass ``__name__``."""
    return logging.getLogger(name)
