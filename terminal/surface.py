"""Terminal surface: full-screen mode, positioned output, geometry and keys.

Two implementations share the ``Surface`` interface:

- ``ConsoleSurface`` drives a real terminal through a ``rich`` console
  (alternate screen, cursor visibility, cursor movement, styled output)
  and reads keystrokes from stdin in cbreak mode.
- ``MemorySurface`` renders into an in-memory character grid and replays a
  scripted key sequence. Used by the tests and for headless rendering.
"""

from __future__ import annotations

import os
import select
import signal
import sys
import threading
from abc import ABC, abstractmethod
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable, Iterator, TextIO

from rich.cells import cell_len
from rich.console import Console
from rich.control import Control
from rich.text import Text

from common.logging_setup import get_logger, held_console_logging
from terminal.errors import NoTerminal
from terminal.keys import ESC, ESCAPE_INTRODUCERS, ESCAPE_SEQUENCE_LENGTH, Key, decode_key
from terminal.styles import NORMAL, TextStyle

logger = get_logger(__name__)

# Signals that end the process and must still restore the terminal
TERMINATION_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


@dataclass(frozen=True)
class TerminalGeometry:
    """Terminal size in character cells."""

    rows: int
    cols: int

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Invalid terminal geometry {self.rows}x{self.cols}")


def _raise_system_exit(signum, frame) -> None:
    raise SystemExit(128 + signum)


class Surface(ABC):
    """Character-grid output and blocking key input."""

    @abstractmethod
    def enter_fullscreen(self) -> None:
        """Save the screen, hide the cursor and clear the display."""

    @abstractmethod
    def exit_fullscreen(self) -> None:
        """Show the cursor, restore the saved screen and clear the display."""

    @abstractmethod
    def move_cursor(self, row: int, col: int) -> None:
        """Move the cursor to a zero-based cell."""

    @abstractmethod
    def write(self, text: str, style: TextStyle = NORMAL) -> None:
        """Write text at the cursor. Callers bound the width."""

    @abstractmethod
    def clear(self) -> None:
        """Clear the whole display."""

    @abstractmethod
    def query_geometry(self) -> TerminalGeometry:
        """Return the current terminal size."""

    @abstractmethod
    def read_key(self) -> Key:
        """Block until one keystroke arrives and decode it."""

    def flush(self) -> None:
        """Push any buffered output to the terminal."""

    def write_at(self, row: int, col: int, text: str, style: TextStyle = NORMAL) -> None:
        """Move the cursor and write in one call."""
        self.move_cursor(row, col)
        self.write(text, style)

    @contextmanager
    def fullscreen(self) -> Iterator["Surface"]:
        """
        Hold the full-screen mode for the duration of the block.

        The terminal is restored on every exit path: normal return,
        exceptions, Ctrl-C, and termination signals (converted to
        ``SystemExit`` while the block runs). Console log records are held
        back until the terminal has been restored.
        """
        previous = {}
        if threading.current_thread() is threading.main_thread():
            for signum in TERMINATION_SIGNALS:
                previous[signum] = signal.signal(signum, _raise_system_exit)

        with held_console_logging():
            try:
                self.enter_fullscreen()
                yield self
            finally:
                self.exit_fullscreen()
                for signum, handler in previous.items():
                    signal.signal(signum, handler)


class ConsoleSurface(Surface):
    """Surface backed by a rich console on a real terminal."""

    def __init__(
        self,
        console: Console | None = None,
        stdin: TextIO | None = None,
        escape_timeout: float = 0.05,
    ) -> None:
        """
        Initialize the console surface.

        Args:
            console: Rich console to draw on (a new one on stdout by default)
            stdin: Stream keystrokes are read from
            escape_timeout: Seconds to wait for the rest of an escape sequence
        """
        self.console = console or Console(highlight=False)
        self._stdin = stdin or sys.stdin
        self.escape_timeout = escape_timeout
        self._tty_settings = None
        self._active = False
        # Keystroke read while looking for an escape sequence
        self._pending = ""

    def query_geometry(self) -> TerminalGeometry:
        if not self.console.is_terminal:
            raise NoTerminal("Output is not an interactive terminal")
        width, height = self.console.size
        if width <= 0 or height <= 0:
            raise NoTerminal(f"Terminal reported an unusable size {width}x{height}")
        return TerminalGeometry(rows=height, cols=width)

    def enter_fullscreen(self) -> None:
        if self._active:
            return
        self._set_cbreak()
        # From here on exit_fullscreen must run to restore the TTY
        self._active = True
        self.console.set_alt_screen(True)
        self.console.show_cursor(False)
        self.console.clear()
        logger.debug("Entered full-screen mode")

    def exit_fullscreen(self) -> None:
        if not self._active:
            return
        self._active = False
        try:
            self.console.show_cursor(True)
            self.console.set_alt_screen(False)
            self.console.clear()
            self.flush()
        finally:
            self._restore_tty()
        logger.debug("Left full-screen mode")

    def move_cursor(self, row: int, col: int) -> None:
        self.console.control(Control.move_to(col, row))

    def write(self, text: str, style: TextStyle = NORMAL) -> None:
        self.console.print(Text(text, style=style.to_rich()), end="", soft_wrap=True)

    def clear(self) -> None:
        self.console.clear()

    def flush(self) -> None:
        self.console.file.flush()

    def read_key(self) -> Key:
        self.flush()
        fd = self._stdin.fileno()
        raw = self._pending or self._read_char(fd)
        self._pending = ""
        if raw == ESC:
            while len(raw) < ESCAPE_SEQUENCE_LENGTH:
                readable, _, _ = select.select([fd], [], [], self.escape_timeout)
                if not readable:
                    break
                try:
                    char = self._read_char(fd)
                except EOFError:
                    break
                if len(raw) == 1 and char not in ESCAPE_INTRODUCERS:
                    # Not part of a sequence; it is the next keystroke
                    self._pending = char
                    break
                raw += char
        return decode_key(raw)

    @staticmethod
    def _read_char(fd: int) -> str:
        data = os.read(fd, 1)
        if not data:
            raise EOFError("Input stream closed")
        return data.decode("latin-1")

    def _set_cbreak(self) -> None:
        """Switch stdin to cbreak mode (unbuffered, no echo, Ctrl-C still works)."""
        import termios
        import tty

        try:
            fd = self._stdin.fileno()
            self._tty_settings = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        except (termios.error, OSError, ValueError) as e:
            self._tty_settings = None
            logger.warning(f"Could not set up terminal for key input: {e}")

    def _restore_tty(self) -> None:
        if self._tty_settings is None:
            return
        import termios

        try:
            termios.tcsetattr(self._stdin.fileno(), termios.TCSADRAIN, self._tty_settings)
        except (termios.error, OSError, ValueError) as e:
            logger.warning(f"Could not restore terminal settings: {e}")
        finally:
            self._tty_settings = None


class MemorySurface(Surface):
    """In-memory surface with a character grid and scripted keys."""

    def __init__(
        self,
        rows: int = 24,
        cols: int = 80,
        keys: Iterable[Key | str] = (),
        interactive: bool = True,
    ) -> None:
        """
        Initialize the memory surface.

        Args:
            rows: Grid height
            cols: Grid width
            keys: Keys returned by ``read_key``, in order. Strings are
                decoded as raw terminal input.
            interactive: When False, geometry queries raise ``NoTerminal``
        """
        self.geometry = TerminalGeometry(rows, cols)
        self.interactive = interactive
        self._keys: deque = deque(keys)
        self.fullscreen_active = False
        self.enter_count = 0
        self.exit_count = 0
        self.cursor = (0, 0)
        self.cells: list[list[str]] = []
        self.styles: list[list[TextStyle]] = []
        self.clear()

    def feed(self, *keys: Key | str) -> None:
        """Queue more keys."""
        self._keys.extend(keys)

    def resize(self, rows: int, cols: int) -> None:
        """Change the grid size; the next redraw sees the new geometry."""
        self.geometry = TerminalGeometry(rows, cols)
        self.clear()

    def enter_fullscreen(self) -> None:
        self.fullscreen_active = True
        self.enter_count += 1
        self.clear()

    def exit_fullscreen(self) -> None:
        self.fullscreen_active = False
        self.exit_count += 1

    def move_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    def write(self, text: str, style: TextStyle = NORMAL) -> None:
        row, col = self.cursor
        rows, cols = self.geometry.rows, self.geometry.cols
        for char in text:
            width = cell_len(char)
            if 0 <= row < rows and 0 <= col < cols:
                self.cells[row][col] = char
                self.styles[row][col] = style
                if width == 2 and col + 1 < cols:
                    self.cells[row][col + 1] = ""
                    self.styles[row][col + 1] = style
            col += width
        self.cursor = (row, col)

    def clear(self) -> None:
        rows, cols = self.geometry.rows, self.geometry.cols
        self.cells = [[" "] * cols for _ in range(rows)]
        self.styles = [[NORMAL] * cols for _ in range(rows)]
        self.cursor = (0, 0)

    def query_geometry(self) -> TerminalGeometry:
        if not self.interactive:
            raise NoTerminal("Output is not an interactive terminal")
        return self.geometry

    def read_key(self) -> Key:
        if not self._keys:
            raise EOFError("No more scripted keys")
        key = self._keys.popleft()
        if isinstance(key, str):
            return decode_key(key)
        return key

    def row_text(self, row: int) -> str:
        """Text of one grid row, full width."""
        return "".join(self.cells[row])

    def lines(self) -> list[str]:
        """All grid rows with trailing blanks removed."""
        return [self.row_text(row).rstrip() for row in range(self.geometry.rows)]

    def snapshot(self) -> tuple[str, ...]:
        """Immutable copy of the grid contents."""
        return tuple(self.row_text(row) for row in range(self.geometry.rows))

    def style_at(self, row: int, col: int) -> TextStyle:
        return self.styles[row][col]

    def find(self, needle: str) -> tuple[int, int] | None:
        """Return (row, col) of the first occurrence of ``needle``."""
        for row in range(self.geometry.rows):
            col = self.row_text(row).find(needle)
            if col >= 0:
                return row, col
        return None
