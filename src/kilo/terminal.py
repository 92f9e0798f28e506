"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that manages raw mode, single-byte reads with a short
timeout, whole-frame writes, and the window-size query via ANSI escape
sequences.
"""

from __future__ import annotations

import logging
import os
import re
import sys
import termios
import tty
from typing import Protocol

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CURSOR_HOME = "\x1b[H"
CLEAR_LINE = "\x1b[K"
CLEAR_SCREEN = "\x1b[2J"
INVERSE_ON = "\x1b[7m"
INVERSE_OFF = "\x1b[m"
CURSOR_POSITION_FMT = "\x1b[{};{}H"

_CURSOR_TO_BOTTOM_RIGHT = "\x1b[999C\x1b[999B"
_QUERY_CURSOR_POSITION = "\x1b[6n"
_CURSOR_POSITION_RE = re.compile(rb"^\x1b\[(\d+);(\d+)$")


class TerminalError(Exception):
    """An unrecoverable terminal I/O failure."""


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def enable_raw_mode(self) -> None: ...

    def disable_raw_mode(self) -> None: ...

    def read_byte(self) -> int | None: ...

    def write(self, data: bytes) -> None: ...

    def get_window_size(self) -> tuple[int, int]: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal implementation backed by the process's stdin/stdout.

    Raw mode is entered with :func:`tty.setraw` and then switched to a
    polling read (``VMIN=0``, ``VTIME=1``) so :meth:`read_byte` returns
    ``None`` after 100 ms without input.
    """

    def __init__(self, stdin_fd: int | None = None, stdout_fd: int | None = None) -> None:
        self._stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
        self._stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
        self._original_termios: list | None = None

    # -- raw mode -----------------------------------------------------------

    def enable_raw_mode(self) -> None:
        """Save the current terminal attributes and switch to raw mode."""
        fd = self._stdin_fd
        try:
            self._original_termios = termios.tcgetattr(fd)
            tty.setraw(fd, termios.TCSAFLUSH)
            attrs = termios.tcgetattr(fd)
            attrs[6][termios.VMIN] = 0
            attrs[6][termios.VTIME] = 1
            termios.tcsetattr(fd, termios.TCSAFLUSH, attrs)
        except termios.error as e:
            raise TerminalError(f"tcsetattr: {e}") from e
        logger.debug("Raw mode enabled on fd %d", fd)

    def disable_raw_mode(self) -> None:
        """Restore the attributes saved by :meth:`enable_raw_mode`."""
        if self._original_termios is None:
            return
        try:
            termios.tcsetattr(
                self._stdin_fd, termios.TCSAFLUSH, self._original_termios
            )
        except termios.error as e:
            raise TerminalError(f"tcsetattr: {e}") from e
        finally:
            self._original_termios = None
        logger.debug("Raw mode disabled")

    # -- I/O ----------------------------------------------------------------

    def read_byte(self) -> int | None:
        """Read one byte, or return ``None`` if the read timed out."""
        try:
            data = os.read(self._stdin_fd, 1)
        except (BlockingIOError, InterruptedError):
            return None
        except OSError as e:
            raise TerminalError(f"read: {e}") from e
        if not data:
            return None
        return data[0]

    def write(self, data: bytes) -> None:
        """Write *data* in full."""
        view = memoryview(data)
        try:
            while view:
                written = os.write(self._stdout_fd, view)
                view = view[written:]
        except OSError as e:
            raise TerminalError(f"write: {e}") from e

    # -- geometry -----------------------------------------------------------

    def get_window_size(self) -> tuple[int, int]:
        """Return ``(rows, columns)`` of the terminal.

        Falls back to moving the cursor to the bottom-right corner and
        asking the terminal where it ended up.
        """
        try:
            size = os.get_terminal_size(self._stdout_fd)
        except OSError:
            size = None
        if size is not None and size.columns > 0:
            return size.lines, size.columns

        logger.debug("Terminal size unavailable, querying cursor position")
        self.write(_CURSOR_TO_BOTTOM_RIGHT.encode())
        return self.get_cursor_position()

    def get_cursor_position(self) -> tuple[int, int]:
        """Ask the terminal for the cursor position (``ESC [ 6 n``)."""
        self.write(_QUERY_CURSOR_POSITION.encode())

        response = b""
        while len(response) < 31:
            b = self.read_byte()
            if b is None or b == ord("R"):
                break
            response += bytes([b])

        match = _CURSOR_POSITION_RE.match(response)
        if match is None:
            raise TerminalError(f"getWindowSize: unexpected reply {response!r}")
        return int(match.group(1)), int(match.group(2))
