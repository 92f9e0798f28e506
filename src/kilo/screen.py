"""Output compositor.

Builds one complete frame (content rows, status bar, message bar and the
final cursor position) into a single buffer so the terminal receives it in
one write. The hardware cursor is hidden while the frame is painted.
"""

from __future__ import annotations

import time

from kilo import __version__
from kilo.config import DEFAULT_MESSAGE_TIMEOUT
from kilo.fileio import ENCODING
from kilo.state import EditorState
from kilo.terminal import (
    CLEAR_LINE,
    CURSOR_HOME,
    CURSOR_POSITION_FMT,
    HIDE_CURSOR,
    INVERSE_OFF,
    INVERSE_ON,
    SHOW_CURSOR,
    Terminal,
)
from kilo.viewport import scroll

FILLER = "~"
NO_NAME = "[No Name]"
FILENAME_MAX = 20


def welcome_message() -> str:
    return f"Kilo editor -- version {__version__}"


def draw_rows(state: EditorState, out: list[str]) -> None:
    doc = state.document
    for y in range(state.screen_rows):
        filerow = y + state.rowoff
        if filerow >= doc.numrows:
            if doc.numrows == 0 and y == state.screen_rows // 3:
                welcome = welcome_message()[: state.screen_cols]
                padding = (state.screen_cols - len(welcome)) // 2
                if padding:
                    out.append(FILLER)
                    padding -= 1
                out.append(" " * padding)
                out.append(welcome)
            else:
                out.append(FILLER)
        else:
            render = doc.rows[filerow].render
            out.append(render[state.coloff : state.coloff + state.screen_cols])

        out.append(CLEAR_LINE)
        out.append("\r\n")


def status_text(state: EditorState) -> str:
    """Return the status bar line, padded or cut to the screen width."""
    name = state.filename[:FILENAME_MAX] if state.filename else NO_NAME
    modified = " (modified)" if state.document.dirty else ""
    left = f"{name} - {state.numrows} lines{modified}"
    right = f"{state.cy + 1}/{state.numrows}"

    width = state.screen_cols
    left = left[:width]
    gap = width - len(left) - len(right)
    if gap >= 0:
        return left + " " * gap + right
    return left + " " * (width - len(left))


def draw_status_bar(state: EditorState, out: list[str]) -> None:
    out.append(INVERSE_ON)
    out.append(status_text(state))
    out.append(INVERSE_OFF)
    out.append("\r\n")


def draw_message_bar(
    state: EditorState,
    out: list[str],
    now: float,
    timeout: float = DEFAULT_MESSAGE_TIMEOUT,
) -> None:
    out.append(CLEAR_LINE)
    if state.status.is_visible(now, timeout):
        out.append(state.status.text[: state.screen_cols])


def build_frame(
    state: EditorState,
    now: float | None = None,
    message_timeout: float = DEFAULT_MESSAGE_TIMEOUT,
) -> str:
    """Scroll the viewport to the cursor and return the full frame."""
    if now is None:
        now = time.time()
    scroll(state)

    out: list[str] = [HIDE_CURSOR, CURSOR_HOME]
    draw_rows(state, out)
    draw_status_bar(state, out)
    draw_message_bar(state, out, now, message_timeout)
    out.append(
        CURSOR_POSITION_FMT.format(
            state.cy - state.rowoff + 1, state.rx - state.coloff + 1
        )
    )
    out.append(SHOW_CURSOR)
    return "".join(out)


def refresh_screen(
    state: EditorState,
    terminal: Terminal,
    now: float | None = None,
    message_timeout: float = DEFAULT_MESSAGE_TIMEOUT,
) -> None:
    frame = build_frame(state, now, message_timeout)
    terminal.write(frame.encode(ENCODING, errors="replace"))
