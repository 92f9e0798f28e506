"""Cursor movement and viewport scrolling."""

from __future__ import annotations

from kilo.keys import Key, KeyEvent
from kilo.state import EditorState


def _clamp_cx(state: EditorState) -> None:
    row = state.current_row
    rowlen = row.size if row is not None else 0
    if state.cx > rowlen:
        state.cx = rowlen


def move_cursor(state: EditorState, key: KeyEvent) -> None:
    """Move the cursor one step in the direction of an arrow *key*.

    Left at column 0 wraps to the end of the previous row and Right at the
    end of a row wraps to the start of the next one. After any move ``cx``
    is clamped to the length of the row the cursor lands on.
    """
    row = state.current_row

    if key == Key.ARROW_LEFT:
        if state.cx != 0:
            state.cx -= 1
        elif state.cy > 0:
            state.cy -= 1
            state.cx = state.document.rows[state.cy].size
    elif key == Key.ARROW_RIGHT:
        if row is not None and state.cx < row.size:
            state.cx += 1
        elif row is not None and state.cx == row.size:
            state.cy += 1
            state.cx = 0
    elif key == Key.ARROW_UP:
        if state.cy != 0:
            state.cy -= 1
    elif key == Key.ARROW_DOWN:
        if state.cy < state.numrows:
            state.cy += 1

    _clamp_cx(state)


def move_home(state: EditorState) -> None:
    state.cx = 0


def move_end(state: EditorState) -> None:
    row = state.current_row
    if row is not None:
        state.cx = row.size


def page(state: EditorState, key: KeyEvent) -> None:
    """Scroll a screenful up or down.

    The cursor first jumps to the top (or bottom) line of the viewport,
    then moves a full screen further.
    """
    if key == Key.PAGE_UP:
        state.cy = state.rowoff
        direction = Key.ARROW_UP
    else:
        state.cy = min(state.rowoff + state.screen_rows - 1, state.numrows)
        direction = Key.ARROW_DOWN
    _clamp_cx(state)

    for _ in range(state.screen_rows):
        move_cursor(state, direction)


def scroll(state: EditorState) -> None:
    """Recompute ``rx`` and adjust the scroll offsets so the cursor is visible."""
    row = state.current_row
    state.rx = row.cx_to_rx(state.cx) if row is not None else 0

    if state.cy < state.rowoff:
        state.rowoff = state.cy
    if state.cy >= state.rowoff + state.screen_rows:
        state.rowoff = state.cy - state.screen_rows + 1
    if state.rx < state.coloff:
        state.coloff = state.rx
    if state.rx >= state.coloff + state.screen_cols:
        state.coloff = state.rx - state.screen_cols + 1
