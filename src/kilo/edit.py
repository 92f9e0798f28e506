"""Edit engine: character insertion, line splitting and backspace."""

from __future__ import annotations

from kilo.state import EditorState


def insert_char(state: EditorState, ch: str) -> None:
    """Insert *ch* at the cursor and move the cursor past it.

    Typing on the virtual row past end-of-file first creates that row.
    """
    doc = state.document
    if state.cy == doc.numrows:
        doc.append_row("")
    doc.row_insert_char(state.cy, state.cx, ch)
    state.cx += 1


def insert_newline(state: EditorState) -> None:
    """Split the current row at the cursor."""
    doc = state.document
    if state.cx == 0:
        doc.insert_row(state.cy, "")
    else:
        row = doc.rows[state.cy]
        doc.insert_row(state.cy + 1, row.chars[state.cx :])
        doc.row_truncate(state.cy, state.cx)
    state.cy += 1
    state.cx = 0


def delete_char(state: EditorState) -> None:
    """Delete the character before the cursor.

    At the start of a row the row is joined onto the previous one.
    """
    doc = state.document
    if state.cy == doc.numrows:
        return
    if state.cx == 0 and state.cy == 0:
        return

    if state.cx > 0:
        doc.row_delete_char(state.cy, state.cx - 1)
        state.cx -= 1
    else:
        prev = doc.rows[state.cy - 1]
        state.cx = prev.size
        doc.row_append_string(state.cy - 1, doc.rows[state.cy].chars)
        doc.delete_row(state.cy)
        state.cy -= 1
