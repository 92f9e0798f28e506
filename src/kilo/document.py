"""Document model: an ordered list of rows with tab-expanded render caches."""

from __future__ import annotations

from typing import Iterable

from kilo.config import DEFAULT_TAB_STOP


class Row:
    """One line of text.

    ``chars`` holds the raw text; ``render`` is what is drawn on screen,
    with every tab expanded to the next tab stop. Every method that
    changes ``chars`` rebuilds ``render`` before returning.
    """

    __slots__ = ("chars", "render", "tab_stop")

    def __init__(self, chars: str = "", tab_stop: int = DEFAULT_TAB_STOP) -> None:
        self.chars = chars
        self.render = ""
        self.tab_stop = tab_stop
        self.update()

    def __repr__(self) -> str:
        return f"Row({self.chars!r})"

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)

    def update(self) -> None:
        """Rebuild ``render`` from ``chars``."""
        out: list[str] = []
        idx = 0
        for ch in self.chars:
            if ch == "\t":
                out.append(" ")
                idx += 1
                while idx % self.tab_stop != 0:
                    out.append(" ")
                    idx += 1
            else:
                out.append(ch)
                idx += 1
        self.render = "".join(out)

    def cx_to_rx(self, cx: int) -> int:
        """Map a raw character offset to its render column."""
        rx = 0
        for ch in self.chars[:cx]:
            if ch == "\t":
                rx += (self.tab_stop - 1) - (rx % self.tab_stop)
            rx += 1
        return rx

    def insert_char(self, pos: int, ch: str) -> None:
        if pos < 0 or pos > self.size:
            pos = self.size
        self.chars = self.chars[:pos] + ch + self.chars[pos:]
        self.update()

    def delete_char(self, pos: int) -> bool:
        """Delete the character at *pos*; return ``False`` if out of range."""
        if pos < 0 or pos >= self.size:
            return False
        self.chars = self.chars[:pos] + self.chars[pos + 1 :]
        self.update()
        return True

    def append_string(self, text: str) -> None:
        self.chars += text
        self.update()

    def truncate(self, length: int) -> None:
        self.chars = self.chars[:length]
        self.update()


class Document:
    """Ordered rows plus a counter of unsaved modifications.

    ``dirty`` is incremented by every content-changing operation and reset
    by :meth:`from_lines` and :meth:`mark_clean`.
    """

    def __init__(self, tab_stop: int = DEFAULT_TAB_STOP) -> None:
        self.rows: list[Row] = []
        self.dirty: int = 0
        self.tab_stop = tab_stop

    @classmethod
    def from_lines(
        cls, lines: Iterable[str], tab_stop: int = DEFAULT_TAB_STOP
    ) -> Document:
        doc = cls(tab_stop=tab_stop)
        doc.rows = [Row(line, tab_stop) for line in lines]
        return doc

    @property
    def numrows(self) -> int:
        return len(self.rows)

    def mark_clean(self) -> None:
        self.dirty = 0

    # -- row list -----------------------------------------------------------

    def insert_row(self, pos: int, text: str) -> None:
        if pos < 0 or pos > self.numrows:
            return
        self.rows.insert(pos, Row(text, self.tab_stop))
        self.dirty += 1

    def append_row(self, text: str) -> None:
        self.insert_row(self.numrows, text)

    def delete_row(self, pos: int) -> None:
        if pos < 0 or pos >= self.numrows:
            return
        del self.rows[pos]
        self.dirty += 1

    # -- row content --------------------------------------------------------

    def row_insert_char(self, at: int, pos: int, ch: str) -> None:
        self.rows[at].insert_char(pos, ch)
        self.dirty += 1

    def row_delete_char(self, at: int, pos: int) -> None:
        if self.rows[at].delete_char(pos):
            self.dirty += 1

    def row_append_string(self, at: int, text: str) -> None:
        self.rows[at].append_string(text)
        self.dirty += 1

    def row_truncate(self, at: int, length: int) -> None:
        self.rows[at].truncate(length)
        self.dirty += 1

    # -- serialisation ------------------------------------------------------

    def to_text(self) -> str:
        """Join all rows, each followed by a newline."""
        return "".join(row.chars + "\n" for row in self.rows)
