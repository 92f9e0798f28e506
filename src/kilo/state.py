"""Editor state shared by the edit engine, viewport controller and compositor."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum

from kilo.config import DEFAULT_MESSAGE_TIMEOUT
from kilo.document import Document, Row

STATUS_MESSAGE_MAX = 79


class Mode(Enum):
    NORMAL = "normal"
    PROMPT = "prompt"


@dataclass
class StatusMessage:
    """Message bar text and the time it was set."""

    text: str = ""
    timestamp: float = 0.0

    def is_visible(self, now: float, timeout: float = DEFAULT_MESSAGE_TIMEOUT) -> bool:
        return bool(self.text) and now - self.timestamp < timeout


@dataclass
class EditorState:
    """Everything the editor knows: document, cursor, viewport and messages.

    ``cx``/``cy`` are the cursor in raw characters and rows; ``rx`` is the
    render column of the cursor, recomputed by :func:`kilo.viewport.scroll`
    before every frame.
    """

    screen_rows: int
    screen_cols: int
    document: Document = field(default_factory=Document)
    filename: str | None = None
    cx: int = 0
    cy: int = 0
    rx: int = 0
    rowoff: int = 0
    coloff: int = 0
    status: StatusMessage = field(default_factory=StatusMessage)
    mode: Mode = Mode.NORMAL

    @property
    def numrows(self) -> int:
        return self.document.numrows

    @property
    def current_row(self) -> Row | None:
        """The row under the cursor, or ``None`` past end-of-file."""
        if self.cy >= self.document.numrows:
            return None
        return self.document.rows[self.cy]

    def set_status_message(self, text: str, now: float | None = None) -> None:
        self.status = StatusMessage(
            text=text[:STATUS_MESSAGE_MAX],
            timestamp=time.time() if now is None else now,
        )
