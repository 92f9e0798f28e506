"""Editor: key dispatch, the save-as prompt, quit confirmation and the main loop.

The editor owns a single :class:`~kilo.state.EditorState` and a
:class:`~kilo.terminal.Terminal`. Every cycle of :meth:`Editor.run`
draws a frame, reads one key and dispatches it according to the current
:class:`~kilo.state.Mode`.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from kilo import edit, viewport
from kilo.config import EditorConfig
from kilo.document import Document
from kilo.fileio import read_lines, write_text
from kilo.keys import BACKSPACE, ENTER, ESC, Key, KeyEvent, ctrl_key, read_key
from kilo.screen import refresh_screen
from kilo.state import EditorState, Mode
from kilo.terminal import CLEAR_SCREEN, CURSOR_HOME, Terminal

logger = logging.getLogger(__name__)

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit"
SAVE_AS_PROMPT = "Save as: {} (ESC to cancel)"

CTRL_H = ctrl_key("h")
CTRL_L = ctrl_key("l")
CTRL_Q = ctrl_key("q")
CTRL_S = ctrl_key("s")

_ARROWS = (Key.ARROW_UP, Key.ARROW_DOWN, Key.ARROW_LEFT, Key.ARROW_RIGHT)


class Editor:
    """A single-file terminal text editor."""

    def __init__(
        self,
        terminal: Terminal,
        config: EditorConfig | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.terminal = terminal
        self.config = config or EditorConfig()
        self._clock = clock

        rows, cols = terminal.get_window_size()
        logger.debug("Window size %dx%d", rows, cols)
        self.state = EditorState(
            screen_rows=max(rows - 2, 0),
            screen_cols=cols,
            document=Document(tab_stop=self.config.tab_stop),
        )

        self.quit_times: int = self.config.quit_times
        self.running: bool = True

        # Save-as prompt
        self._prompt_template: str = ""
        self._prompt_buffer: str = ""
        self._prompt_done: Callable[[str | None], None] | None = None

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def open(self, filename: str) -> None:
        """Load *filename*. Raises :class:`OSError` if it cannot be read."""
        lines = read_lines(filename)
        self.state.filename = filename
        self.state.document = Document.from_lines(lines, self.config.tab_stop)
        self.state.cx = self.state.cy = 0
        self.state.rowoff = self.state.coloff = 0

    def save(self) -> None:
        if self.state.filename is None:
            self.start_prompt(SAVE_AS_PROMPT, self._finish_save_as)
            return
        self._write_file()

    def _finish_save_as(self, filename: str | None) -> None:
        if filename is None:
            self.set_status_message("Save aborted")
            return
        self.state.filename = filename
        self._write_file()

    def _write_file(self) -> None:
        assert self.state.filename is not None
        text = self.state.document.to_text()
        try:
            written = write_text(self.state.filename, text)
        except OSError as e:
            logger.warning("Saving %s failed: %s", self.state.filename, e)
            self.set_status_message(f"Can't save! I/O error: {e.strerror or e}")
            return
        self.state.document.mark_clean()
        self.set_status_message(f"{written} bytes written to disk")

    # ------------------------------------------------------------------
    # Messages and prompt
    # ------------------------------------------------------------------

    def set_status_message(self, text: str) -> None:
        self.state.set_status_message(text, self._clock())

    @property
    def prompt_buffer(self) -> str:
        return self._prompt_buffer

    def start_prompt(
        self, template: str, on_done: Callable[[str | None], None]
    ) -> None:
        """Switch to prompt mode.

        *template* contains one ``{}`` for the text typed so far. *on_done*
        receives the text on Enter, or ``None`` on Escape.
        """
        self.state.mode = Mode.PROMPT
        self._prompt_template = template
        self._prompt_buffer = ""
        self._prompt_done = on_done
        self.set_status_message(template.format(""))

    def _end_prompt(self, result: str | None) -> None:
        on_done = self._prompt_done
        self.state.mode = Mode.NORMAL
        self._prompt_template = ""
        self._prompt_buffer = ""
        self._prompt_done = None
        self.set_status_message("")
        if on_done is not None:
            on_done(result)

    def _process_prompt_key(self, c: KeyEvent) -> None:
        if c in (Key.DEL, CTRL_H, BACKSPACE):
            self._prompt_buffer = self._prompt_buffer[:-1]
        elif c == ESC:
            self._end_prompt(None)
            return
        elif c == ENTER:
            if self._prompt_buffer:
                self._end_prompt(self._prompt_buffer)
            return
        elif not isinstance(c, Key) and 32 <= c < 127:
            self._prompt_buffer += chr(c)
        self.set_status_message(self._prompt_template.format(self._prompt_buffer))

    # ------------------------------------------------------------------
    # Key dispatch
    # ------------------------------------------------------------------

    def process_key(self, c: KeyEvent) -> None:
        """Apply one key event to the editor."""
        if self.state.mode is Mode.PROMPT:
            self._process_prompt_key(c)
            return

        state = self.state

        if c == CTRL_Q:
            self._request_quit()
            return

        if c == ENTER:
            edit.insert_newline(state)
        elif c == CTRL_S:
            self.save()
        elif c == Key.HOME:
            viewport.move_home(state)
        elif c == Key.END:
            viewport.move_end(state)
        elif c in (BACKSPACE, CTRL_H, Key.DEL):
            if c == Key.DEL:
                viewport.move_cursor(state, Key.ARROW_RIGHT)
            edit.delete_char(state)
        elif c in (Key.PAGE_UP, Key.PAGE_DOWN):
            viewport.page(state, c)
        elif c in _ARROWS:
            viewport.move_cursor(state, c)
        elif c in (CTRL_L, ESC):
            pass
        else:
            edit.insert_char(state, chr(c))

        self.quit_times = self.config.quit_times

    def _request_quit(self) -> None:
        if self.state.document.dirty and self.quit_times > 0:
            self.quit_times -= 1
            if self.quit_times > 0:
                self.set_status_message(
                    "WARNING!!! File has unsaved changes. "
                    f"Press Ctrl-Q {self.quit_times} more times to quit."
                )
                return
        self.running = False

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def refresh_screen(self) -> None:
        refresh_screen(
            self.state,
            self.terminal,
            now=self._clock(),
            message_timeout=self.config.message_timeout,
        )

    def run(self) -> None:
        """Draw, read, dispatch until the user quits, then clear the screen."""
        self.set_status_message(HELP_MESSAGE)
        while self.running:
            self.refresh_screen()
            key = read_key(self.terminal.read_byte)
            logger.debug("Key %r in %s mode", key, self.state.mode.value)
            self.process_key(key)
        self.terminal.write((CLEAR_SCREEN + CURSOR_HOME).encode())
