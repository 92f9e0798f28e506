"""Keyboard input decoding.

Turns the raw byte stream of a terminal in raw mode into logical key
events. A key event is either a plain byte value (``0..255``; Ctrl+letter
arrives as ``1..26``) or a :class:`Key` member for the cursor and editing
keys that terminals report as multi-byte escape sequences.

Escape sequences are decoded through :data:`ESCAPE_SEQUENCES`, a table
from the bytes that follow ``ESC`` to a key. Anything not in the table
(or cut short by a read timeout) decodes to a bare Escape.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Literal, Union

# ---------------------------------------------------------------------------
# Key values
# ---------------------------------------------------------------------------


class Key(IntEnum):
    """Logical keys that do not correspond to a single byte.

    Values start at 1000 so they never collide with byte values.
    """

    ARROW_LEFT = 1000
    ARROW_RIGHT = 1001
    ARROW_UP = 1002
    ARROW_DOWN = 1003
    DEL = 1004
    HOME = 1005
    END = 1006
    PAGE_UP = 1007
    PAGE_DOWN = 1008


KeyEvent = Union[int, Key]

ESC = 0x1B
ENTER = 0x0D
BACKSPACE = 0x7F


def ctrl_key(k: str) -> int:
    """Return the byte a terminal sends for Ctrl + *k*."""
    return ord(k) & 0x1F


# ---------------------------------------------------------------------------
# Escape sequence table
# ---------------------------------------------------------------------------

# Bytes following ESC -> key
ESCAPE_SEQUENCES: dict[bytes, Key] = {
    b"[A": Key.ARROW_UP,
    b"[B": Key.ARROW_DOWN,
    b"[C": Key.ARROW_RIGHT,
    b"[D": Key.ARROW_LEFT,
    b"[H": Key.HOME,
    b"[F": Key.END,
    b"OA": Key.ARROW_UP,
    b"OB": Key.ARROW_DOWN,
    b"OC": Key.ARROW_RIGHT,
    b"OD": Key.ARROW_LEFT,
    b"OH": Key.HOME,
    b"OF": Key.END,
    b"[1~": Key.HOME,
    b"[3~": Key.DEL,
    b"[4~": Key.END,
    b"[5~": Key.PAGE_UP,
    b"[6~": Key.PAGE_DOWN,
    b"[7~": Key.HOME,
    b"[8~": Key.END,
}

# Partial sequences worth reading another byte for. Every ``[<digit>``
# continues, so the trailing byte of an unknown numeric sequence such as
# ``ESC [ 2 ~`` is consumed rather than inserted as text.
_PREFIXES: frozenset[bytes] = frozenset(
    {b"[", b"O"} | {b"[" + bytes([d]) for d in b"0123456789"}
)

Transition = Literal["continue", "emit", "escape"]


def classify_sequence(seq: bytes) -> tuple[Transition, KeyEvent]:
    """Classify the bytes read so far after an ESC.

    Returns ``("emit", key)`` for a recognised sequence, ``("continue",
    ESC)`` when more bytes may complete one, and ``("escape", ESC)`` when
    the sequence cannot be recognised.
    """
    key = ESCAPE_SEQUENCES.get(seq)
    if key is not None:
        return "emit", key
    if seq in _PREFIXES:
        return "continue", ESC
    return "escape", ESC


# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------


def decode_escape(read_byte: Callable[[], int | None]) -> KeyEvent:
    """Decode the remainder of an escape sequence after the ESC byte.

    *read_byte* returns the next byte, or ``None`` when none arrived before
    its timeout.
    """
    seq = b""
    while True:
        b = read_byte()
        if b is None:
            return ESC
        seq += bytes([b])
        transition, key = classify_sequence(seq)
        if transition != "continue":
            return key


def read_key(read_byte: Callable[[], int | None]) -> KeyEvent:
    """Block until one logical key has been read.

    Waiting for the first byte polls *read_byte* until it returns a value;
    follow-up bytes of an escape sequence get a single timeout each.
    Errors raised by *read_byte* propagate to the caller.
    """
    c = read_byte()
    while c is None:
        c = read_byte()

    if c == ESC:
        return decode_escape(read_byte)
    return c
