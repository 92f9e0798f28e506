"""Whole-file reading and writing.

Files are treated as latin-1 so every byte maps to exactly one character
and is written back unchanged.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

ENCODING = "latin-1"


def read_lines(path: str | os.PathLike[str]) -> list[str]:
    """Read *path* and return its lines without trailing ``\\r``/``\\n``.

    Raises :class:`OSError` if the file cannot be opened.
    """
    text = Path(path).read_bytes().decode(ENCODING)
    raw_lines = text.split("\n")
    if raw_lines[-1] == "":
        raw_lines.pop()
    lines = [line.rstrip("\r\n") for line in raw_lines]
    logger.info("Read %d lines from %s", len(lines), path)
    return lines


def write_text(path: str | os.PathLike[str], text: str) -> int:
    """Truncate *path* and write *text* to it; return the bytes written.

    The file is truncated before the write starts, so a failure part-way
    leaves it short.
    """
    data = text.encode(ENCODING)
    fd = os.open(Path(path), os.O_RDWR | os.O_CREAT, 0o644)
    try:
        os.ftruncate(fd, len(data))
        written = 0
        view = memoryview(data)
        while written < len(data):
            written += os.write(fd, view[written:])
    finally:
        os.close(fd)
    logger.info("Wrote %d bytes to %s", written, path)
    return written
