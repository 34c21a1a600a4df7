"""Reading a file into a buffer and writing it back."""

from __future__ import annotations

import logging
from pathlib import Path

from tabvi.buffer import Buffer
from tabvi.line import TAB_WIDTH

logger = logging.getLogger(__name__)


def load_buffer(path: str, tab_width: int = TAB_WIDTH) -> Buffer:
    """Load *path* with one line per text line.

    A missing file is a new file and yields a single empty line.  Every
    other error (permissions, a directory, invalid UTF-8) propagates.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("%s does not exist, starting a new file", path)
        return Buffer(tab_width=tab_width)

    buffer = Buffer.from_text(text, tab_width)
    logger.info("loaded %d lines from %s", len(buffer), path)
    return buffer


def save_buffer(buffer: Buffer, path: str) -> None:
    """Overwrite *path* with every line followed by a newline."""
    Path(path).write_text(buffer.to_text(), encoding="utf-8", newline="\n")
    logger.info("wrote %d lines to %s", len(buffer), path)
