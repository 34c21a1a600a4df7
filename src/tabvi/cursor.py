"""Cursor position and the operations that bound and move it.

A :class:`Cursor` is a plain ``(x, y)`` pair and may be out of range after
an edit.  Every read goes through :func:`pos`, which clamps it into the
buffer and snaps it onto a column where a grapheme's rendering starts.

*Tight* bounding keeps the cursor on the last character of a line (Normal
mode); *loose* bounding also allows the column one past the end, where
Insert mode appends.
"""

from __future__ import annotations

from dataclasses import dataclass

from tabvi.buffer import Buffer


@dataclass
class Cursor:
    x: int = 0
    y: int = 0


def pos(buffer: Buffer, cursor: Cursor, tight: bool) -> tuple[int, int]:
    """Return the cursor clamped to a valid ``(x, y)`` in *buffer*."""
    y = max(0, min(cursor.y, len(buffer) - 1))
    line = buffer[y]
    limit = len(line) - (1 if tight else 0)
    x = max(0, min(cursor.x, limit))
    if x != len(line) and not line.is_valid_index(x):
        # inside a tab's padding
        prev = line.prev_valid_index(x)
        x = prev if prev is not None else 0
    return x, y


def move_right(buffer: Buffer, cursor: Cursor, n: int = 1, tight: bool = True) -> None:
    """Step right *n* graphemes, a tab counting as one step.

    Stops at the last grapheme, or, when loose, at the column one past it.
    """
    for _ in range(n):
        x, y = pos(buffer, cursor, False)
        line = buffer[y]
        index = line.next_valid_index(x)
        if index is None:
            if not tight:
                cursor.x = len(line)
            return
        cursor.x = index


def move_left(buffer: Buffer, cursor: Cursor, n: int = 1, tight: bool = True) -> None:
    for _ in range(n):
        x, y = pos(buffer, cursor, tight)
        index = buffer[y].prev_valid_index(x)
        if index is None:
            cursor.x = x
            return
        cursor.x = index


def move_up(buffer: Buffer, cursor: Cursor, n: int = 1, tight: bool = True) -> None:
    """Move up *n* lines, stopping at the first line.

    The column is re-bounded against the destination line; no column is
    remembered from the line the cursor came from.
    """
    _, y = pos(buffer, cursor, tight)
    cursor.y = max(0, y - n)
    cursor.x, cursor.y = pos(buffer, cursor, tight)


def move_down(buffer: Buffer, cursor: Cursor, n: int = 1, tight: bool = True) -> None:
    _, y = pos(buffer, cursor, tight)
    cursor.y = min(len(buffer) - 1, y + n)
    cursor.x, cursor.y = pos(buffer, cursor, tight)
