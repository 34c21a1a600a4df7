"""Composing a full screen frame from the editor state.

A frame is one string of text and ANSI control sequences: the visible
wrapped rows of the buffer, ``~`` filler below the last line, the status
bar on the last terminal row, and a final move of the hardware cursor to
where the editor's cursor is.
"""

from __future__ import annotations

from tabvi.editor import Editor
from tabvi.modes import Mode
from tabvi.utils import truncate_to_width, visible_width
from tabvi.viewport import TermSize, line_rows, visible_rows

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CURSOR_HOME = "\x1b[H"
_CLEAR_LINE = "\x1b[2K"
_INVERSE_ON = "\x1b[7m"
_INVERSE_OFF = "\x1b[27m"
_MOVE_TO_FMT = "\x1b[{};{}H"

WELCOME_MESSAGE = "tabvi - a small modal text editor"
FILLER = "~"


def draw_rows(editor: Editor, n_cols: int, n_rows: int) -> list[str]:
    """Return exactly *n_rows* text rows starting at the scroll position."""
    rows: list[str] = []
    index = editor.viewport.y_scroll
    while len(rows) < n_rows and index < len(editor.buffer):
        line = editor.buffer[index]
        for part in range(line_rows(line, n_cols)):
            if len(rows) == n_rows:
                break
            rows.append(line.take_substr(part * n_cols, n_cols))
        index += 1

    welcome_row = n_rows // 3
    while len(rows) < n_rows:
        if not editor.file_name and len(rows) == welcome_row:
            rows.append(welcome_line(n_cols))
        else:
            rows.append(FILLER)
    return rows


def welcome_line(n_cols: int) -> str:
    """The welcome message centred on a filler row."""
    message = truncate_to_width(WELCOME_MESSAGE, n_cols)
    padding = (n_cols - visible_width(message)) // 2
    if padding > 0:
        return FILLER + " " * (padding - 1) + message
    return message


def status_bar(editor: Editor, n_cols: int) -> str:
    """Mode and file name on the left, the 1-based line number on the right.

    In Command mode the command being typed replaces the left part.  The
    result always fits in *n_cols* cells, even on a tiny terminal.
    """
    if editor.mode is Mode.COMMAND:
        left = editor.command_buffer
    elif editor.status_message:
        left = editor.status_message
    else:
        left = f"{editor.mode} mode {editor.file_name}"
    right = truncate_to_width(f" {editor.pos()[1] + 1}", n_cols)
    left = truncate_to_width(left, n_cols - visible_width(right))
    padding = n_cols - visible_width(left) - visible_width(right)
    return _INVERSE_ON + left + " " * padding + right + _INVERSE_OFF


def render_frame(editor: Editor, term_size: TermSize) -> str:
    """Scroll the cursor into view and build the frame for *term_size*."""
    n_cols = max(1, term_size.columns)
    editor.recalculate_scroll(term_size)

    parts = [_HIDE_CURSOR, _CURSOR_HOME]
    for row in draw_rows(editor, n_cols, visible_rows(term_size)):
        parts.append(_CLEAR_LINE + row + "\r\n")
    parts.append(_CLEAR_LINE + status_bar(editor, n_cols))

    col, row = editor.screen_cursor(n_cols)
    parts.append(_MOVE_TO_FMT.format(row + 1, col + 1))
    parts.append(_SHOW_CURSOR)
    return "".join(parts)
