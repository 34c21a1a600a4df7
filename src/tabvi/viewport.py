"""Mapping the cursor onto the screen and keeping it scrolled into view.

Long lines wrap: a line of display length ``n`` takes ``ceil(n / columns)``
screen rows, and at least one row when empty.  The last terminal row is
reserved for the status bar.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from tabvi.buffer import Buffer
from tabvi.cursor import Cursor, pos
from tabvi.line import Line

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TermSize:
    columns: int
    rows: int


def line_rows(line: Line, n_cols: int) -> int:
    """Number of screen rows *line* occupies at width *n_cols*."""
    return max(1, math.ceil(len(line) / max(1, n_cols)))


def visible_rows(term_size: TermSize) -> int:
    """Rows available for text, the status bar excluded."""
    return max(1, term_size.rows - 1)


@dataclass
class Viewport:
    """Scroll state: ``y_scroll`` is the topmost buffer line on screen."""

    y_scroll: int = 0

    def _rows_above(self, buffer: Buffer, y: int, n_cols: int) -> int:
        return sum(line_rows(buffer[i], n_cols) for i in range(self.y_scroll, y))

    def cursor_pos_to_screen_pos(
        self,
        buffer: Buffer,
        cursor: Cursor,
        n_cols: int,
        tight: bool,
    ) -> tuple[int, int]:
        """Return the ``(col, row)`` screen cell of the bounded cursor."""
        n_cols = max(1, n_cols)
        x, y = pos(buffer, cursor, tight)
        row = self._rows_above(buffer, y, n_cols) + x // n_cols
        return x % n_cols, row

    def recalculate_scroll(
        self,
        buffer: Buffer,
        cursor: Cursor,
        term_size: TermSize,
        tight: bool = False,
    ) -> int:
        """Scroll by the smallest amount that brings the cursor into view.

        Scrolling stops once the cursor's line is the top line, even if a
        very long wrapped line still doesn't fit.
        """
        n_cols = max(1, term_size.columns)
        limit = visible_rows(term_size)
        x, y = pos(buffer, cursor, tight)
        previous = self.y_scroll

        if self.y_scroll > y:
            self.y_scroll = y
        while self.y_scroll < y:
            if self._rows_above(buffer, y, n_cols) + x // n_cols < limit:
                break
            self.y_scroll += 1

        if self.y_scroll != previous:
            logger.debug("scrolled from line %d to %d", previous, self.y_scroll)
        return self.y_scroll
