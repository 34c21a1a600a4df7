"""A single line of text and its tab-expanded rendering.

Every column used by the editor is a *display column*: an index into the
line's rendering, where each grapheme cluster takes one column and a tab
is padded with spaces up to the next multiple of the tab width.  Only the
columns where a grapheme's rendering starts are valid cursor positions;
columns inside a tab's padding are not.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right

import grapheme

TAB_WIDTH = 4


class LineIndexError(IndexError):
    """Raised when a display column does not start a grapheme's rendering."""


def _check_no_newline(text: str) -> None:
    if "\n" in text:
        raise ValueError("a Line can't contain a newline character")


class Line:
    """Raw content of one line plus its derived display rendering.

    The rendering is rebuilt after every mutation and is never edited on
    its own.  Grapheme start columns are cached alongside it so index
    translation is a binary search instead of a walk over the content.
    """

    def __init__(self, content: str = "", tab_width: int = TAB_WIDTH) -> None:
        _check_no_newline(content)
        if tab_width < 1:
            raise ValueError(f"tab width must be at least 1, got {tab_width}")
        self._content = content
        self._tab_width = tab_width
        self._graphemes: list[str] = []
        self._starts: list[int] = []
        self._cells: list[str] = []
        self._update_display()

    # -- rendering -----------------------------------------------------------

    def _update_display(self) -> None:
        """Re-segment the content and rebuild the rendered cells."""
        self._graphemes = list(grapheme.graphemes(self._content))
        self._starts = []
        self._cells = []
        for g in self._graphemes:
            col = len(self._cells)
            self._starts.append(col)
            if g == "\t":
                self._cells.extend(" " * (self._tab_width - col % self._tab_width))
            else:
                self._cells.append(g)

    @property
    def content(self) -> str:
        return self._content

    @property
    def display(self) -> str:
        return "".join(self._cells)

    @property
    def tab_width(self) -> int:
        return self._tab_width

    def __len__(self) -> int:
        return len(self._cells)

    def is_empty(self) -> bool:
        return not self._graphemes

    def take_substr(self, start: int, max_len: int) -> str:
        """Return up to *max_len* display columns starting at *start*.

        Used to render one wrapped screen row; an empty string is returned
        when *start* lies past the end of the rendering.
        """
        if start >= len(self._cells) or max_len <= 0:
            return ""
        return "".join(self._cells[start : start + max_len])

    # -- index translation ---------------------------------------------------

    def is_valid_index(self, index: int) -> bool:
        i = bisect_left(self._starts, index)
        return i < len(self._starts) and self._starts[i] == index

    def next_valid_index(self, index: int) -> int | None:
        """Start column of the grapheme after the one at *index*, if any."""
        i = bisect_right(self._starts, index)
        if i < len(self._starts):
            return self._starts[i]
        return None

    def prev_valid_index(self, index: int) -> int | None:
        """Greatest valid column strictly before *index*, if any."""
        i = bisect_left(self._starts, index)
        if i > 0:
            return self._starts[i - 1]
        return None

    def _grapheme_position(self, index: int, allow_end: bool) -> int:
        """Translate a display column into a position in the grapheme list."""
        if allow_end and index == len(self._cells):
            return len(self._graphemes)
        i = bisect_left(self._starts, index)
        if i < len(self._starts) and self._starts[i] == index:
            return i
        raise LineIndexError(
            f"column {index} is not a valid position in {self!r} "
            f"(display length {len(self._cells)})"
        )

    # -- mutation ------------------------------------------------------------

    def insert(self, index: int, text: str) -> None:
        """Insert *text* before the grapheme rendered at column *index*.

        *index* may also be the one-past-end column, which appends.
        """
        _check_no_newline(text)
        pos = self._grapheme_position(index, allow_end=True)
        self._content = (
            "".join(self._graphemes[:pos]) + text + "".join(self._graphemes[pos:])
        )
        self._update_display()

    def split_off(self, at: int) -> Line:
        """Keep the content before column *at*; return the rest as a new Line."""
        pos = self._grapheme_position(at, allow_end=True)
        suffix = "".join(self._graphemes[pos:])
        self._content = "".join(self._graphemes[:pos])
        self._update_display()
        return Line(suffix, self._tab_width)

    def remove(self, index: int) -> str:
        """Remove and return the grapheme whose rendering starts at *index*."""
        pos = self._grapheme_position(index, allow_end=False)
        removed = self._graphemes[pos]
        self._content = (
            "".join(self._graphemes[:pos]) + "".join(self._graphemes[pos + 1 :])
        )
        self._update_display()
        return removed

    def push(self, suffix: str) -> None:
        _check_no_newline(suffix)
        self._content += suffix
        self._update_display()

    # -- comparison ----------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self._content == other._content and self._tab_width == other._tab_width

    def __repr__(self) -> str:
        return f"Line({self._content!r})"
