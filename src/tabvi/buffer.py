"""The ordered, never-empty sequence of lines being edited."""

from __future__ import annotations

from typing import Iterable, Iterator

from tabvi.line import TAB_WIDTH, Line


class Buffer:
    """Lines of a document in order; the index of a line is its line number.

    A buffer always holds at least one line so the cursor has somewhere to
    rest.  Removing the last remaining line is refused.
    """

    def __init__(
        self,
        lines: Iterable[Line] | None = None,
        tab_width: int = TAB_WIDTH,
    ) -> None:
        self.tab_width = tab_width
        self._lines: list[Line] = list(lines) if lines is not None else []
        if not self._lines:
            self._lines.append(Line("", tab_width))

    @classmethod
    def from_text(cls, text: str, tab_width: int = TAB_WIDTH) -> Buffer:
        """Build a buffer with one line per newline-terminated line of *text*."""
        raw_lines = text.split("\n")
        if text.endswith("\n"):
            raw_lines.pop()
        lines = [
            Line(raw[:-1] if raw.endswith("\r") else raw, tab_width)
            for raw in raw_lines
        ]
        return cls(lines, tab_width)

    def to_text(self) -> str:
        return "".join(line.content + "\n" for line in self._lines)

    def new_line(self, content: str = "") -> Line:
        return Line(content, self.tab_width)

    def contents(self) -> list[str]:
        return [line.content for line in self._lines]

    # -- sequence protocol ---------------------------------------------------

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> Line:
        return self._lines[index]

    def __iter__(self) -> Iterator[Line]:
        return iter(self._lines)

    def insert(self, index: int, line: Line) -> None:
        self._lines.insert(index, line)

    def append(self, line: Line) -> None:
        self._lines.append(line)

    def pop(self, index: int) -> Line:
        if len(self._lines) == 1:
            raise IndexError("can't remove the only line of a buffer")
        return self._lines.pop(index)

    def __repr__(self) -> str:
        return f"Buffer({self._lines!r})"
