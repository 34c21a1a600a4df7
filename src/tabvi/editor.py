"""Editor state and the Normal/Insert/Command mode state machine.

All mutable state lives on one :class:`Editor` value that the control loop
owns and passes around; nothing is kept in module globals.  One key event
is handled to completion by :meth:`Editor.handle_key` before the next is
read.
"""

from __future__ import annotations

import logging

from tabvi.buffer import Buffer
from tabvi.cursor import Cursor, move_down, move_left, move_right, move_up, pos
from tabvi.files import load_buffer, save_buffer
from tabvi.keys import Key, KeyId, key_text
from tabvi.line import TAB_WIDTH, Line
from tabvi.modes import Mode
from tabvi.viewport import TermSize, Viewport

logger = logging.getLogger(__name__)


class Editor:
    """A buffer, a cursor on it, the scroll position and the current mode."""

    def __init__(
        self,
        buffer: Buffer | None = None,
        *,
        file_name: str = "",
        tab_width: int = TAB_WIDTH,
    ) -> None:
        self.tab_width = tab_width
        self.buffer = buffer if buffer is not None else Buffer(tab_width=tab_width)
        self.cursor = Cursor()
        self.viewport = Viewport()
        self.mode = Mode.NORMAL
        self.command_buffer: str = ""
        self.file_name = file_name
        self.status_message: str = ""
        self.quit_requested: bool = False

    @classmethod
    def open(cls, path: str, tab_width: int = TAB_WIDTH) -> Editor:
        """Create an editor on *path*; a missing file starts empty."""
        return cls(load_buffer(path, tab_width), file_name=path, tab_width=tab_width)

    # -- bounded position ----------------------------------------------------

    @property
    def tight(self) -> bool:
        """Only Insert mode may rest one column past the end of a line."""
        return self.mode is not Mode.INSERT

    def pos(self, tight: bool | None = None) -> tuple[int, int]:
        return pos(self.buffer, self.cursor, self.tight if tight is None else tight)

    def current_line(self) -> Line:
        return self.buffer[self.pos()[1]]

    def _settle(self, tight: bool) -> None:
        self.cursor.x, self.cursor.y = self.pos(tight)

    # -- viewport ------------------------------------------------------------

    def recalculate_scroll(self, term_size: TermSize) -> int:
        return self.viewport.recalculate_scroll(
            self.buffer, self.cursor, term_size, self.tight
        )

    def screen_cursor(self, n_cols: int) -> tuple[int, int]:
        return self.viewport.cursor_pos_to_screen_pos(
            self.buffer, self.cursor, n_cols, self.tight
        )

    # -- dispatch ------------------------------------------------------------

    def handle_key(self, key: KeyId) -> None:
        """Apply one key event in the current mode. Unbound keys do nothing."""
        logger.debug("%s mode: key %r", self.mode, key)
        self.status_message = ""
        if self.mode is Mode.NORMAL:
            self._handle_normal(key)
        elif self.mode is Mode.INSERT:
            self._handle_insert(key)
        else:
            self._handle_command(key)

    def _enter_mode(self, mode: Mode) -> None:
        if mode is not self.mode:
            logger.debug("mode %s -> %s", self.mode, mode)
        self.mode = mode

    # -- Normal mode ---------------------------------------------------------

    def _handle_normal(self, key: KeyId) -> None:
        if key == ":":
            self.command_buffer = ":"
            self._enter_mode(Mode.COMMAND)
        elif key in ("h", Key.left):
            move_left(self.buffer, self.cursor, 1, True)
        elif key in ("l", Key.right):
            move_right(self.buffer, self.cursor, 1, True)
        elif key in ("k", Key.up):
            move_up(self.buffer, self.cursor, 1, True)
        elif key in ("j", Key.down):
            move_down(self.buffer, self.cursor, 1, True)
        elif key == Key.home:
            self.cursor.x = 0
        elif key == Key.end:
            self.move_to_line_end(True)
        elif key == "i":
            self._settle(True)
            self._enter_mode(Mode.INSERT)
        elif key == "a":
            self._settle(True)
            move_right(self.buffer, self.cursor, 1, False)
            self._enter_mode(Mode.INSERT)
        elif key == "A":
            self._settle(True)
            self.move_to_line_end(False)
            self._enter_mode(Mode.INSERT)
        elif key == "o":
            self.open_line_below()
            self._enter_mode(Mode.INSERT)

    def move_to_line_end(self, tight: bool) -> None:
        move_right(self.buffer, self.cursor, len(self.current_line()), tight)

    def open_line_below(self) -> None:
        _, y = self.pos()
        self.buffer.insert(y + 1, self.buffer.new_line())
        self.cursor.x, self.cursor.y = 0, y + 1

    # -- Insert mode ---------------------------------------------------------

    def _handle_insert(self, key: KeyId) -> None:
        text = key_text(key)
        if text is not None:
            self.insert_text(text)
        elif key == Key.enter:
            self.insert_new_line()
        elif key == Key.backspace:
            self.delete_back()
        elif key == Key.delete:
            self.delete_forward()
        elif key == Key.escape:
            # a loose step from the append column always lands tight-valid
            move_left(self.buffer, self.cursor, 1, False)
            self._enter_mode(Mode.NORMAL)
        elif key == Key.left:
            move_left(self.buffer, self.cursor, 1, False)
        elif key == Key.right:
            move_right(self.buffer, self.cursor, 1, False)
        elif key == Key.up:
            move_up(self.buffer, self.cursor, 1, False)
        elif key == Key.down:
            move_down(self.buffer, self.cursor, 1, False)
        elif key == Key.home:
            self.cursor.x = 0
        elif key == Key.end:
            self.move_to_line_end(False)

    def insert_text(self, text: str) -> None:
        """Insert *text* at the loose cursor column and step past it."""
        x, y = self.pos(False)
        self.buffer[y].insert(x, text)
        self.cursor.x, self.cursor.y = x, y
        move_right(self.buffer, self.cursor, 1, False)

    def insert_new_line(self) -> None:
        """Split the current line at the cursor; the cursor starts the new line."""
        x, y = self.pos(False)
        self.buffer.insert(y + 1, self.buffer[y].split_off(x))
        self.cursor.x, self.cursor.y = 0, y + 1

    def delete_back(self) -> None:
        """Delete left of the cursor, joining onto the previous line at column 0."""
        x, y = self.pos(False)
        if x != 0:
            self.cursor.x, self.cursor.y = x, y
            move_left(self.buffer, self.cursor, 1, False)
            self.buffer[y].remove(self.cursor.x)
        elif y != 0:
            previous = self.buffer[y - 1]
            self.cursor.x, self.cursor.y = len(previous), y - 1
            previous.push(self.buffer.pop(y).content)

    def delete_forward(self) -> None:
        """Delete under the cursor, or join the next line when at the end.

        An empty line other than the first is removed outright; the cursor
        then rests on the line that followed it, or on the new last line.
        """
        x, y = self.pos(False)
        line = self.buffer[y]
        if line.is_empty() and y != 0:
            self.buffer.pop(y)
            self.cursor.x, self.cursor.y = 0, min(y, len(self.buffer) - 1)
            return
        if x < len(line):
            line.remove(x)
        elif y + 1 < len(self.buffer):
            line.push(self.buffer.pop(y + 1).content)
        self.cursor.x, self.cursor.y = x, y

    # -- Command mode --------------------------------------------------------

    def _handle_command(self, key: KeyId) -> None:
        text = key_text(key)
        if text is not None:
            self.command_buffer += text
        elif key == Key.backspace:
            self.command_buffer = self.command_buffer[:-1]
        elif key == Key.escape:
            self.command_buffer = ""
            self._enter_mode(Mode.NORMAL)
        elif key == Key.enter:
            self.execute_command()

    def execute_command(self) -> None:
        """Run the accumulated command and return to Normal mode.

        ``:q`` quits, ``:w`` saves, ``:wq`` saves and quits when the save
        worked.  Any other command is accepted and does nothing.
        """
        command = self.command_buffer
        self.command_buffer = ""
        self._enter_mode(Mode.NORMAL)
        logger.debug("executing %r", command)

        if command == ":q":
            self.quit_requested = True
        elif command == ":w":
            self.save()
        elif command == ":wq":
            if self.save():
                self.quit_requested = True

    def save(self) -> bool:
        """Write the buffer to its file, reporting the outcome in the status bar."""
        if not self.file_name:
            self.status_message = "No file name"
            return False
        try:
            save_buffer(self.buffer, self.file_name)
        except OSError as e:
            logger.warning("could not write %s: %s", self.file_name, e)
            self.status_message = f"Can't write {self.file_name}: {e.strerror or e}"
            return False
        self.status_message = f'"{self.file_name}" {len(self.buffer)}L written'
        return True
