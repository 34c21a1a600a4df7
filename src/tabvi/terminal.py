"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal`` that
switches the controlling terminal into raw mode and the alternate screen,
reads key sequences and writes frames.

``ProcessTerminal`` is a context manager: leaving the ``with`` block
restores the terminal however the block is left, whether the editor quit,
input ended or an exception is on its way out.
"""

from __future__ import annotations

import codecs
import logging
import os
import select
import sys
import termios
import tty
from typing import Protocol

from tabvi.stdin_buffer import StdinBuffer
from tabvi.viewport import TermSize

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_ENTER_ALT_SCREEN = "\x1b[?1049h"
_LEAVE_ALT_SCREEN = "\x1b[?1049l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"

_READ_SIZE = 4096

# how long a dangling ESC waits for the rest of its sequence
_ESC_TIMEOUT = 0.01


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def write(self, data: str) -> None: ...

    def read_sequences(self) -> list[str]: ...

    @property
    def size(self) -> TermSize: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal backed by ``sys.stdin``/``sys.stdout``.

    Manages raw mode via :mod:`tty` and :mod:`termios`.  Failures to read,
    write or query the size are not caught here: without a terminal the
    editor can't go on.
    """

    def __init__(self) -> None:
        self._original_termios: list | None = None
        self._stdin_buffer = StdinBuffer()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._write_log_path: str = os.environ.get("TABVI_WRITE_LOG", "")

    # -- properties ---------------------------------------------------------

    @property
    def active(self) -> bool:
        return self._original_termios is not None

    @property
    def size(self) -> TermSize:
        size = os.get_terminal_size(sys.stdout.fileno())
        return TermSize(columns=size.columns, rows=size.lines)

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Save the terminal state, enable raw mode and the alternate screen.

        If anything fails once raw mode is on, the saved state is put back
        before the error propagates.
        """
        fd = sys.stdin.fileno()
        self._original_termios = termios.tcgetattr(fd)
        tty.setraw(fd)
        logger.debug("raw mode enabled on fd %d", fd)
        try:
            self.write(_ENTER_ALT_SCREEN + _CLEAR_SCREEN)
        except BaseException:
            self._restore_mode()
            raise

    def stop(self) -> None:
        """Restore the saved terminal state. Safe to call more than once."""
        if self._original_termios is None:
            return
        try:
            self.write(_LEAVE_ALT_SCREEN + _SHOW_CURSOR)
        finally:
            self._restore_mode()

    def _restore_mode(self) -> None:
        original, self._original_termios = self._original_termios, None
        self._stdin_buffer.clear()
        if original is not None:
            termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, original)
            logger.debug("terminal restored")

    def __enter__(self) -> ProcessTerminal:
        self.start()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.stop()

    # -- input --------------------------------------------------------------

    def read_sequences(self) -> list[str]:
        """Block for the next chunk of input and split it into sequences.

        An escape sequence cut between reads is completed from the following
        reads.  A lone ``ESC`` with nothing behind it within a short timeout
        is the Escape key.  Returns an empty list once stdin is closed.
        """
        fd = sys.stdin.fileno()
        raw = os.read(fd, _READ_SIZE)
        if not raw:
            return self._stdin_buffer.flush()
        sequences = self._stdin_buffer.process(self._decoder.decode(raw))
        while self._stdin_buffer.get_buffer():
            ready, _, _ = select.select([fd], [], [], _ESC_TIMEOUT)
            more = os.read(fd, _READ_SIZE) if ready else b""
            if not more:
                sequences.extend(self._stdin_buffer.flush())
                break
            sequences.extend(self._stdin_buffer.process(self._decoder.decode(more)))
        return sequences

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write data to stdout and optionally to the write log."""
        sys.stdout.write(data)
        sys.stdout.flush()

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a", encoding="utf-8") as f:
                    f.write(data)
            except OSError as e:
                logger.warning("write log %s disabled: %s", self._write_log_path, e)
                self._write_log_path = ""
