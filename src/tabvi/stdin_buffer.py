"""StdinBuffer splits raw input chunks into complete key sequences.

Input read from a raw-mode terminal arrives in arbitrary chunks: several
keys can come in one read and an escape sequence can be cut in half.
The buffer keeps an incomplete escape sequence until more data arrives or
until the caller flushes it (a bare ``ESC`` is the Escape key).

Only keyboard input is expected; the editor never turns on mouse
reporting or asks the terminal for OSC replies.
"""

from __future__ import annotations

ESC = "\x1b"

COMPLETE = "complete"
INCOMPLETE = "incomplete"
NOT_ESCAPE = "not-escape"


def _is_complete_sequence(data: str) -> str:
    """Classify *data* as a complete escape sequence, a prefix of one, or neither."""
    if not data.startswith(ESC):
        return NOT_ESCAPE
    if len(data) == 1:
        return INCOMPLETE

    introducer = data[1]
    if introducer == "[":
        # CSI: parameters, then one final byte in 0x40-0x7E
        if len(data) > 2 and 0x40 <= ord(data[-1]) <= 0x7E:
            return COMPLETE
        return INCOMPLETE
    if introducer == "O":
        # SS3: exactly one byte follows
        return COMPLETE if len(data) >= 3 else INCOMPLETE

    # ESC + key is Alt + key
    return COMPLETE


def _extract_complete_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete sequences.

    Returns (sequences, remainder), the remainder being an unfinished
    escape sequence or ``""``.
    """
    sequences: list[str] = []
    start = 0
    while start < len(buffer):
        if buffer[start] != ESC:
            sequences.append(buffer[start])
            start += 1
            continue

        end = start + 1
        while _is_complete_sequence(buffer[start:end]) != COMPLETE:
            if end == len(buffer):
                return sequences, buffer[start:]
            end += 1
        sequences.append(buffer[start:end])
        start = end

    return sequences, ""


class StdinBuffer:
    """Buffers input and hands back complete sequences."""

    def __init__(self) -> None:
        self._buffer: str = ""

    def process(self, data: str) -> list[str]:
        """Feed *data* and return every sequence it completes."""
        sequences, self._buffer = _extract_complete_sequences(self._buffer + data)
        return sequences

    def flush(self) -> list[str]:
        """Release whatever partial sequence is pending, as a single item."""
        if not self._buffer:
            return []
        pending, self._buffer = self._buffer, ""
        return [pending]

    def get_buffer(self) -> str:
        return self._buffer

    def clear(self) -> None:
        self._buffer = ""
