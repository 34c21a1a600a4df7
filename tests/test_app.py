"""Tests for tabvi.app.run -- the control loop against a virtual terminal."""

from __future__ import annotations

from tabvi.app import run
from tabvi.buffer import Buffer
from tabvi.editor import Editor
from tabvi.line import Line
from tabvi.modes import Mode

from .virtual_terminal import VirtualTerminal, keys


class TestRunLoop:
    def test_quit_command_ends_loop(self) -> None:
        editor = Editor()
        terminal = VirtualTerminal(chunks=keys(":", "q", "\r"))
        run(editor, terminal)
        assert editor.quit_requested
        # one frame before each key
        assert terminal.write_count == 3
        assert terminal.read_count == 3

    def test_input_end_ends_loop(self) -> None:
        editor = Editor()
        terminal = VirtualTerminal()
        run(editor, terminal)
        assert not editor.quit_requested
        assert terminal.write_count == 1
        assert terminal.read_count == 1

    def test_several_keys_in_one_chunk(self) -> None:
        editor = Editor()
        terminal = VirtualTerminal(chunks=[["i", "h", "i", "\x1b"]])
        run(editor, terminal)
        assert editor.buffer.contents() == ["hi"]
        assert editor.mode is Mode.NORMAL
        # each key redraws, plus the frame drawn before input ended
        assert terminal.write_count == 5
        assert terminal.read_count == 2

    def test_escape_sequences_are_keys(self) -> None:
        editor = Editor(Buffer([Line("abc"), Line("def")]))
        terminal = VirtualTerminal(chunks=keys("\x1b[B", "\x1b[C", ":", "q", "\r"))
        run(editor, terminal)
        assert editor.pos() == (1, 1)

    def test_unrecognised_input_is_ignored(self) -> None:
        editor = Editor()
        terminal = VirtualTerminal(chunks=keys("\x1b[999X", "i", "a"))
        run(editor, terminal)
        assert editor.buffer.contents() == ["a"]

    def test_frames_follow_terminal_size(self) -> None:
        editor = Editor(Buffer([Line("abcdef")]), file_name="f.txt")
        terminal = VirtualTerminal(rows=3, columns=4, chunks=keys("A"))
        run(editor, terminal)
        assert "\x1b[2Kabcd\r\n\x1b[2Kef\r\n" in terminal.last_frame
        assert terminal.last_frame.endswith("\x1b[2;3H\x1b[?25h")

    def test_status_bar_shows_mode(self) -> None:
        editor = Editor(file_name="f.txt")
        terminal = VirtualTerminal(chunks=keys("i"))
        run(editor, terminal)
        assert "Insert mode f.txt" in terminal.last_frame

    def test_write_and_quit(self, tmp_path) -> None:
        path = tmp_path / "notes.txt"
        editor = Editor.open(str(path))
        chunks = keys("i", "o", "k", "\x1b", ":", "w", "q", "\r")
        run(editor, VirtualTerminal(chunks=chunks))
        assert editor.quit_requested
        assert path.read_text(encoding="utf-8") == "ok\n"

    def test_does_not_manage_terminal_mode(self) -> None:
        terminal = VirtualTerminal(chunks=keys(":", "q", "\r"))
        run(Editor(), terminal)
        assert terminal.start_count == 0
        assert terminal.stop_count == 0
