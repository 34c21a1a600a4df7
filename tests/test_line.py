"""Tests for tabvi.line.Line -- tab expansion, index translation and edits."""

from __future__ import annotations

import pytest

from tabvi.line import TAB_WIDTH, Line, LineIndexError

# tab, á, ñ, tab, ë  ->  columns 0-3, 4, 5, 6-7, 8
MIXED = "\táñ\të"


def valid_columns(line: Line) -> list[int]:
    return [i for i in range(len(line) + 1) if line.is_valid_index(i)]


class TestLineConstruction:
    """A Line never holds a newline and renders tabs to tab stops."""

    def test_default_tab_width_is_four(self) -> None:
        assert TAB_WIDTH == 4
        assert Line("x").tab_width == 4

    def test_newline_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            Line("one\ntwo")

    def test_tab_width_below_one_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            Line("x", tab_width=0)

    def test_display_expands_tabs(self) -> None:
        assert Line("\taa\te").display == "    aa  e"

    def test_content_is_kept_raw(self) -> None:
        assert Line("\taa\te").content == "\taa\te"

    def test_empty_line(self) -> None:
        line = Line("")
        assert len(line) == 0
        assert line.is_empty()
        assert line.display == ""

    def test_line_of_only_a_tab_is_not_empty(self) -> None:
        line = Line("\t")
        assert not line.is_empty()
        assert len(line) == 4

    def test_custom_tab_width(self) -> None:
        line = Line("\tx", tab_width=8)
        assert len(line) == 9
        assert line.display == " " * 8 + "x"


class TestLineLength:
    """len() counts grapheme clusters of the rendering."""

    def test_len_without_tabs_counts_graphemes(self) -> None:
        assert len(Line("hello")) == 5
        assert len(Line("áñëü")) == 4

    def test_combining_marks_do_not_add_columns(self) -> None:
        # e + COMBINING ACUTE ACCENT is one grapheme
        line = Line("e\u0301x")
        assert len(line) == 2
        assert line.is_valid_index(1)

    def test_tab_pads_to_next_stop(self) -> None:
        line = Line("a\tb")
        assert len(line) == 5
        assert line.display == "a   b"

    def test_tab_at_stop_takes_full_width(self) -> None:
        assert len(Line("abcd\t")) == 8

    def test_mixed_line_length(self) -> None:
        assert len(Line(MIXED)) == 9


class TestLineValidIndex:
    """Only columns where a grapheme's rendering starts are valid."""

    def test_columns_inside_a_tab_are_invalid(self) -> None:
        line = Line(MIXED)
        assert not line.is_valid_index(7)
        assert line.is_valid_index(8)

    def test_valid_columns_follow_the_width_walk(self) -> None:
        assert valid_columns(Line(MIXED)) == [0, 4, 5, 6, 8]

    def test_one_past_end_is_not_a_valid_index(self) -> None:
        line = Line("abc")
        assert not line.is_valid_index(3)

    def test_empty_line_has_no_valid_index(self) -> None:
        assert valid_columns(Line("")) == []


class TestLineNeighbourIndices:
    """next_valid_index / prev_valid_index step over a tab as one unit."""

    def test_next_skips_tab_padding(self) -> None:
        line = Line("á\ttaro")
        assert line.next_valid_index(0) == 1
        assert line.next_valid_index(1) == 4
        assert line.next_valid_index(4) == 5

    def test_next_is_none_on_last_grapheme(self) -> None:
        line = Line("á\ttaro")
        assert line.next_valid_index(7) is None

    def test_next_is_none_on_empty_line(self) -> None:
        assert Line("").next_valid_index(0) is None

    def test_prev_skips_tab_padding(self) -> None:
        line = Line("á\ttaro")
        assert line.prev_valid_index(4) == 1
        assert line.prev_valid_index(1) == 0

    def test_prev_is_none_at_start(self) -> None:
        assert Line("abc").prev_valid_index(0) is None

    def test_prev_from_one_past_end(self) -> None:
        assert Line("a\t").prev_valid_index(4) == 1

    def test_prev_from_inside_tab_snaps_to_tab_start(self) -> None:
        assert Line(MIXED).prev_valid_index(7) == 6

    def test_prev_undoes_next(self) -> None:
        line = Line(MIXED)
        for i in valid_columns(line):
            nxt = line.next_valid_index(i)
            if nxt is not None:
                assert line.prev_valid_index(nxt) == i


class TestLineTakeSubstr:
    """take_substr slices the rendering by grapheme columns."""

    def test_slice_from_middle(self) -> None:
        assert Line("hello world").take_substr(6, 3) == "wor"

    def test_slice_past_end_is_empty(self) -> None:
        assert Line("abc").take_substr(3, 5) == ""
        assert Line("abc").take_substr(10, 5) == ""

    def test_slice_is_clipped_at_end(self) -> None:
        assert Line("abcdef").take_substr(4, 10) == "ef"

    def test_slice_includes_tab_padding(self) -> None:
        assert Line("a\tb").take_substr(0, 3) == "a  "

    def test_slice_counts_graphemes_not_codepoints(self) -> None:
        assert Line("e\u0301abc").take_substr(0, 2) == "e\u0301a"


class TestLineInsert:
    """insert translates a display column into a content position."""

    def test_insert_at_end(self) -> None:
        line = Line("Frase")
        line.insert(5, "1")
        assert line.content == "Frase1"

    def test_insert_at_start(self) -> None:
        line = Line("bc")
        line.insert(0, "a")
        assert line.content == "abc"

    def test_insert_after_tab(self) -> None:
        line = Line("a\tb")
        line.insert(4, "x")
        assert line.content == "a\txb"
        assert line.display == "a   xb"

    def test_insert_tab_updates_display(self) -> None:
        line = Line("ab")
        line.insert(1, "\t")
        assert line.display == "a   b"
        assert len(line) == 5

    def test_insert_moves_following_tab_stop(self) -> None:
        line = Line("\tx")
        line.insert(0, "ab")
        assert line.display == "ab  x"

    def test_insert_inside_tab_raises(self) -> None:
        line = Line("a\tb")
        with pytest.raises(LineIndexError):
            line.insert(2, "x")

    def test_insert_past_end_raises(self) -> None:
        with pytest.raises(LineIndexError):
            Line("ab").insert(3, "x")

    def test_insert_newline_raises(self) -> None:
        with pytest.raises(ValueError):
            Line("ab").insert(1, "\n")

    def test_line_index_error_is_an_index_error(self) -> None:
        with pytest.raises(IndexError):
            Line("a\tb").insert(3, "x")


class TestLineSplitOff:
    """split_off keeps the prefix and returns the suffix as a new Line."""

    def test_split_in_middle(self) -> None:
        line = Line("Frase")
        rest = line.split_off(2)
        assert line.content == "Fr"
        assert rest.content == "ase"

    def test_split_at_end_gives_empty_suffix(self) -> None:
        line = Line("abc")
        rest = line.split_off(3)
        assert line.content == "abc"
        assert rest.is_empty()

    def test_split_at_start_moves_everything(self) -> None:
        line = Line("abc")
        rest = line.split_off(0)
        assert line.is_empty()
        assert rest.content == "abc"

    def test_split_keeps_tab_width(self) -> None:
        rest = Line("a\tb", tab_width=2).split_off(1)
        assert rest.tab_width == 2
        assert rest.display == "  b"

    def test_split_inside_tab_raises(self) -> None:
        with pytest.raises(LineIndexError):
            Line(MIXED).split_off(7)

    def test_split_then_join_restores_content(self) -> None:
        for at in valid_columns(Line(MIXED)) + [len(Line(MIXED))]:
            line = Line(MIXED)
            rest = line.split_off(at)
            assert line.content + rest.content == MIXED


class TestLineRemoveAndPush:
    """remove drops one grapheme; push appends raw text."""

    def test_remove_returns_grapheme(self) -> None:
        line = Line("abc")
        assert line.remove(1) == "b"
        assert line.content == "ac"

    def test_remove_tab(self) -> None:
        line = Line("a\tb")
        assert line.remove(1) == "\t"
        assert line.display == "ab"

    def test_remove_combined_grapheme_whole(self) -> None:
        line = Line("e\u0301x")
        assert line.remove(0) == "e\u0301"
        assert line.content == "x"

    def test_remove_one_past_end_raises(self) -> None:
        with pytest.raises(LineIndexError):
            Line("abc").remove(3)

    def test_remove_inside_tab_raises(self) -> None:
        with pytest.raises(LineIndexError):
            Line("a\tb").remove(2)

    def test_push_appends_and_rerenders(self) -> None:
        line = Line("ab")
        line.push("\tc")
        assert line.content == "ab\tc"
        assert line.display == "ab  c"

    def test_push_newline_raises(self) -> None:
        with pytest.raises(ValueError):
            Line("ab").push("c\n")


class TestLineInsertThenRemove:
    """Removing what was just inserted gives back the original content."""

    @pytest.mark.parametrize("content", ["", "abc", MIXED, "e\u0301x\t", "\t\t"])
    @pytest.mark.parametrize("text", ["x", "\t", "e\u0301", "\u00f1"])
    def test_at_every_column(self, content: str, text: str) -> None:
        for column in valid_columns(Line(content)) + [len(Line(content))]:
            line = Line(content)
            line.insert(column, text)
            assert line.remove(column) == text
            assert line.content == content
            assert line == Line(content)


class TestLineEquality:
    """Lines compare by content and tab width."""

    def test_equal_lines(self) -> None:
        assert Line("abc") == Line("abc")

    def test_different_content(self) -> None:
        assert Line("abc") != Line("abd")

    def test_different_tab_width(self) -> None:
        assert Line("\t", tab_width=2) != Line("\t", tab_width=4)

    def test_repr_shows_content(self) -> None:
        assert repr(Line("a\tb")) == "Line('a\\tb')"
