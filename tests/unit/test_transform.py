"""Tests for decorate/undecorate/unbox."""

from __future__ import annotations

import pytest

from boxquote.buffer import TextBuffer
from boxquote.config import DecorationStyle
from boxquote.core import Box, NoBoxFound, decorate, locate, unbox, undecorate


class TestDecorate:
    """Wrapping a range of lines in a box."""

    def test_three_line_scenario(self, style: DecorationStyle) -> None:
        buf = TextBuffer("a\nb\nc")
        box = decorate(buf, 0, 5, style)
        assert buf.text == ",----\n| a\n| b\n| c\n`----"
        assert box == Box(0, len(buf.text))

    def test_terminated_lines(self, style: DecorationStyle) -> None:
        buf = TextBuffer("a\nb\n")
        box = decorate(buf, 0, 4, style)
        assert buf.text == ",----\n| a\n| b\n`----\n"
        assert box == Box(0, len(buf.text) - 1)

    def test_surrounding_text_untouched(self, style: DecorationStyle) -> None:
        buf = TextBuffer("before\nx\nafter\n")
        decorate(buf, 7, 9, style)
        assert buf.text == "before\n,----\n| x\n`----\nafter\n"

    def test_blank_lines_get_side_prefix(self, style: DecorationStyle) -> None:
        buf = TextBuffer("x\n\ny\n")
        decorate(buf, 0, 5, style)
        assert buf.text == ",----\n| x\n| \n| y\n`----\n"

    def test_empty_range(self, style: DecorationStyle) -> None:
        buf = TextBuffer("")
        box = decorate(buf, 0, 0, style)
        assert buf.text == ",----\n`----\n"
        assert box == Box(0, 11)

    def test_mid_line_start_splits_line(self, style: DecorationStyle) -> None:
        buf = TextBuffer("hello world")
        decorate(buf, 6, 11, style)
        assert buf.text == "hello \n,----\n| world\n`----"

    def test_mid_line_end_splits_line(self, style: DecorationStyle) -> None:
        buf = TextBuffer("abc\ndef")
        decorate(buf, 0, 2, style)
        assert buf.text == ",----\n| ab\n`----\nc\ndef"

    def test_reversed_range(self, style: DecorationStyle) -> None:
        buf = TextBuffer("a\n")
        decorate(buf, 2, 0, style)
        assert buf.text == ",----\n| a\n`----\n"

    def test_result_is_locatable_from_every_line(self, style: DecorationStyle) -> None:
        buf = TextBuffer("intro\none\ntwo\noutro\n")
        box = decorate(buf, 6, 14, style)
        for line in buf.line_starts(box.start, box.end):
            assert locate(buf, line, style) == box

    def test_point_is_preserved(self, style: DecorationStyle) -> None:
        buf = TextBuffer("intro\nbody\n")
        buf.point = 2
        decorate(buf, 6, 11, style)
        assert buf.point == 2

    def test_decorate_inside_narrowed_view(self, style: DecorationStyle) -> None:
        buf = TextBuffer("abc\ndef")
        buf.narrow(0, 2)
        decorate(buf, 0, 2, style)
        buf.widen()
        assert buf.text == ",----\n| ab\n`----\nc\ndef"

    def test_nested_decoration(self, style: DecorationStyle) -> None:
        buf = TextBuffer("a\n")
        decorate(buf, 0, 2, style)
        decorate(buf, 0, len(buf.text), style)
        assert buf.text == ",----\n| ,----\n| | a\n| `----\n`----\n"
        inner = locate(buf, buf.text.index("| | a"), style)
        assert inner is not None
        assert inner.depth == 1

    def test_decorate_at_depth(self, style: DecorationStyle) -> None:
        buf = TextBuffer("| x\n")
        box = decorate(buf, 0, 4, style, depth=1)
        assert buf.text == "| ,----\n| | x\n| `----\n"
        assert box.indent == "| "

    def test_custom_style(self, quote_style: DecorationStyle) -> None:
        buf = TextBuffer("a\nb\n")
        decorate(buf, 0, 4, quote_style)
        assert buf.text == "+==\n> a\n> b\n#==\n"


class TestUndecorate:
    """Stripping a box back to plain text."""

    def test_three_line_scenario(self, style: DecorationStyle) -> None:
        buf = TextBuffer(",----\n| a\n| b\n| c\n`----")
        plain = undecorate(buf, 0, len(buf.text), style)
        assert buf.text == "a\nb\nc"
        assert plain == (0, 5)

    def test_terminated_box(self, style: DecorationStyle) -> None:
        buf = TextBuffer("x\n,----\n| a\n`----\ny\n")
        undecorate(buf, 2, 17, style)
        assert buf.text == "x\na\ny\n"

    def test_titled_top_marker_removed(self, style: DecorationStyle) -> None:
        buf = TextBuffer(",---- [ t ]\n| a\n`----\n")
        undecorate(buf, 0, len(buf.text), style)
        assert buf.text == "a\n"

    def test_unprefixed_lines_left_alone(self, style: DecorationStyle) -> None:
        buf = TextBuffer(",----\n| a\nloose\n`----\n")
        undecorate(buf, 0, len(buf.text), style)
        assert buf.text == "a\nloose\n"

    def test_requires_top_marker_first(self, style: DecorationStyle) -> None:
        buf = TextBuffer("plain\n| a\n`----\n")
        with pytest.raises(NoBoxFound):
            undecorate(buf, 0, len(buf.text), style)
        assert buf.text == "plain\n| a\n`----\n"

    def test_view_restored_after_failure(self, style: DecorationStyle) -> None:
        buf = TextBuffer("plain\n")
        with pytest.raises(NoBoxFound):
            undecorate(buf, 0, 6, style)
        assert not buf.is_narrowed

    def test_inner_box_only(self, style: DecorationStyle) -> None:
        buf = TextBuffer(",----\n| ,----\n| | a\n| `----\n`----\n")
        inner = locate(buf, buf.text.index("| | a"), style)
        assert inner is not None
        undecorate(buf, inner.start, inner.end, style, depth=inner.depth)
        assert buf.text == ",----\n| a\n`----\n"


class TestRoundTrip:
    """undecorate(decorate(R)) restores R for line-aligned ranges."""

    @pytest.mark.parametrize(
        "text",
        [
            "a\nb\nc",
            "one\n",
            "",
            "x\n\ny\n",
            "  indented\n\ttabbed\n",
            "| already looks boxed\n",
            "trailing spaces   \nlast",
        ],
    )
    def test_round_trip(self, style: DecorationStyle, text: str) -> None:
        buf = TextBuffer(text)
        box = decorate(buf, 0, len(text), style)
        undecorate(buf, box.start, box.end, style)
        assert buf.text == text

    def test_round_trip_within_document(self, style: DecorationStyle) -> None:
        text = "head\nquoted 1\nquoted 2\ntail\n"
        buf = TextBuffer(text)
        box = decorate(buf, 5, 23, style)
        undecorate(buf, box.start, box.end, style)
        assert buf.text == text

    def test_mid_line_range_keeps_character_count(self, style: DecorationStyle) -> None:
        """Only the two split points add characters after a round trip."""
        text = "abc def ghi"
        buf = TextBuffer(text)
        box = decorate(buf, 4, 7, style)
        undecorate(buf, box.start, box.end, style)
        assert buf.text == "abc \ndef\n ghi"
        assert len(buf.text) == len(text) + 2


class TestUnbox:
    """Locating then undecorating."""

    def test_unbox_from_content_line(self, style: DecorationStyle) -> None:
        buf = TextBuffer(",----\n| a\n| b\n| c\n`----")
        plain = unbox(buf, 12, style)
        assert buf.text == "a\nb\nc"
        assert buf.substring(*plain) == "a\nb\nc"

    def test_unbox_outside_box_raises(self, style: DecorationStyle) -> None:
        buf = TextBuffer("prose\n")
        with pytest.raises(NoBoxFound):
            unbox(buf, 0, style)

    def test_unbox_outer_keeps_inner(self, style: DecorationStyle) -> None:
        buf = TextBuffer(",----\n| ,----\n| | a\n| `----\n`----\n")
        unbox(buf, 0, style)
        assert buf.text == ",----\n| a\n`----\n"
