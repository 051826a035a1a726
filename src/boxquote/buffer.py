"""In-memory text document with an editor-style cursor and narrowing.

``TextBuffer`` is the host document the box operations act on. Offsets are
absolute character positions in the whole text; narrowing restricts which of
them are visible without renumbering. Point, saved excursions and saved
views are tracked through edits the way editor markers are, so a position
recorded before an edit still refers to the same text afterwards.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import re
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


class BufferRangeError(ValueError):
    """An offset lies outside the buffer's visible view."""

    def __init__(self, position: int, begin: int, end: int) -> None:
        self.position = position
        self.begin = begin
        self.end = end
        super().__init__(f"position {position} outside view [{begin}, {end}]")


@dataclass
class _Marker:
    """A position that moves with edits.

    ``advance`` markers move past text inserted exactly at their position;
    others stay in front of it.
    """

    position: int
    advance: bool = False


class TextBuffer:
    """Mutable text with point, narrowing and line/rectangle primitives."""

    def __init__(self, text: str = "", *, name: str = "*scratch*") -> None:
        self.name = name
        self._text = text
        self._begin = 0
        self._end = len(text)
        self._point = 0
        self._markers: list[_Marker] = []

    def __repr__(self) -> str:
        return (
            f"TextBuffer(name={self.name!r}, length={len(self._text)}, "
            f"point={self._point}, view=[{self._begin}, {self._end}])"
        )

    # ------------------------------------------------------------------
    # Text and view
    # ------------------------------------------------------------------
    @property
    def text(self) -> str:
        """The whole document, ignoring any narrowing."""
        return self._text

    @property
    def point_min(self) -> int:
        return self._begin

    @property
    def point_max(self) -> int:
        return self._end

    @property
    def is_narrowed(self) -> bool:
        return self._begin != 0 or self._end != len(self._text)

    @property
    def point(self) -> int:
        return self._point

    @point.setter
    def point(self, position: int) -> None:
        self._check(position)
        self._point = position

    def goto(self, position: int) -> int:
        """Move point to *position*, clamped to the view, and return it."""
        self._point = min(max(position, self._begin), self._end)
        return self._point

    def contents(self) -> str:
        """The visible text."""
        return self._text[self._begin : self._end]

    def substring(self, start: int, end: int) -> str:
        self._check(start)
        self._check(end)
        return self._text[start:end]

    def narrow(self, start: int, end: int) -> None:
        """Restrict the view to ``[start, end]``."""
        start, end = sorted((start, end))
        if start < 0 or end > len(self._text):
            raise BufferRangeError(end if start >= 0 else start, 0, len(self._text))
        self._begin = start
        self._end = end
        self._point = min(max(self._point, start), end)

    def widen(self) -> None:
        self._begin = 0
        self._end = len(self._text)

    @contextmanager
    def narrowed(self, start: int, end: int) -> Iterator[TextBuffer]:
        """Narrow to ``[start, end]`` for the duration of the block.

        The previous view is restored on every exit path, adjusted for any
        edits made inside the block.
        """
        saved_begin = _Marker(self._begin)
        saved_end = _Marker(self._end, advance=True)
        self._markers.extend((saved_begin, saved_end))
        try:
            self.narrow(start, end)
            yield self
        finally:
            self._markers.remove(saved_begin)
            self._markers.remove(saved_end)
            self._begin = saved_begin.position
            self._end = saved_end.position
            self._point = min(max(self._point, self._begin), self._end)

    @contextmanager
    def save_excursion(self) -> Iterator[TextBuffer]:
        """Restore point after the block, following it through edits."""
        saved = _Marker(self._point)
        self._markers.append(saved)
        try:
            yield self
        finally:
            self._markers.remove(saved)
            self._point = min(max(saved.position, self._begin), self._end)

    # ------------------------------------------------------------------
    # Lines
    # ------------------------------------------------------------------
    def line_start(self, position: int) -> int:
        self._check(position)
        newline = self._text.rfind("\n", self._begin, position)
        return self._begin if newline < 0 else newline + 1

    def line_end(self, position: int) -> int:
        """Offset of the end of the line holding *position*, before its newline."""
        self._check(position)
        newline = self._text.find("\n", position, self._end)
        return self._end if newline < 0 else newline

    def next_line_start(self, position: int) -> int:
        """Start of the following line, or the end of the view on the last line."""
        end = self.line_end(position)
        return end + 1 if end < self._end else self._end

    def line_text(self, position: int) -> str:
        start = self.line_start(position)
        return self._text[start : self.line_end(start)]

    def is_bol(self, position: int) -> bool:
        return self.line_start(position) == position

    def has_terminator(self, position: int) -> bool:
        """Whether the line holding *position* ends in a newline inside the view."""
        return self.line_end(position) < self._end

    def line_starts(self, start: int, end: int) -> list[int]:
        """Starts of the lines from the one holding *start* to the one holding *end*."""
        starts: list[int] = []
        current = self.line_start(start)
        last = self.line_start(end)
        while True:
            starts.append(current)
            if current >= last:
                return starts
            current = self.next_line_start(current)

    def line_number(self, position: int) -> int:
        """1-based line number of *position* within the whole text."""
        return self._text.count("\n", 0, position) + 1

    def position_of_line(self, number: int) -> int:
        """Offset of the start of 1-based line *number*, clamped to the text."""
        position = 0
        for _ in range(max(number, 1) - 1):
            newline = self._text.find("\n", position)
            if newline < 0:
                break
            position = newline + 1
        return position

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------
    def insert(self, position: int, text: str) -> None:
        """Insert *text* at *position*; point stays in front of it."""
        self._check(position)
        if not text:
            return
        size = len(text)
        self._text = self._text[:position] + text + self._text[position:]
        self._end += size
        if self._point > position:
            self._point += size
        for marker in self._markers:
            if marker.position > position or (
                marker.advance and marker.position == position
            ):
                marker.position += size

    def insert_at_point(self, text: str) -> None:
        """Insert *text* at point and leave point after it."""
        position = self._point
        self.insert(position, text)
        self._point = position + len(text)

    def delete(self, start: int, end: int) -> str:
        """Delete ``[start, end)`` and return the removed text."""
        start, end = sorted((start, end))
        self._check(start)
        self._check(end)
        removed = self._text[start:end]
        if not removed:
            return removed
        size = end - start
        self._text = self._text[:start] + self._text[end:]
        self._end -= size
        self._point = _shift_for_delete(self._point, start, end)
        for marker in self._markers:
            marker.position = _shift_for_delete(marker.position, start, end)
        return removed

    def replace(self, start: int, end: int, text: str) -> None:
        self.delete(start, end)
        self.insert(min(start, end), text)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def find_line_forward(
        self,
        regex: re.Pattern[str],
        position: int,
        *,
        within: re.Pattern[str] | None = None,
    ) -> int | None:
        """Start of the first line at or after *position* matching *regex*.

        The regex is matched at the start of each line. When *within* is
        given, the search gives up at the first line that does not match it.
        """
        start = self.line_start(position)
        while True:
            end = self.line_end(start)
            line = self._text[start:end]
            if regex.match(line):
                return start
            if within is not None and not within.match(line):
                return None
            if end >= self._end:
                return None
            start = end + 1

    def find_line_backward(
        self,
        regex: re.Pattern[str],
        position: int,
        *,
        within: re.Pattern[str] | None = None,
    ) -> int | None:
        """Start of the nearest line at or before *position* matching *regex*."""
        start = self.line_start(position)
        while True:
            line = self._text[start : self.line_end(start)]
            if regex.match(line):
                return start
            if within is not None and not within.match(line):
                return None
            if start <= self._begin:
                return None
            start = self.line_start(start - 1)

    # ------------------------------------------------------------------
    # Rectangles
    # ------------------------------------------------------------------
    def insert_rectangle(self, start: int, end: int, column: int, string: str) -> None:
        """Insert *string* at *column* on every line from *start* to *end*.

        Lines shorter than *column* are padded with spaces first.
        """
        for line in reversed(self.line_starts(start, end)):
            width = self.line_end(line) - line
            pad = " " * max(column - width, 0)
            self.insert(line + min(column, width), pad + string)

    def delete_rectangle(self, start: int, end: int, column: int, width: int) -> None:
        """Delete the column band ``[column, column + width)`` on each line."""
        for line in reversed(self.line_starts(start, end)):
            line_end = self.line_end(line)
            band_start = min(line + column, line_end)
            band_end = min(line + column + width, line_end)
            self.delete(band_start, band_end)

    # ------------------------------------------------------------------
    # Units
    # ------------------------------------------------------------------
    def paragraph_bounds(self, position: int, prefix: str = "") -> tuple[int, int] | None:
        """Line range of the paragraph at *position*.

        A paragraph is a run of lines that start with *prefix* and have
        non-blank text after it. On a separator line the following paragraph
        is used. Returns ``(start, end)`` where *end* is the start of the line
        after the paragraph (or the end of the view).
        """

        def is_body(line_start: int) -> bool:
            line = self._text[line_start : self.line_end(line_start)]
            return line.startswith(prefix) and bool(line[len(prefix) :].strip())

        start = self.line_start(position)
        while not is_body(start):
            if not self.has_terminator(start):
                return None
            start = self.next_line_start(start)

        first = start
        while first > self._begin and is_body(self.line_start(first - 1)):
            first = self.line_start(first - 1)

        last = start
        while self.has_terminator(last) and is_body(self.next_line_start(last)):
            last = self.next_line_start(last)

        return first, self.next_line_start(last)

    def defun_bounds(self, position: int) -> tuple[int, int] | None:
        """Line range of the top-level unit at *position*.

        A unit starts at a non-blank line beginning in column 0 and runs up
        to the next such line; trailing blank lines are left out.
        """

        def is_head(line_start: int) -> bool:
            line = self._text[line_start : self.line_end(line_start)]
            return bool(line) and not line[0].isspace()

        start = self.line_start(position)
        while not is_head(start):
            if start <= self._begin:
                return None
            start = self.line_start(start - 1)

        last = start
        line = start
        while self.has_terminator(line):
            line = self.next_line_start(line)
            if is_head(line):
                break
            if self.line_text(line).strip():
                last = line

        return start, self.next_line_start(last)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _check(self, position: int) -> None:
        if not self._begin <= position <= self._end:
            raise BufferRangeError(position, self._begin, self._end)


def _shift_for_delete(position: int, start: int, end: int) -> int:
    if position <= start:
        return position
    if position <= end:
        return start
    return position - (end - start)
