"""Find the box enclosing a position.

The line holding the position is classified by prefix, then the
complementary marker line is searched for:

- top marker line: the box runs to the next bottom marker line;
- side-prefixed line: the box runs from the nearest top marker above to the
  nearest bottom marker below;
- bottom marker line: the box runs from the nearest top marker above to the
  end of this line.

A box nested in another box's body carries its parent's side prefix in
front of every line. Depths are tried innermost first, and a search at
depth > 0 never leaves the run of lines that carry the parent prefix.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from boxquote.core.patterns import box_patterns, leading_sides

if TYPE_CHECKING:
    from collections.abc import Iterator

    from boxquote.buffer import TextBuffer
    from boxquote.config import DecorationStyle

logger = logging.getLogger(__name__)


class NoBoxFound(LookupError):
    """An operation needed a box at a position that is not inside one."""

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"no box found at position {position}")


@dataclass(frozen=True)
class Box:
    """A located box: ``[start, end)`` from its top marker to its bottom marker.

    ``start`` is the beginning of the top marker line and ``end`` the end of
    the bottom marker line, before its newline. ``indent`` is the parent
    side prefixes (``depth`` of them) in front of each line of a nested box.
    Offsets go stale on the next edit.
    """

    start: int
    end: int
    depth: int = 0
    indent: str = ""

    def content_range(self, buffer: TextBuffer) -> tuple[int, int]:
        """Start of the first content line and start of the bottom marker line."""
        return buffer.next_line_start(self.start), buffer.line_start(self.end)

    def end_with_terminator(self, buffer: TextBuffer) -> int:
        """``end`` moved past the bottom marker's newline, when it has one."""
        return self.end + 1 if buffer.has_terminator(self.end) else self.end


def locate(buffer: TextBuffer, position: int, style: DecorationStyle) -> Box | None:
    """Return the innermost box enclosing *position*, or ``None``."""
    line_start = buffer.line_start(position)
    line = buffer.line_text(line_start)
    for depth in range(leading_sides(style, line), -1, -1):
        box = _locate_at_depth(buffer, line_start, line, style, depth)
        if box is not None:
            logger.debug(
                "Located box [%d, %d) at depth %d from position %d",
                box.start,
                box.end,
                box.depth,
                position,
            )
            return box
    logger.debug("No box at position %d", position)
    return None


def locate_or_fail(buffer: TextBuffer, position: int, style: DecorationStyle) -> Box:
    """Like ``locate`` but raise ``NoBoxFound`` instead of returning ``None``."""
    box = locate(buffer, position, style)
    if box is None:
        raise NoBoxFound(position)
    return box


def _locate_at_depth(
    buffer: TextBuffer,
    line_start: int,
    line: str,
    style: DecorationStyle,
    depth: int,
) -> Box | None:
    patterns = box_patterns(style, depth)
    within = patterns.inside if depth else None

    start: int | None
    bottom: int | None
    if patterns.top.match(line):
        start = line_start
        bottom = buffer.find_line_forward(patterns.bottom, line_start, within=within)
    elif patterns.side.match(line):
        start = buffer.find_line_backward(patterns.top, line_start, within=within)
        bottom = buffer.find_line_forward(patterns.bottom, line_start, within=within)
    elif patterns.bottom.match(line):
        start = buffer.find_line_backward(patterns.top, line_start, within=within)
        bottom = line_start
    else:
        return None

    if start is None or bottom is None:
        return None
    return Box(start, buffer.line_end(bottom), depth, patterns.indent)


def find_boxes(buffer: TextBuffer, style: DecorationStyle) -> Iterator[Box]:
    """Yield the outermost boxes in the visible text, top to bottom."""
    top = box_patterns(style).top
    line = buffer.point_min
    while True:
        found = buffer.find_line_forward(top, line)
        if found is None:
            return
        box = locate(buffer, found, style)
        if box is None:
            if not buffer.has_terminator(found):
                return
            line = buffer.next_line_start(found)
            continue
        yield box
        if not buffer.has_terminator(box.end):
            return
        line = box.end + 1
