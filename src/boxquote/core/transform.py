"""Wrap a range of lines in a box, and strip a box back to plain text.

Decoration::

    a          ,----
    b    ->    | a
    c          | b
               | c
               `----

Both directions are line-oriented. ``decorate`` first splits partial lines
at the range boundaries so it always wraps whole lines, then adds the two
marker lines and puts the side prefix on every line between them in one
rectangle insertion. ``undecorate`` removes exactly one layer.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from boxquote.core.locator import Box, NoBoxFound, locate_or_fail
from boxquote.core.patterns import box_patterns

if TYPE_CHECKING:
    from boxquote.buffer import TextBuffer
    from boxquote.config import DecorationStyle

logger = logging.getLogger(__name__)


def decorate(
    buffer: TextBuffer,
    start: int,
    end: int,
    style: DecorationStyle,
    *,
    depth: int = 0,
) -> Box:
    """Box the lines from *start* to *end* in place and return the new box.

    A boundary that falls mid-line gets a newline inserted at it first. A
    range ending on the unterminated last line of the document keeps the
    bottom marker unterminated too, so ``undecorate`` gives back the exact
    original text.

    *depth* places the box inside the body of ``depth`` enclosing boxes:
    marker lines start with that many side prefixes and the new side prefix
    goes in after them.
    """
    start, end = sorted((start, end))
    indent = style.side * depth
    top_line = indent + style.top_marker
    bottom_line = indent + style.bottom_marker

    with buffer.save_excursion():
        if not buffer.is_bol(start):
            buffer.insert(start, "\n")
            start += 1
            end += 1
        if not buffer.is_bol(end) and end != len(buffer.text):
            buffer.insert(end, "\n")
            end += 1
        terminated = buffer.is_bol(end)

        with buffer.narrowed(start, end):
            buffer.insert(start, top_line + "\n")
            if terminated:
                buffer.insert(buffer.point_max, bottom_line + "\n")
                bottom_start = buffer.line_start(buffer.point_max - 1)
            else:
                buffer.insert(buffer.point_max, "\n" + bottom_line)
                bottom_start = buffer.line_start(buffer.point_max)

            content_start = buffer.next_line_start(start)
            if content_start < bottom_start:
                buffer.insert_rectangle(
                    content_start, bottom_start - 1, len(indent), style.side
                )
                bottom_start = buffer.line_start(
                    buffer.point_max - 1 if terminated else buffer.point_max
                )
            box = Box(start, buffer.line_end(bottom_start), depth, indent)

    logger.debug("Decorated [%d, %d) at depth %d", box.start, box.end, depth)
    return box


def undecorate(
    buffer: TextBuffer,
    start: int,
    end: int,
    style: DecorationStyle,
    *,
    depth: int = 0,
) -> tuple[int, int]:
    """Strip one layer of box markers and side prefixes from a range.

    Marker lines are deleted with their newline; side-prefixed lines lose
    the prefix; anything else is left alone. The range is extended to whole
    lines. Returns the offsets of the resulting plain text.

    Raises:
        NoBoxFound: If the first line of the range is not a top marker line.
    """
    start, end = sorted((start, end))
    patterns = box_patterns(style, depth)
    start = buffer.line_start(start)
    if not patterns.top.match(buffer.line_text(start)):
        raise NoBoxFound(start)
    if not buffer.is_bol(end) or end == start:
        end = buffer.next_line_start(end)

    column = len(patterns.indent)
    side_width = len(style.side)

    with buffer.save_excursion(), buffer.narrowed(start, end):
        line = buffer.point_min
        while True:
            text = buffer.line_text(line)
            if patterns.marker.match(text):
                if buffer.has_terminator(line):
                    buffer.delete(line, buffer.next_line_start(line))
                    if line >= buffer.point_max:
                        break
                    continue
                # Unterminated last line: take the newline before it instead.
                buffer.delete(max(line - 1, buffer.point_min), buffer.line_end(line))
                break
            if patterns.side.match(text):
                buffer.delete(line + column, line + column + side_width)
            if not buffer.has_terminator(line):
                break
            line = buffer.next_line_start(line)
        plain = (buffer.point_min, buffer.point_max)

    logger.debug("Undecorated [%d, %d) at depth %d", plain[0], plain[1], depth)
    return plain


def unbox(buffer: TextBuffer, position: int, style: DecorationStyle) -> tuple[int, int]:
    """Remove the box enclosing *position*; return the plain text's offsets."""
    box = locate_or_fail(buffer, position, style)
    return undecorate(buffer, box.start, box.end, style, depth=box.depth)
