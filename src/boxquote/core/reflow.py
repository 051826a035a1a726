"""Refill a paragraph, keeping a box's side prefix on every line."""

from __future__ import annotations

import logging
import textwrap
from typing import TYPE_CHECKING

from boxquote.core.locator import locate

if TYPE_CHECKING:
    from boxquote.buffer import TextBuffer
    from boxquote.config import DecorationStyle

logger = logging.getLogger(__name__)


def reflow(
    buffer: TextBuffer,
    position: int,
    style: DecorationStyle,
    fill_width: int,
) -> None:
    """Refill the paragraph at *position* to *fill_width* columns.

    Inside a box the fill happens within the box content with the side
    prefix (behind any parent prefixes) as the fill prefix, so the left
    border comes back on every refilled line. Outside a box the plain
    paragraph is filled with no prefix.
    """
    box = locate(buffer, position, style)
    with buffer.save_excursion():
        if box is None:
            fill_paragraph(buffer, position, "", fill_width)
            return

        content_start, content_end = box.content_range(buffer)
        if content_start >= content_end:
            return
        position = min(max(position, content_start), content_end - 1)
        with buffer.narrowed(content_start, content_end):
            fill_paragraph(buffer, position, box.indent + style.side, fill_width)


def fill_paragraph(buffer: TextBuffer, position: int, prefix: str, width: int) -> None:
    """Refill the *prefix*-ed paragraph at *position* within the current view."""
    bounds = buffer.paragraph_bounds(position, prefix)
    if bounds is None:
        return
    start, end = bounds
    if buffer.substring(end - 1, end) == "\n":
        end -= 1

    lines = buffer.substring(start, end).split("\n")
    words = " ".join(line[len(prefix) :] for line in lines).split()
    filled = textwrap.fill(
        " ".join(words),
        width=width,
        initial_indent=prefix,
        subsequent_indent=prefix,
        break_long_words=False,
        break_on_hyphens=False,
    )
    buffer.replace(start, end, filled)
    logger.debug("Filled paragraph [%d, %d) with prefix %r", start, end, prefix)
