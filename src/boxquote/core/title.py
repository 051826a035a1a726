"""Read and write the title on a box's top marker line.

The title is rendered with the style's ``title_format`` (a ``%``-format with
a single ``%s``) and appended to the top marker after one space::

    ,---- [ hello.txt ]

Reading it back renders the template once around a sentinel to learn how
many literal characters come before and after the placeholder, then checks
the trailing text against the template with the placeholder turned into a
wildcard. A title that itself looks like a rendered template (``"[ x ]"``
under ``"[ %s ]"``) is read back whole; text hand-edited onto the marker
line that happens to fit the template is read as a title too.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from boxquote.buffer import TextBuffer
    from boxquote.config import DecorationStyle
    from boxquote.core.locator import Box

logger = logging.getLogger(__name__)

_SENTINEL = "\x00"
TITLE_SEPARATOR = " "


@lru_cache(maxsize=32)
def title_affixes(style: DecorationStyle) -> tuple[str, str]:
    """Literal text before and after the placeholder in ``title_format``."""
    prefix, _, suffix = (style.title_format % _SENTINEL).partition(_SENTINEL)
    return prefix, suffix


def title_bounds(style: DecorationStyle) -> tuple[int, int]:
    """``(prefix_len, suffix_len)`` of the rendered template."""
    prefix, suffix = title_affixes(style)
    return len(prefix), len(suffix)


@lru_cache(maxsize=32)
def title_pattern(style: DecorationStyle) -> re.Pattern[str]:
    """The template with its placeholder replaced by a wildcard."""
    prefix, suffix = title_affixes(style)
    return re.compile(f"{re.escape(prefix)}.*{re.escape(suffix)}")


def render_title(style: DecorationStyle, title: str) -> str:
    return style.title_format % title


def _title_span(buffer: TextBuffer, box: Box, style: DecorationStyle) -> tuple[int, int]:
    start = box.start + len(box.indent) + len(style.top_marker)
    return start, buffer.line_end(box.start)


def get_title(buffer: TextBuffer, box: Box, style: DecorationStyle) -> str:
    """Return the title of *box*, or ``""`` when it has none."""
    start, end = _title_span(buffer, box, style)
    trailing = buffer.substring(start, end).removeprefix(TITLE_SEPARATOR)
    if not title_pattern(style).fullmatch(trailing):
        return ""
    prefix_len, suffix_len = title_bounds(style)
    return trailing[prefix_len : len(trailing) - suffix_len]


def set_title(buffer: TextBuffer, box: Box, title: str, style: DecorationStyle) -> Box:
    """Replace the title of *box*; an empty *title* removes it.

    Returns the box with its end moved to account for the new title.

    Raises:
        ValueError: If *title* contains a newline.
    """
    if "\n" in title:
        msg = "a box title must fit on one line"
        raise ValueError(msg)

    start, end = _title_span(buffer, box, style)
    rendered = TITLE_SEPARATOR + render_title(style, title) if title else ""
    buffer.replace(start, end, rendered)
    logger.debug("Set title of box at %d to %r", box.start, title)
    return replace(box, end=box.end + len(rendered) - (end - start))
