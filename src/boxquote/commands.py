"""User-facing box commands.

One function per command: box a region, the whole buffer, a paragraph or a
top-level unit; box text from a file, a shell command, another buffer or the
kill ring; retitle, refill, kill, unbox and narrow to an existing box.

Every command takes an optional ``style``; when omitted the configured style
from ``get_settings()`` is used. Commands that need an existing box raise
``NoBoxFound`` when there is none at the given position.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from boxquote.buffer import TextBuffer
from boxquote.config import get_settings
from boxquote.core import (
    decorate,
    get_title,
    locate_or_fail,
    reflow,
    set_title,
    unbox,
    undecorate,
)
from boxquote.sources import SourceText, buffer_text, read_file, run_command

if TYPE_CHECKING:
    from boxquote.config import DecorationStyle
    from boxquote.core import Box
    from boxquote.killring import KillRing

logger = logging.getLogger(__name__)


def _style(style: DecorationStyle | None) -> DecorationStyle:
    return style if style is not None else get_settings().style


# ---------------------------------------------------------------------------
# Boxing existing text
# ---------------------------------------------------------------------------


def box_region(
    buffer: TextBuffer,
    start: int,
    end: int,
    *,
    title: str | None = None,
    style: DecorationStyle | None = None,
) -> Box:
    """Box the lines between *start* and *end*, optionally titled."""
    style = _style(style)
    box = decorate(buffer, start, end, style)
    if title:
        box = set_title(buffer, box, title, style)
    logger.debug("box_region -> [%d, %d)", box.start, box.end)
    return box


def box_buffer(
    buffer: TextBuffer,
    *,
    title: str | None = None,
    style: DecorationStyle | None = None,
) -> Box:
    """Box everything in the current view."""
    return box_region(
        buffer, buffer.point_min, buffer.point_max, title=title, style=style
    )


def box_paragraph(
    buffer: TextBuffer, position: int, *, style: DecorationStyle | None = None
) -> Box:
    """Box the paragraph at (or following) *position*.

    Raises:
        ValueError: If there is no paragraph at or after *position*.
    """
    bounds = buffer.paragraph_bounds(position)
    if bounds is None:
        msg = f"no paragraph at position {position}"
        raise ValueError(msg)
    return box_region(buffer, *bounds, style=style)


def box_defun(
    buffer: TextBuffer, position: int, *, style: DecorationStyle | None = None
) -> Box:
    """Box the top-level unit (function, class, block) around *position*.

    Raises:
        ValueError: If no line at or above *position* starts in column 0.
    """
    bounds = buffer.defun_bounds(position)
    if bounds is None:
        msg = f"no top-level unit at position {position}"
        raise ValueError(msg)
    return box_region(buffer, *bounds, style=style)


def box_boxquote(
    buffer: TextBuffer, position: int, *, style: DecorationStyle | None = None
) -> Box:
    """Wrap the box at *position* in another box at the same depth."""
    style = _style(style)
    box = locate_or_fail(buffer, position, style)
    return decorate(
        buffer,
        box.start,
        box.end_with_terminator(buffer),
        style,
        depth=box.depth,
    )


# ---------------------------------------------------------------------------
# Inserting boxed text
# ---------------------------------------------------------------------------


def box_text(
    buffer: TextBuffer,
    text: str,
    *,
    title: str | None = None,
    style: DecorationStyle | None = None,
) -> Box:
    """Insert *text* at point as a box and leave point after the box."""
    start = buffer.point
    buffer.insert_at_point(text)
    box = box_region(buffer, start, start + len(text), title=title, style=style)
    buffer.goto(box.end_with_terminator(buffer))
    return box


def _box_source(
    buffer: TextBuffer, source: SourceText, style: DecorationStyle | None
) -> Box:
    return box_text(buffer, source.text, title=source.title or None, style=style)


def box_file(
    buffer: TextBuffer,
    path: Path | str,
    *,
    title_mode: Literal["name", "path"] | None = None,
    style: DecorationStyle | None = None,
) -> Box:
    """Insert the contents of a file as a box titled with the file name.

    Raises:
        FileNotFoundError: If the file doesn't exist.
    """
    mode = title_mode or get_settings().commands.file_title
    return _box_source(buffer, read_file(Path(path), mode), style)


def box_shell_command(
    buffer: TextBuffer,
    command: str,
    *,
    timeout: float | None = None,
    style: DecorationStyle | None = None,
) -> Box:
    """Insert the output of a shell command as a box titled with the command."""
    if timeout is None:
        timeout = get_settings().commands.shell_timeout
    return _box_source(buffer, run_command(command, timeout=timeout), style)


def box_insert_buffer(
    buffer: TextBuffer, other: TextBuffer, *, style: DecorationStyle | None = None
) -> Box:
    """Insert another buffer's text as a box titled with its name."""
    return _box_source(buffer, buffer_text(other), style)


def box_yank(
    buffer: TextBuffer, kill_ring: KillRing, *, style: DecorationStyle | None = None
) -> Box:
    """Insert the current kill as a box.

    Raises:
        EmptyKillRing: If nothing has been killed.
    """
    return box_text(buffer, kill_ring.current(), style=style)


def box_kill_ring_save(
    buffer: TextBuffer,
    start: int,
    end: int,
    kill_ring: KillRing,
    *,
    title: str | None = None,
    style: DecorationStyle | None = None,
) -> str:
    """Push a boxed copy of a region onto the kill ring.

    The buffer is not modified. The copy is titled with *title*, defaulting
    to the configured ``kill_ring_save_title``; pass ``""`` for no title.
    """
    if title is None:
        title = get_settings().commands.kill_ring_save_title
    scratch = TextBuffer(buffer.substring(*sorted((start, end))))
    box_buffer(scratch, title=title, style=style)
    kill_ring.push(scratch.text)
    return scratch.text


# ---------------------------------------------------------------------------
# Working on an existing box
# ---------------------------------------------------------------------------


def box_kill(
    buffer: TextBuffer,
    position: int,
    kill_ring: KillRing,
    *,
    style: DecorationStyle | None = None,
) -> str:
    """Delete the box at *position* (with its newline) onto the kill ring.

    A nested box is killed without its parents' side prefixes.
    """
    style = _style(style)
    box = locate_or_fail(buffer, position, style)
    killed = buffer.delete(box.start, box.end_with_terminator(buffer))
    if box.indent:
        killed = "\n".join(
            line.removeprefix(box.indent) for line in killed.split("\n")
        )
    kill_ring.push(killed)
    logger.debug("Killed box [%d, %d)", box.start, box.end)
    return killed


def box_title(
    buffer: TextBuffer,
    position: int,
    title: str,
    *,
    style: DecorationStyle | None = None,
) -> Box:
    """Set (or with ``""`` remove) the title of the box at *position*."""
    style = _style(style)
    return set_title(buffer, locate_or_fail(buffer, position, style), title, style)


def box_get_title(
    buffer: TextBuffer, position: int, *, style: DecorationStyle | None = None
) -> str:
    style = _style(style)
    return get_title(buffer, locate_or_fail(buffer, position, style), style)


def box_fill_paragraph(
    buffer: TextBuffer,
    position: int,
    *,
    width: int | None = None,
    style: DecorationStyle | None = None,
) -> None:
    """Refill the paragraph at *position*, inside a box when there is one."""
    if width is None:
        width = get_settings().commands.fill_column
    reflow(buffer, position, _style(style), width)


def box_unbox(
    buffer: TextBuffer, position: int, *, style: DecorationStyle | None = None
) -> tuple[int, int]:
    """Remove the box at *position*; returns the offsets of the plain text."""
    return unbox(buffer, position, _style(style))


def box_unbox_region(
    buffer: TextBuffer,
    start: int,
    end: int,
    *,
    style: DecorationStyle | None = None,
) -> tuple[int, int]:
    """Strip box markers and side prefixes from the lines of a region."""
    return undecorate(buffer, start, end, _style(style))


def narrow_to_box(
    buffer: TextBuffer, position: int, *, style: DecorationStyle | None = None
) -> Box:
    """Restrict the view to the box at *position*, marker lines included."""
    box = locate_or_fail(buffer, position, _style(style))
    buffer.narrow(box.start, box.end_with_terminator(buffer))
    return box


def narrow_to_box_content(
    buffer: TextBuffer, position: int, *, style: DecorationStyle | None = None
) -> Box:
    """Restrict the view to the content lines of the box at *position*."""
    box = locate_or_fail(buffer, position, _style(style))
    buffer.narrow(*box.content_range(buffer))
    return box
