"""Box engine: locating, decorating, undecorating, titling and refilling boxes."""

from boxquote.core.locator import (
    Box,
    NoBoxFound,
    find_boxes,
    locate,
    locate_or_fail,
)
from boxquote.core.reflow import fill_paragraph, reflow
from boxquote.core.title import get_title, render_title, set_title
from boxquote.core.transform import decorate, unbox, undecorate

__all__ = [
    "Box",
    "NoBoxFound",
    "decorate",
    "fill_paragraph",
    "find_boxes",
    "get_title",
    "locate",
    "locate_or_fail",
    "reflow",
    "render_title",
    "set_title",
    "unbox",
    "undecorate",
]
