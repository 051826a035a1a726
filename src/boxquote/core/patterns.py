"""Line patterns derived from a decoration style.

All patterns are matched at the start of a line (``re.match`` against the
line text), so none of them carry a ``^`` anchor. A nested box sits behind
``depth`` copies of its parent's side prefix; every pattern for that depth
includes the prefix.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from boxquote.config import DecorationStyle


@dataclass(frozen=True)
class BoxPatterns:
    """Compiled line classifiers for one style at one nesting depth."""

    indent: str
    top: re.Pattern[str]
    bottom: re.Pattern[str]
    side: re.Pattern[str]
    marker: re.Pattern[str]
    inside: re.Pattern[str]


@lru_cache(maxsize=64)
def box_patterns(style: DecorationStyle, depth: int = 0) -> BoxPatterns:
    """Build (and cache) the classifiers for *style* at *depth*."""
    indent = style.side * depth
    lead = re.escape(indent)
    tail = re.escape(style.top_and_tail)
    top_corner = re.escape(style.top_corner)
    bottom_corner = re.escape(style.bottom_corner)
    return BoxPatterns(
        indent=indent,
        top=re.compile(f"{lead}{top_corner}{tail}"),
        bottom=re.compile(f"{lead}{bottom_corner}{tail}"),
        side=re.compile(f"{lead}{re.escape(style.side)}"),
        marker=re.compile(f"{lead}(?:{top_corner}|{bottom_corner}){tail}"),
        inside=re.compile(lead),
    )


def leading_sides(style: DecorationStyle, line: str) -> int:
    """Count how many times the side prefix repeats at the start of *line*."""
    count = 0
    size = len(style.side)
    while line.startswith(style.side, count * size):
        count += 1
    return count
