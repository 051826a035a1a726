"""A bounded, rotatable ring of killed text."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from boxquote.config import get_settings

if TYPE_CHECKING:
    from collections.abc import Iterator


class EmptyKillRing(IndexError):
    """Nothing has been killed yet."""

    def __init__(self) -> None:
        super().__init__("kill ring is empty")


class KillRing:
    """Most recent kill first; the oldest entries fall off past ``max_size``.

    ``max_size`` defaults to the configured ``commands.kill_ring_max``.
    """

    def __init__(self, max_size: int | None = None) -> None:
        if max_size is None:
            max_size = get_settings().commands.kill_ring_max
        self._entries: deque[str] = deque(maxlen=max_size)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    @property
    def max_size(self) -> int:
        return self._entries.maxlen or 0

    def push(self, text: str) -> None:
        self._entries.appendleft(text)

    def current(self) -> str:
        """The entry a yank would insert.

        Raises:
            EmptyKillRing: If nothing has been pushed.
        """
        if not self._entries:
            raise EmptyKillRing
        return self._entries[0]

    def rotate(self, steps: int = 1) -> str:
        """Make an older entry current (like yank-pop) and return it."""
        if not self._entries:
            raise EmptyKillRing
        self._entries.rotate(-steps)
        return self._entries[0]
