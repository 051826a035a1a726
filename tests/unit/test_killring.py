"""Tests for the kill ring."""

from __future__ import annotations

import pytest

from boxquote.killring import EmptyKillRing, KillRing


class TestKillRing:
    """Push, yank and rotate."""

    def test_empty_ring_raises(self) -> None:
        ring = KillRing()
        with pytest.raises(EmptyKillRing):
            ring.current()
        with pytest.raises(IndexError):
            ring.rotate()

    def test_newest_first(self) -> None:
        ring = KillRing()
        ring.push("one")
        ring.push("two")
        assert ring.current() == "two"
        assert list(ring) == ["two", "one"]

    def test_oldest_entries_fall_off(self) -> None:
        ring = KillRing(max_size=2)
        for text in ("a", "b", "c"):
            ring.push(text)
        assert len(ring) == 2
        assert list(ring) == ["c", "b"]
        assert ring.max_size == 2

    def test_rotate_walks_older_entries(self) -> None:
        ring = KillRing()
        for text in ("a", "b", "c"):
            ring.push(text)
        assert ring.rotate() == "b"
        assert ring.rotate() == "a"
        assert ring.rotate() == "c"

    def test_rotate_backwards(self) -> None:
        ring = KillRing()
        for text in ("a", "b", "c"):
            ring.push(text)
        assert ring.rotate(-1) == "a"

    def test_size_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOXQUOTE_COMMANDS__KILL_RING_MAX", "3")
        assert KillRing().max_size == 3
