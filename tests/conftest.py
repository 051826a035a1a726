"""Shared pytest fixtures for boxquote tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from boxquote.config import DecorationStyle, get_settings

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep BOXQUOTE_* env vars and stray .env files out of every test.

    Runs each test from an empty directory and resets the cached Settings
    before and after.
    """
    for name in list(os.environ):
        if name.startswith("BOXQUOTE_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def style() -> DecorationStyle:
    """The default decoration style."""
    return DecorationStyle()


@pytest.fixture
def quote_style() -> DecorationStyle:
    """A mail-quote flavoured style that differs in every field."""
    return DecorationStyle(
        top_and_tail="==",
        top_corner="+",
        bottom_corner="#",
        side="> ",
        title_format="(%s)",
    )
