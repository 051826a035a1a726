"""Tests for the content providers."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from boxquote.buffer import TextBuffer
from boxquote.sources import SourceText, buffer_text, read_file, run_command

if TYPE_CHECKING:
    from pathlib import Path


class TestReadFile:
    """Reading files to box."""

    def test_titled_with_file_name(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("hello\n", encoding="utf-8")
        assert read_file(path) == SourceText("hello\n", "notes.txt")

    def test_titled_with_path(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("hello\n", encoding="utf-8")
        assert read_file(path, "path").title == str(path)

    def test_accepts_string_path(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("x", encoding="utf-8")
        assert read_file(str(path)).text == "x"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="File not found"):
            read_file(tmp_path / "absent.txt")


class TestRunCommand:
    """Capturing shell command output."""

    def test_stdout_then_stderr(self) -> None:
        completed = subprocess.CompletedProcess(
            args="make", returncode=0, stdout="built\n", stderr="warning\n"
        )
        with patch("boxquote.sources.subprocess.run", return_value=completed) as run:
            source = run_command("make", timeout=5)
        assert source == SourceText("built\nwarning\n", "make")
        assert run.call_args.kwargs["shell"] is True
        assert run.call_args.kwargs["timeout"] == 5

    def test_failure_is_logged_not_raised(self, caplog: pytest.LogCaptureFixture) -> None:
        completed = subprocess.CompletedProcess(
            args="false", returncode=1, stdout="", stderr="boom\n"
        )
        with (
            caplog.at_level(logging.WARNING, logger="boxquote.sources"),
            patch("boxquote.sources.subprocess.run", return_value=completed),
        ):
            source = run_command("false")
        assert source.text == "boom\n"
        assert "exited with status 1" in caplog.text

    def test_timeout_propagates(self) -> None:
        with (
            patch(
                "boxquote.sources.subprocess.run",
                side_effect=subprocess.TimeoutExpired("sleep 9", 1),
            ),
            pytest.raises(subprocess.TimeoutExpired),
        ):
            run_command("sleep 9", timeout=1)


class TestBufferText:
    """Boxing another buffer's text."""

    def test_titled_with_buffer_name(self) -> None:
        other = TextBuffer("contents\n", name="notes")
        assert buffer_text(other) == SourceText("contents\n", "notes")

    def test_ignores_narrowing(self) -> None:
        other = TextBuffer("one\ntwo\n", name="notes")
        other.narrow(0, 3)
        assert buffer_text(other).text == "one\ntwo\n"
