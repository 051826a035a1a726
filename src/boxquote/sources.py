"""Content providers: where boxed text comes from.

Each provider yields the text to box plus a title describing its source.
Failures (missing files, commands that time out) are the provider's
concern and propagate to the caller unchanged.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from boxquote.buffer import TextBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceText:
    """Text to box and the title that names its source."""

    text: str
    title: str = ""


def read_file(path: Path | str, title_mode: Literal["name", "path"] = "name") -> SourceText:
    """Read a UTF-8 text file.

    Args:
        path: File to read.
        title_mode: ``"name"`` titles the box with the file name, ``"path"``
            with the path as given.

    Raises:
        FileNotFoundError: If the file doesn't exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    text = path.read_text(encoding="utf-8")
    title = path.name if title_mode == "name" else str(path)
    logger.debug("Read %d characters from %s", len(text), path)
    return SourceText(text=text, title=title)


def run_command(command: str, *, timeout: float = 30.0) -> SourceText:
    """Run *command* through the shell and capture its output.

    Stdout is followed by stderr. A non-zero exit status is logged, and the
    output is still returned since it usually explains the failure.

    Raises:
        subprocess.TimeoutExpired: If the command runs past *timeout* seconds.
    """
    logger.info("Running shell command: %s", command)
    result = subprocess.run(  # nosec: B602
        command,
        shell=True,
        capture_output=True,
        text=True,
        timeout=timeout,
        check=False,
    )
    if result.returncode != 0:
        logger.warning("Command %r exited with status %d", command, result.returncode)
    return SourceText(text=result.stdout + result.stderr, title=command)


def buffer_text(buffer: TextBuffer) -> SourceText:
    """The whole text of another buffer, titled with its name."""
    return SourceText(text=buffer.text, title=buffer.name)
