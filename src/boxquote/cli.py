"""Command-line interface for boxquote.

Boxed text goes to stdout (or back into the file with ``--in-place``);
errors go to stderr.

Usage:
    boxquote box [FILE] [--title TITLE | --no-title]
    boxquote run COMMAND...
    boxquote unbox FILE --line N [--in-place]
    boxquote title FILE [TITLE] --line N [--in-place]
    boxquote fill FILE --line N [--width W] [--in-place]
    boxquote find FILE
"""

from __future__ import annotations

import argparse
import subprocess
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from boxquote.buffer import TextBuffer
from boxquote.commands import (
    box_buffer,
    box_fill_paragraph,
    box_get_title,
    box_shell_command,
    box_title,
    box_unbox,
)
from boxquote.config import get_settings
from boxquote.core import NoBoxFound, find_boxes, get_title

console = Console(stderr=True)


def _build_parser() -> argparse.ArgumentParser:
    """Build argparse parser for boxquote subcommands."""
    from boxquote import __version__

    parser = argparse.ArgumentParser(
        prog="boxquote",
        description="Quote text in left-margin semi-boxes.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--log-level",
        default=None,
        help="Console log level (default: from BOXQUOTE_APP__LOG_LEVEL or WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # box
    box_p = sub.add_parser("box", help="Box a file or stdin")
    box_p.add_argument("file", nargs="?", type=Path, help="File to box (default: stdin)")
    title_group = box_p.add_mutually_exclusive_group()
    title_group.add_argument("--title", default=None, help="Title (default: file name)")
    title_group.add_argument("--no-title", action="store_true", help="Leave untitled")

    # run
    run_p = sub.add_parser("run", help="Box the output of a shell command")
    run_p.add_argument("shell_command", nargs=argparse.REMAINDER, help="Command to run")

    # unbox
    unbox_p = sub.add_parser("unbox", help="Remove the box containing a line")
    _add_located_args(unbox_p)

    # title
    title_p = sub.add_parser("title", help="Print or set the title of a box")
    _add_located_args(title_p)
    title_p.add_argument(
        "new_title", nargs="?", default=None, help="New title ('' removes it)"
    )

    # fill
    fill_p = sub.add_parser("fill", help="Refill the paragraph at a line")
    _add_located_args(fill_p)
    fill_p.add_argument("--width", type=int, default=None, help="Fill column")

    # find
    find_p = sub.add_parser("find", help="List the boxes in a file")
    find_p.add_argument("file", type=Path, help="File to scan")

    return parser


def _add_located_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", type=Path, help="File holding the box")
    parser.add_argument("--line", type=int, required=True, help="1-based line number")
    parser.add_argument(
        "--in-place", action="store_true", help="Rewrite the file instead of printing"
    )


def _read_buffer(path: Path | None) -> TextBuffer:
    if path is None or str(path) == "-":
        return TextBuffer(sys.stdin.read(), name="<stdin>")
    return TextBuffer(path.read_text(encoding="utf-8"), name=path.name)


def _emit(buffer: TextBuffer, path: Path | None = None, *, in_place: bool = False) -> None:
    if in_place and path is not None:
        path.write_text(buffer.text, encoding="utf-8")
        return
    sys.stdout.write(buffer.text)
    if buffer.text and not buffer.text.endswith("\n"):
        sys.stdout.write("\n")


def _line_position(buffer: TextBuffer, line: int) -> int:
    last = buffer.line_number(len(buffer.text))
    if not 1 <= line <= last:
        msg = f"line {line} out of range (1-{last})"
        raise ValueError(msg)
    return buffer.position_of_line(line)


def _cmd_box(args: argparse.Namespace) -> None:
    buffer = _read_buffer(args.file)
    title = args.title
    if title is None and not args.no_title and buffer.name != "<stdin>":
        title = buffer.name
    box_buffer(buffer, title=title)
    _emit(buffer)


def _cmd_run(args: argparse.Namespace) -> None:
    command = " ".join(args.shell_command).strip()
    if not command:
        msg = "no command given"
        raise ValueError(msg)
    buffer = TextBuffer(name="<output>")
    box_shell_command(buffer, command)
    _emit(buffer)


def _cmd_unbox(args: argparse.Namespace) -> None:
    buffer = _read_buffer(args.file)
    box_unbox(buffer, _line_position(buffer, args.line))
    _emit(buffer, args.file, in_place=args.in_place)


def _cmd_title(args: argparse.Namespace) -> None:
    buffer = _read_buffer(args.file)
    position = _line_position(buffer, args.line)
    if args.new_title is None:
        sys.stdout.write(box_get_title(buffer, position) + "\n")
        return
    box_title(buffer, position, args.new_title)
    _emit(buffer, args.file, in_place=args.in_place)


def _cmd_fill(args: argparse.Namespace) -> None:
    buffer = _read_buffer(args.file)
    box_fill_paragraph(buffer, _line_position(buffer, args.line), width=args.width)
    _emit(buffer, args.file, in_place=args.in_place)


def _cmd_find(args: argparse.Namespace) -> None:
    buffer = _read_buffer(args.file)
    style = get_settings().style
    for box in find_boxes(buffer, style):
        first = buffer.line_number(box.start)
        last = buffer.line_number(box.end)
        sys.stdout.write(f"{first}-{last}\t{get_title(buffer, box, style)}\n")


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``boxquote`` command."""
    from boxquote import _setup_logging

    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    _setup_logging(
        level=args.log_level or settings.app.log_level,
        log_dir=settings.app.log_dir,
    )

    try:
        match args.command:
            case "box":
                _cmd_box(args)
            case "run":
                _cmd_run(args)
            case "unbox":
                _cmd_unbox(args)
            case "title":
                _cmd_title(args)
            case "fill":
                _cmd_fill(args)
            case "find":
                _cmd_find(args)
    except NoBoxFound:
        console.print(f"[red]Error:[/] no box at line {args.line}")
        sys.exit(1)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Error:[/] {escape(str(exc))}")
        sys.exit(1)
    except subprocess.TimeoutExpired as exc:
        console.print(f"[red]Error:[/] command timed out after {exc.timeout}s")
        sys.exit(1)
