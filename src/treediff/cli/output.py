"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/treediff/cli/output.py
import sys
from typing import IO, Iterable, Optional

from rich.console import Console

from treediff.constants import ColorMode
from treediff.diff.records import DiffRecord
from treediff.diff.renderers.text import TextDiffRenderer


def should_use_color(color: ColorMode, stream: Optional[IO[str]] = None, writing_file: bool = False) -> bool:
    """Determine if colorized output should be used.

    Parameters
    ----------
    color : {"auto", "always", "never"}
        Requested color mode
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.
    writing_file : bool, default False
        Output goes to a file; ``auto`` never colors files

    Returns
    -------
    bool
        True if colored output should be used

    """
    if color == "always":
        return True
    if color == "never" or writing_file:
        return False
    stream = stream or sys.stdout
    return hasattr(stream, "isatty") and stream.isatty()


def print_records(
    records: Iterable[DiffRecord],
    use_color: bool,
    show_summary: bool = False,
    stream: Optional[IO[str]] = None,
) -> int:
    """Print records to a stream, colorized through rich when requested.

    Returns
    -------
    int
        Number of records printed

    """
    renderer = TextDiffRenderer(use_color=use_color, show_summary=show_summary)
    stream = stream or sys.stdout
    count = 0

    def counted(items: Iterable[DiffRecord]) -> Iterable[DiffRecord]:
        nonlocal count
        for item in items:
            count += 1
            yield item

    if use_color:
        console = Console(file=stream, force_terminal=True, highlight=False, soft_wrap=True)
        for line in renderer.render_rich(counted(records)):
            console.print(line)
    else:
        for text in renderer.render(counted(records)):
            print(text, file=stream)
    return count
