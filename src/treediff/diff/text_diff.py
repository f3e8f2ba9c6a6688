#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/diff/text_diff.py
"""Exact text comparison.

Used for plain text and for ``exact`` mode on every other kind: no parsing,
no canonicalization, just string equality followed by a line-by-line diff
when the texts differ. Lines are compared positionally; there is no
alignment, so an inserted line shows up as a change on every following line.
"""

from __future__ import annotations

import re
from typing import Iterator

from treediff.diff.records import DiffKind, DiffRecord, DiffStream

_LINE_SPLIT_RE = re.compile(r"\r?\n")


def split_lines(text: str | None) -> list[str]:
    """Split text on LF or CRLF line boundaries.

    An empty or missing text yields a single empty line, and a trailing
    newline yields a trailing empty line, as ``str.split`` would.
    """
    return _LINE_SPLIT_RE.split(text or "")


def _line_path(index: int) -> str:
    return f"line:{index + 1}"


def iter_line_differences(text1: str | None, text2: str | None) -> Iterator[DiffRecord]:
    """Yield ``-``/``+`` line records for two texts.

    Parameters
    ----------
    text1 : str or None
        First text
    text2 : str or None
        Second text

    Yields
    ------
    DiffRecord
        For each differing line index, a LINE_REMOVED record followed by a
        LINE_ADDED record; past the end of the shorter text, only the record
        for the side that still has lines. When the texts differ only in
        line terminators, one pair per differing terminator, with the
        terminator shown escaped (``- a\\r\\n`` / ``+ a\\n``)

    """
    if (text1 or "") == (text2 or ""):
        return

    lines1 = split_lines(text1)
    lines2 = split_lines(text2)
    found = False
    for index in range(max(len(lines1), len(lines2))):
        line1 = lines1[index] if index < len(lines1) else None
        line2 = lines2[index] if index < len(lines2) else None
        if line1 == line2:
            continue
        found = True
        if line1 is not None:
            yield DiffRecord(DiffKind.LINE_REMOVED, _line_path(index), left=line1, index=index)
        if line2 is not None:
            yield DiffRecord(DiffKind.LINE_ADDED, _line_path(index), right=line2, index=index)

    if not found:
        # Same lines, different terminators: show them escaped
        yield from _iter_line_ending_differences(text1 or "", text2 or "", lines1)


def _escape_ending(ending: str) -> str:
    return ending.replace("\r", "\\r").replace("\n", "\\n")


def _iter_line_ending_differences(text1: str, text2: str, lines: list[str]) -> Iterator[DiffRecord]:
    endings1 = _LINE_SPLIT_RE.findall(text1)
    endings2 = _LINE_SPLIT_RE.findall(text2)
    for index, (ending1, ending2) in enumerate(zip(endings1, endings2)):
        if ending1 == ending2:
            continue
        line = lines[index]
        yield DiffRecord(DiffKind.LINE_REMOVED, _line_path(index), left=line + _escape_ending(ending1), index=index)
        yield DiffRecord(DiffKind.LINE_ADDED, _line_path(index), right=line + _escape_ending(ending2), index=index)


def diff_text(text1: str | None, text2: str | None) -> DiffStream:
    """Compare two texts exactly, returning a restartable record stream.

    Examples
    --------
    >>> diff_text("a\\nb", "a\\nc").to_list()[0].message
    '- b'

    """
    return DiffStream(lambda: iter_line_differences(text1, text2))
