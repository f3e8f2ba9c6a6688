#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/diff/multiset.py
"""Multiset comparison of row collections.

Rows are compared by occurrence count rather than by position: the result
is the multiset symmetric difference of the two collections, so a row that
appears twice in the first document and once in the second is reported
once as missing from the second.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from treediff.constants import DEFAULT_IGNORE_EMPTY_ROWS, DEFAULT_IGNORE_HEADER
from treediff.diff.records import DiffKind, DiffRecord, DiffStream, Side

logger = logging.getLogger(__name__)

Row = tuple[str, ...]


def row_key(row: Sequence[str]) -> str:
    """Serialize a row so that distinct rows never share a key.

    JSON encoding quotes and escapes every cell, so cells containing the
    delimiter, quotes or newlines cannot make two different rows collide.
    """
    return json.dumps(list(row), ensure_ascii=False)


def is_empty_row(row: Sequence[str]) -> bool:
    return all(not cell.strip() for cell in row)


def prepare_rows(
    rows: Iterable[Sequence[str]],
    ignore_header: bool = DEFAULT_IGNORE_HEADER,
    ignore_empty_rows: bool = DEFAULT_IGNORE_EMPTY_ROWS,
) -> list[Row]:
    """Apply header and empty-row filtering to one side of a comparison.

    Parameters
    ----------
    rows : iterable of sequence of str
        Rows in document order
    ignore_header : bool, default False
        Drop the first row
    ignore_empty_rows : bool, default True
        Drop rows whose cells are all blank after trimming

    Returns
    -------
    list of Row
        The rows that take part in the comparison

    """
    prepared = [tuple(str(cell) for cell in row) for row in rows]
    if ignore_header and prepared:
        prepared = prepared[1:]
    if ignore_empty_rows:
        prepared = [row for row in prepared if not is_empty_row(row)]
    return prepared


@dataclass(frozen=True)
class MultisetResult:
    """Rows present more often on one side than on the other.

    Parameters
    ----------
    only_in_first : tuple of Row
        Rows the first collection has in excess, one entry per extra copy
    only_in_second : tuple of Row
        Rows the second collection has in excess, one entry per extra copy

    """

    only_in_first: tuple[Row, ...] = field(default=())
    only_in_second: tuple[Row, ...] = field(default=())

    def is_empty(self) -> bool:
        return not self.only_in_first and not self.only_in_second

    def iter_records(self):
        """Yield one ROW_ONLY_IN record per excess row, first side first."""
        for index, row in enumerate(self.only_in_first):
            yield DiffRecord(DiffKind.ROW_ONLY_IN, f"row:{index}", row, None, side=Side.FIRST, index=index)
        for index, row in enumerate(self.only_in_second):
            yield DiffRecord(DiffKind.ROW_ONLY_IN, f"row:{index}", None, row, side=Side.SECOND, index=index)

    def records(self) -> DiffStream:
        return DiffStream(self.iter_records)


def diff_multiset(
    rows1: Iterable[Sequence[str]],
    rows2: Iterable[Sequence[str]],
    *,
    ignore_header: bool = DEFAULT_IGNORE_HEADER,
    ignore_empty_rows: bool = DEFAULT_IGNORE_EMPTY_ROWS,
) -> MultisetResult:
    """Compute the multiset symmetric difference of two row collections.

    Parameters
    ----------
    rows1 : iterable of sequence of str
        Rows of the first document
    rows2 : iterable of sequence of str
        Rows of the second document
    ignore_header : bool, default False
        Exclude the first row of each side
    ignore_empty_rows : bool, default True
        Exclude rows whose cells are all blank

    Returns
    -------
    MultisetResult
        Excess rows per side. Rows are listed in the order their key was
        first seen, scanning the first collection and then the second.

    Examples
    --------
    >>> result = diff_multiset([("A",), ("A",), ("B",)], [("A",), ("B",), ("B",)])
    >>> result.only_in_first, result.only_in_second
    ((('A',),), (('B',),))

    """
    first = prepare_rows(rows1, ignore_header, ignore_empty_rows)
    second = prepare_rows(rows2, ignore_header, ignore_empty_rows)

    counts1 = Counter(row_key(row) for row in first)
    counts2 = Counter(row_key(row) for row in second)

    rows_by_key: dict[str, Row] = {}
    for row in (*first, *second):
        rows_by_key.setdefault(row_key(row), row)

    only_in_first: list[Row] = []
    only_in_second: list[Row] = []
    for key, row in rows_by_key.items():
        delta = counts1[key] - counts2[key]
        if delta > 0:
            only_in_first.extend([row] * delta)
        elif delta < 0:
            only_in_second.extend([row] * -delta)

    logger.debug(
        f"Multiset diff: {len(first)} vs {len(second)} rows, "
        f"{len(only_in_first)} only in first, {len(only_in_second)} only in second"
    )
    return MultisetResult(only_in_first=tuple(only_in_first), only_in_second=tuple(only_in_second))
