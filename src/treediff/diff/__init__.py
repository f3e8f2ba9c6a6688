#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/diff/__init__.py
"""Document comparison and diff functionality.

This package compares two documents of the same kind and reports where they
diverge, as a lazy stream of :class:`DiffRecord` objects.

Key Features
------------
- One tree differ for JSON, YAML and XML, working on canonical node trees
- Order-sensitive (``ordered``) and order-insensitive (``full``) structure modes
- Exact, byte-sensitive line comparison (``exact``)
- Multiset row comparison for CSV, tracking duplicate rows by count
- Positional/keyed comparison only: no minimal edit script, no patching

Examples
--------
Compare two JSON texts:
    >>> from treediff.diff import compare_lines
    >>> compare_lines('{"a": [1, 2]}', '{"a": [2, 1]}', "json", mode="ordered")
    ["Value diff at 'a[0]': 1 != 2", "Value diff at 'a[1]': 2 != 1"]

Compare CSV rows as multisets:
    >>> from treediff.diff import compare_csv
    >>> result = compare_csv("a\\na\\nb", "a\\nb\\nb")
    >>> result.only_in_first, result.only_in_second
    ((('a',),), (('b',),))

"""

from treediff.diff.api import (
    compare,
    compare_csv,
    compare_json,
    compare_lines,
    compare_rows,
    compare_xml,
    compare_yaml,
)
from treediff.diff.multiset import MultisetResult, Row, diff_multiset, row_key
from treediff.diff.records import DiffKind, DiffRecord, DiffStream, Side
from treediff.diff.text_diff import diff_text, iter_line_differences, split_lines
from treediff.diff.tree_diff import diff_trees, iter_differences

__all__ = [
    "DiffKind",
    "DiffRecord",
    "DiffStream",
    "MultisetResult",
    "Row",
    "Side",
    "compare",
    "compare_csv",
    "compare_json",
    "compare_lines",
    "compare_rows",
    "compare_xml",
    "compare_yaml",
    "diff_multiset",
    "diff_text",
    "diff_trees",
    "iter_differences",
    "iter_line_differences",
    "row_key",
    "split_lines",
]
