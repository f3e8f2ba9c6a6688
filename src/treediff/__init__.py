#  Copyright (c) 2025 Tom Villani, Ph.D.
"""treediff - structural comparison of JSON, YAML, XML, CSV and text documents.

Both documents are reduced to a common canonical node model and compared in
lock-step, producing a lazy stream of diff records. Three comparison modes
are supported:

- ``exact``: raw text equality with a line diff on mismatch
- ``full``: structural, ignoring array and child-element order
- ``ordered``: structural, keeping array and child-element order

Object key order and attribute order never matter in structural modes.

Examples
--------
    >>> from treediff import compare_lines
    >>> compare_lines('{"a": 1, "b": [1, 2]}', '{"b": [2, 1], "a": 1}', "json")
    []
    >>> compare_lines("<x a='1' b='2'/>", "<x a='1' b='3'/>", "xml")
    ['Attrib diff at /x: {"a": "1", "b": "2"} != {"a": "1", "b": "3"}']

"""

from treediff.diff import (
    DiffKind,
    DiffRecord,
    DiffStream,
    MultisetResult,
    Side,
    compare,
    compare_csv,
    compare_json,
    compare_lines,
    compare_rows,
    compare_xml,
    compare_yaml,
    diff_multiset,
    diff_text,
    diff_trees,
)
from treediff.exceptions import ConfigError, FileError, ParseError, TreeDiffError, ValidationError
from treediff.options import CompareOptions
from treediff.tree import (
    Keyed,
    LabeledElement,
    Node,
    Scalar,
    Sequence,
    TextLeaf,
    canonical_key,
    canonicalize,
    from_python,
    to_python,
)

__version__ = "0.1.0"

__all__ = [
    "CompareOptions",
    "ConfigError",
    "DiffKind",
    "DiffRecord",
    "DiffStream",
    "FileError",
    "Keyed",
    "LabeledElement",
    "MultisetResult",
    "Node",
    "ParseError",
    "Scalar",
    "Sequence",
    "Side",
    "TextLeaf",
    "TreeDiffError",
    "ValidationError",
    "canonical_key",
    "canonicalize",
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
    "from_python",
    "to_python",
]
