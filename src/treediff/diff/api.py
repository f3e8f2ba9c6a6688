#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/diff/api.py
"""Python API for document comparison.

:func:`compare` is the single entry point: it picks the exact-text, tree or
multiset strategy from the document kind and the comparison mode, parses and
canonicalizes both sides, and returns a lazy stream of diff records.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Iterable, Mapping, Sequence, Union

from treediff.constants import (
    DEFAULT_DOCUMENT_KIND,
    DOCUMENT_KINDS,
    ELEMENT_SEPARATOR,
    ROW_KINDS,
    TEXT_KINDS,
    DocumentKind,
    SideName,
)
from treediff.diff.multiset import MultisetResult, diff_multiset
from treediff.diff.records import DiffStream
from treediff.diff.text_diff import diff_text
from treediff.diff.tree_diff import diff_trees
from treediff.exceptions import ValidationError
from treediff.options import CompareOptions
from treediff.parsers import get_parser
from treediff.tree.canonical import canonicalize
from treediff.tree.nodes import LabeledElement, Node, from_python

logger = logging.getLogger(__name__)

OptionsLike = Union[CompareOptions, Mapping[str, Any], None]


def _resolve_options(options: OptionsLike, overrides: Mapping[str, Any]) -> CompareOptions:
    if isinstance(options, CompareOptions):
        resolved = options
    else:
        resolved = CompareOptions.from_mapping(options)
    if overrides:
        merged = {**asdict(resolved), **overrides}
        if "mode" not in overrides and "order_sensitive" in overrides:
            merged.pop("mode")
        resolved = CompareOptions.from_mapping(merged)
    return resolved


def _require_text(document: Any, side: SideName, kind: str) -> str:
    if isinstance(document, bytes):
        return document.decode("utf-8-sig")
    if not isinstance(document, str):
        raise ValidationError(
            f"{kind} comparison expects text for the {side} document, got {type(document).__name__}",
            parameter_name=f"doc_{side}",
            parameter_value=type(document).__name__,
        )
    return document


def _root_path(node: Node) -> str:
    return f"{ELEMENT_SEPARATOR}{node.tag}" if isinstance(node, LabeledElement) else ""


def compare(
    doc_a: Any,
    doc_b: Any,
    kind: DocumentKind | str = DEFAULT_DOCUMENT_KIND,
    options: OptionsLike = None,
    **overrides: Any,
) -> DiffStream:
    """Compare two documents and return their differences.

    Parameters
    ----------
    doc_a : str, Node, data or rows
        First document. Text for ``text``/``json``/``yaml``/``xml``/``csv``;
        a Node or plain Python data for ``tree``; an iterable of rows for
        ``rows``.
    doc_b : same as doc_a
        Second document
    kind : {"text", "json", "yaml", "xml", "csv", "tree", "rows"}, default "json"
        Document kind
    options : CompareOptions or mapping, optional
        Comparison options; a mapping is converted leniently with
        :meth:`CompareOptions.from_mapping`
    **overrides : Any
        Individual option values, applied on top of ``options``
        (e.g. ``mode="ordered"``)

    Returns
    -------
    DiffStream
        Lazy, restartable stream of records; empty when the documents are
        equivalent under the chosen mode

    Raises
    ------
    ValidationError
        If ``kind`` is unknown or a document has the wrong type
    ParseError
        If either document is malformed. Both sides are parsed before the
        stream is returned, so no partial result is ever produced.

    Examples
    --------
    >>> compare("[1, 2, 3]", "[3, 2, 1]", "json", mode="full").is_empty()
    True
    >>> compare("[1, 2, 3]", "[3, 2, 1]", "json", mode="ordered").is_empty()
    False

    """
    if kind not in DOCUMENT_KINDS:
        raise ValidationError(
            f"Invalid document kind: {kind}. Must be one of: {', '.join(DOCUMENT_KINDS)}",
            parameter_name="kind",
            parameter_value=kind,
        )
    resolved = _resolve_options(options, overrides)
    logger.debug(f"Comparing {kind} documents in {resolved.mode} mode")

    if kind in TEXT_KINDS or (resolved.mode == "exact" and kind not in {"tree", "rows"}):
        return diff_text(_require_text(doc_a, "first", kind), _require_text(doc_b, "second", kind))

    if kind in ROW_KINDS:
        return compare_rows(doc_a, doc_b, kind, resolved).records()

    if kind == "tree":
        tree_a, tree_b = from_python(doc_a), from_python(doc_b)
        # Exact text comparison has no meaning for in-memory trees
        mode = "full" if resolved.mode == "exact" else resolved.mode
    else:
        parser = get_parser(kind)
        tree_a = parser.parse(_require_text(doc_a, "first", kind), "first")
        tree_b = parser.parse(_require_text(doc_b, "second", kind), "second")
        mode = resolved.mode

    canonical_a = canonicalize(tree_a, mode)
    canonical_b = canonicalize(tree_b, mode)
    return diff_trees(canonical_a, canonical_b, _root_path(canonical_a))


def compare_rows(
    doc_a: Any,
    doc_b: Any,
    kind: str = "rows",
    options: OptionsLike = None,
) -> MultisetResult:
    """Compare two row collections as multisets.

    Parameters
    ----------
    doc_a : str or iterable of rows
        First document; CSV text when ``kind="csv"``
    doc_b : str or iterable of rows
        Second document
    kind : {"rows", "csv"}, default "rows"
        Whether the documents are already tabulated or CSV text
    options : CompareOptions or mapping, optional
        Header, empty-row and delimiter settings

    Returns
    -------
    MultisetResult
        Rows in excess on each side

    """
    resolved = options if isinstance(options, CompareOptions) else CompareOptions.from_mapping(options)
    if kind == "csv":
        parser = get_parser("csv", delimiter=resolved.delimiter)
        rows_a: Iterable[Sequence[str]] = parser.parse(_require_text(doc_a, "first", kind), "first")
        rows_b: Iterable[Sequence[str]] = parser.parse(_require_text(doc_b, "second", kind), "second")
    else:
        rows_a, rows_b = doc_a, doc_b
    return diff_multiset(
        rows_a,
        rows_b,
        ignore_header=resolved.ignore_header,
        ignore_empty_rows=resolved.ignore_empty_rows,
    )


def compare_lines(
    doc_a: Any,
    doc_b: Any,
    kind: DocumentKind | str = DEFAULT_DOCUMENT_KIND,
    options: OptionsLike = None,
    **overrides: Any,
) -> list[str]:
    """Compare two documents and return human-readable diff strings.

    Same parameters as :func:`compare`. An empty list means no differences.

    Examples
    --------
    >>> compare_lines('{"a": 1, "b": 2}', '{"b": 2, "a": 1}', "json")
    []

    """
    return list(compare(doc_a, doc_b, kind, options, **overrides).lines())


def compare_json(text_a: str, text_b: str, mode: str = "full") -> list[str]:
    return compare_lines(text_a, text_b, "json", mode=mode)


def compare_yaml(text_a: str, text_b: str, mode: str = "full") -> list[str]:
    return compare_lines(text_a, text_b, "yaml", mode=mode)


def compare_xml(text_a: str, text_b: str, order_sensitive: bool = False) -> list[str]:
    """Compare two XML texts, optionally keeping child element order."""
    return compare_lines(text_a, text_b, "xml", mode="ordered" if order_sensitive else "full")


def compare_csv(
    text_a: str,
    text_b: str,
    delimiter: str = ",",
    ignore_header: bool = False,
    ignore_empty: bool = True,
) -> MultisetResult:
    """Compare two CSV texts row by row as multisets."""
    options = CompareOptions(delimiter=delimiter, ignore_header=ignore_header, ignore_empty_rows=ignore_empty)
    return compare_rows(text_a, text_b, "csv", options)
