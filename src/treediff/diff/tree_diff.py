#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/diff/tree_diff.py
"""Lock-step comparison of two canonical node trees.

The differ walks both trees together and yields one :class:`DiffRecord` per
point of divergence. It is a positional/keyed comparison, not an edit-script
computation: sequences are compared index by index, keyed nodes key by key,
and surplus items are reported one record per item.

Path Segments
-------------
- object key: ``parent.key`` (``key`` at the root)
- array index: ``parent[i]``
- element child: ``parent/tag`` or ``parent/#text``

The walk is a generator, so a consumer that stops early never causes the
rest of the tree to be visited. The differ never raises on shape mismatches;
every asymmetry is a record.
"""

from __future__ import annotations

import logging
from typing import Iterator, Tuple, Union

from treediff.constants import ELEMENT_SEPARATOR, KEY_SEPARATOR, TEXT_SEGMENT
from treediff.diff.records import DiffKind, DiffRecord, DiffStream, Side
from treediff.tree.nodes import Keyed, LabeledElement, Node, Scalar, Sequence, TextLeaf

logger = logging.getLogger(__name__)

# A finished record, or a pair of nodes and their path still to compare
_Work = Union[DiffRecord, Tuple[Node, Node, str]]


def key_path(path: str, key: str) -> str:
    return f"{path}{KEY_SEPARATOR}{key}" if path else key


def index_path(path: str, index: int) -> str:
    return f"{path}[{index}]"


def element_child_path(path: str, child: Node) -> str:
    segment = child.tag if isinstance(child, LabeledElement) else TEXT_SEGMENT
    return f"{path}{ELEMENT_SEPARATOR}{segment}"


def iter_differences(left: Node, right: Node, path: str = "") -> Iterator[DiffRecord]:
    """Yield the differences between two canonical trees.

    Parameters
    ----------
    left : Node
        Root of the first tree
    right : Node
        Root of the second tree
    path : str, default ""
        Path of the two roots, used as prefix for every record

    Yields
    ------
    DiffRecord
        One record per divergence, in document order (keys in lexicographic
        order, indices ascending)

    Notes
    -----
    Pending work lives on an explicit stack rather than the call stack, so
    arbitrarily deep documents are walked without recursion. Each entry is
    either a finished record or a pair of nodes still to compare.

    """
    stack: list[_Work] = [(left, right, path)]
    while stack:
        work = stack.pop()
        if isinstance(work, DiffRecord):
            yield work
            continue
        pending = list(_compare_pair(*work))
        stack.extend(reversed(pending))


def _compare_pair(left: Node, right: Node, path: str) -> Iterator[_Work]:
    # Text against anything is a value comparison of the rendered forms
    if isinstance(left, TextLeaf) or isinstance(right, TextLeaf):
        if left != right:
            yield DiffRecord(DiffKind.VALUE, path, left, right)
        return

    if isinstance(left, LabeledElement) and isinstance(right, LabeledElement):
        yield from _diff_elements(left, right, path)
        return

    if type(left) is not type(right):
        yield DiffRecord(DiffKind.TAG_OR_TYPE, path, left, right)
        return

    if isinstance(left, Scalar):
        if left != right:
            yield DiffRecord(DiffKind.VALUE, path, left, right)
        return

    if isinstance(left, Keyed):
        yield from _diff_keyed(left, right, path)  # type: ignore[arg-type]
        return

    if isinstance(left, Sequence):
        yield from _diff_positional(left.items, right.items, path, is_element=False)  # type: ignore[attr-defined]
        return

    # Unknown node classes compare by equality only
    if left != right:
        yield DiffRecord(DiffKind.VALUE, path, left, right)


def _diff_elements(left: LabeledElement, right: LabeledElement, path: str) -> Iterator[_Work]:
    if left.tag != right.tag:
        yield DiffRecord(DiffKind.TAG_OR_TYPE, path, left, right)

    if left.attributes != right.attributes:
        yield DiffRecord(DiffKind.ATTRIBUTE, path, left.attributes, right.attributes)

    yield from _diff_positional(left.children, right.children, path, is_element=True)


def _diff_keyed(left: Keyed, right: Keyed, path: str) -> Iterator[_Work]:
    left_entries = left.as_dict()
    right_entries = right.as_dict()

    for key in sorted(left_entries.keys() | right_entries.keys()):
        child_path = key_path(path, key)
        if key not in left_entries:
            yield DiffRecord(DiffKind.KEY_ONLY_IN, child_path, None, right_entries[key], side=Side.SECOND)
        elif key not in right_entries:
            yield DiffRecord(DiffKind.KEY_ONLY_IN, child_path, left_entries[key], None, side=Side.FIRST)
        else:
            yield left_entries[key], right_entries[key], child_path


def _diff_positional(
    left_items: tuple[Node, ...],
    right_items: tuple[Node, ...],
    path: str,
    is_element: bool,
) -> Iterator[_Work]:
    def child_path(child: Node, index: int) -> str:
        return element_child_path(path, child) if is_element else index_path(path, index)

    shared = min(len(left_items), len(right_items))
    for index in range(shared):
        yield left_items[index], right_items[index], child_path(left_items[index], index)

    for index in range(shared, len(left_items)):
        item = left_items[index]
        yield DiffRecord(DiffKind.EXTRA_ITEM, child_path(item, index), item, None, side=Side.FIRST, index=index)

    for index in range(shared, len(right_items)):
        item = right_items[index]
        yield DiffRecord(DiffKind.EXTRA_ITEM, child_path(item, index), None, item, side=Side.SECOND, index=index)


def diff_trees(left: Node, right: Node, path: str = "") -> DiffStream:
    """Compare two canonical trees lazily.

    Parameters
    ----------
    left : Node
        Root of the first tree
    right : Node
        Root of the second tree
    path : str, default ""
        Path label of the roots (for XML, ``/<root tag>``)

    Returns
    -------
    DiffStream
        Restartable stream of records; empty when the trees are equal

    Examples
    --------
    >>> from treediff.tree import from_python
    >>> [str(r) for r in diff_trees(from_python({"a": 1}), from_python({"a": 2}))]
    ["Value diff at 'a': 1 != 2"]

    """
    logger.debug(f"Creating tree diff stream at {path or '<root>'}")
    return DiffStream(lambda: iter_differences(left, right, path))
