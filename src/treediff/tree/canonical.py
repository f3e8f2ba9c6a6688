#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/tree/canonical.py
"""Canonicalization of node trees before comparison.

Canonical form removes variation that never carries meaning for a diff:

- ``Keyed`` entries are sorted by key
- element attributes are sorted by name
- text leaves are trimmed, and whitespace-only leaves are dropped
- in ``full`` mode, sequences and element children are sorted by
  :func:`canonical_key`

The sort key is a length-prefixed structural encoding of the whole subtree.
It is injective: two subtrees receive the same key only when they are equal,
so sorting never brings two different children into an arbitrary order.
Python's sort is stable, so equal children keep their input order.
"""

from __future__ import annotations

import logging

from treediff.constants import ComparisonMode
from treediff.tree.nodes import Keyed, LabeledElement, Node, Scalar, Sequence, TextLeaf

logger = logging.getLogger(__name__)


def _field(text: str) -> str:
    return f"{len(text)}:{text}"


def canonical_key(node: Node) -> str:
    """Encode a node as an unambiguous string.

    Every component is prefixed with a kind marker and every variable-length
    part with its length, so the encoding of a subtree can never be confused
    with the encoding of a different subtree.

    Parameters
    ----------
    node : Node
        Node to encode (normally already canonicalized)

    Returns
    -------
    str
        Structural encoding of the node

    Examples
    --------
    >>> canonical_key(Scalar("1")) != canonical_key(Scalar(1))
    True

    """
    parts: list[str] = []
    # Pending nodes and literal key fragments, emitted in pre-order
    stack: list[Node | str] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, str):
            parts.append(current)
        elif isinstance(current, Keyed):
            parts.append(f"M{len(current.entries)}:")
            for key, value in reversed(current.entries):
                stack.append(value)
                stack.append(_field(key))
        elif isinstance(current, (Sequence, LabeledElement)):
            children = _children(current)
            parts.append(_container_prefix(current))
            stack.extend(reversed(children))
        else:
            parts.append(_leaf_key(current))
    return "".join(parts)


def _leaf_key(node: Node) -> str:
    if isinstance(node, Scalar):
        return "S" + _field(node.token)
    if isinstance(node, TextLeaf):
        return "T" + _field(node.value)
    raise TypeError(f"Cannot encode node of type {type(node).__name__}")


def _container_prefix(node: Sequence | LabeledElement) -> str:
    if isinstance(node, Sequence):
        return f"L{len(node.items)}:"
    attributes = "".join(_field(name) + _field(value) for name, value in node.attributes)
    return f"E{_field(node.tag)}{len(node.attributes)}:{attributes}{len(node.children)}:"


def _children(node: Node) -> tuple[Node, ...]:
    if isinstance(node, Sequence):
        return node.items
    if isinstance(node, LabeledElement):
        return node.children
    if isinstance(node, Keyed):
        return tuple(value for _, value in _sorted_entries(node))
    return ()


def _sorted_entries(node: Keyed) -> list[tuple[str, Node]]:
    return sorted(node.entries, key=lambda entry: entry[0])


def canonicalize(node: Node, mode: ComparisonMode = "full") -> Node:
    """Rewrite a node tree into canonical form for the given mode.

    Parameters
    ----------
    node : Node
        Root of the tree to canonicalize. The input is never modified.
    mode : {"exact", "full", "ordered"}, default "full"
        ``exact`` returns the node unchanged, ``ordered`` keeps sequence
        order, ``full`` sorts sequences and element children.

    Returns
    -------
    Node
        The canonical tree. A whitespace-only text root canonicalizes to an
        empty text leaf.

    """
    if mode == "exact":
        return node
    result = _canonicalize(node, sort_sequences=mode == "full")
    if result is None:
        return TextLeaf("")
    return result


def _canonicalize(root: Node, sort_sequences: bool) -> Node | None:
    """Rebuild a tree bottom-up from an explicit stack.

    Each finished subtree is kept with its canonical key when sequences are
    sorted, so every key is computed once instead of once per ancestor.
    """
    built: list[tuple[Node | None, str]] = []
    stack: list[tuple[Node, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if not isinstance(node, (Scalar, TextLeaf, Keyed, Sequence, LabeledElement)):
            raise TypeError(f"Cannot canonicalize node of type {type(node).__name__}")

        children = _children(node)
        if children and not expanded:
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(children))
            continue

        start = len(built) - len(children)
        results = built[start:]
        del built[start:]
        built.append(_rebuild(node, results, sort_sequences))
    return built[0][0]


def _rebuild(node: Node, results: list[tuple[Node | None, str]], sort_sequences: bool) -> tuple[Node | None, str]:
    if isinstance(node, Scalar):
        return node, _leaf_key(node) if sort_sequences else ""

    if isinstance(node, TextLeaf):
        text = node.value.strip()
        if not text:
            return None, ""
        leaf = TextLeaf(text)
        return leaf, _leaf_key(leaf) if sort_sequences else ""

    if isinstance(node, Keyed):
        entries = []
        key_parts = [f"M{len(results)}:"]
        for (key, _), (value, value_key) in zip(_sorted_entries(node), results):
            if value is None:
                value = TextLeaf("")
                value_key = _leaf_key(value) if sort_sequences else ""
            entries.append((key, value))
            key_parts.append(_field(key) + value_key)
        return Keyed(entries=tuple(entries)), "".join(key_parts) if sort_sequences else ""

    kept = [(child, child_key) for child, child_key in results if child is not None]
    if sort_sequences:
        kept.sort(key=lambda pair: pair[1])
    children = tuple(child for child, _ in kept)

    rebuilt: Sequence | LabeledElement
    if isinstance(node, Sequence):
        rebuilt = Sequence(items=children)
    else:
        rebuilt = LabeledElement(  # type: ignore[union-attr]
            tag=node.tag,
            attributes=tuple(sorted(node.attributes)),
            children=children,
        )
    if not sort_sequences:
        return rebuilt, ""
    return rebuilt, _container_prefix(rebuilt) + "".join(child_key for _, child_key in kept)
