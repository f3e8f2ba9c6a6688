#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/tree/__init__.py
"""Canonical node model and canonicalization.

Every document kind that has structure (JSON, YAML, XML) is parsed into the
node classes defined here and then canonicalized before comparison.
"""

from treediff.tree.canonical import canonical_key, canonicalize
from treediff.tree.nodes import (
    Keyed,
    LabeledElement,
    Node,
    Scalar,
    ScalarValue,
    Sequence,
    TextLeaf,
    from_python,
    node_type_name,
    render_node,
    to_python,
)

__all__ = [
    "Keyed",
    "LabeledElement",
    "Node",
    "Scalar",
    "ScalarValue",
    "Sequence",
    "TextLeaf",
    "canonical_key",
    "canonicalize",
    "from_python",
    "node_type_name",
    "render_node",
    "to_python",
]
