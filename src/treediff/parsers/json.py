#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/parsers/json.py
"""JSON text to node tree."""

from __future__ import annotations

import json

from treediff.parsers.base import BaseParser
from treediff.tree.nodes import Node, from_python


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not a valid JSON value")


class JsonParser(BaseParser):
    """Parse JSON text into :class:`~treediff.tree.nodes.Node` trees.

    Objects become ``Keyed`` nodes (duplicate keys keep the last value),
    arrays ``Sequence`` nodes and everything else ``Scalar`` nodes.
    ``NaN`` and ``Infinity`` literals are rejected.
    """

    kind = "json"
    display_name = "JSON"
    parse_exceptions = (json.JSONDecodeError, ValueError)

    def _parse_text(self, text: str) -> Node:
        data = json.loads(text, parse_constant=_reject_constant)
        return from_python(data)
