#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/parsers/yaml.py
"""YAML text to node tree.

YAML documents share the JSON data model, so they reduce to the same nodes
and are compared exactly like JSON. Values outside that model (timestamps,
binary) are compared by their string form.
"""

from __future__ import annotations

import yaml

from treediff.parsers.base import BaseParser
from treediff.tree.nodes import Node, from_python


class YamlParser(BaseParser):
    """Parse a single YAML document with ``yaml.safe_load``.

    An empty document parses to a null scalar.
    """

    kind = "yaml"
    display_name = "YAML"
    parse_exceptions = (yaml.YAMLError,)

    def _parse_text(self, text: str) -> Node:
        return from_python(yaml.safe_load(text))
