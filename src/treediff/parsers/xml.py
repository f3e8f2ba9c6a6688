#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/parsers/xml.py
"""XML text to labeled element tree.

Parsing goes through ``defusedxml`` so entity-expansion and external-entity
payloads are refused rather than expanded. Comments and processing
instructions are not part of the model and are skipped; text and tail text
become :class:`TextLeaf` children in document order.
"""

from __future__ import annotations

import logging
from typing import Any

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from treediff.parsers.base import BaseParser
from treediff.tree.nodes import LabeledElement, Node, TextLeaf

logger = logging.getLogger(__name__)


def _element_children(element: Any) -> list[Any]:
    # Comments and processing instructions have a callable tag
    return [child for child in element if isinstance(child.tag, str)]


def element_to_node(element: Any) -> LabeledElement:
    """Convert an ElementTree element into a :class:`LabeledElement`.

    Text leaves are kept verbatim here; trimming and dropping of
    whitespace-only text happens during canonicalization. Elements are
    converted bottom-up from an explicit stack, so deeply nested documents
    do not exhaust the interpreter's recursion limit.
    """
    built: list[LabeledElement] = []
    stack: list[tuple[Any, bool]] = [(element, False)]
    while stack:
        current, expanded = stack.pop()
        elements = _element_children(current)
        if elements and not expanded:
            stack.append((current, True))
            stack.extend((child, False) for child in reversed(elements))
            continue

        start = len(built) - len(elements)
        converted = iter(built[start:])
        del built[start:]

        children: list[Node] = []
        if current.text:
            children.append(TextLeaf(current.text))
        for child in current:
            if isinstance(child.tag, str):
                children.append(next(converted))
            if child.tail:
                children.append(TextLeaf(child.tail))

        built.append(
            LabeledElement(
                tag=current.tag,
                attributes=tuple((str(name), str(value)) for name, value in current.attrib.items()),
                children=tuple(children),
            )
        )
    return built[0]


class XmlParser(BaseParser):
    """Parse XML text into a :class:`LabeledElement` rooted at the document element."""

    kind = "xml"
    display_name = "XML"
    parse_exceptions = (ET.ParseError, DefusedXmlException, ValueError)

    def _parse_text(self, text: str) -> LabeledElement:
        root = ET.fromstring(text)
        return element_to_node(root)
