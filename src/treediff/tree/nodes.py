#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/tree/nodes.py
"""Canonical node model shared by every document kind.

JSON, YAML and XML documents are all reduced to the same small set of
immutable node classes before comparison, so the canonicalizer and the tree
differ are written once instead of once per format.

Node Kinds
----------
- Scalar: string, number, boolean or null leaf (JSON-like)
- Sequence: ordered list of nodes (JSON array)
- Keyed: mapping of unique string keys to nodes (JSON object)
- LabeledElement: tagged element with attributes and children (XML element)
- TextLeaf: character data inside an element (XML text)

All nodes are frozen dataclasses. Containers hold tuples, so a tree is
immutable once built and may be shared freely between comparisons.

"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Iterable, Mapping, Union

logger = logging.getLogger(__name__)

ScalarValue = Union[str, int, float, bool, None]


def scalar_type_name(value: ScalarValue) -> str:
    """Return the JSON type name of a scalar value.

    Booleans are checked before numbers because ``bool`` subclasses ``int``.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    return "string"


def _number_token(value: int | float) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def scalar_token(value: ScalarValue) -> str:
    """Return the type-tagged textual form of a scalar value.

    Two scalars are equal exactly when their tokens are equal, so ``"1"``,
    ``1`` and ``True`` are all distinct while ``1`` and ``1.0`` are not.
    """
    type_name = scalar_type_name(value)
    if type_name == "null":
        text = ""
    elif type_name == "boolean":
        text = "true" if value else "false"
    elif type_name == "number":
        text = _number_token(value)  # type: ignore[arg-type]
    else:
        text = str(value)
    return f"{type_name}:{text}"


class Node:
    """Base class for canonical nodes."""

    __slots__ = ()


@dataclass(frozen=True, eq=False)
class Scalar(Node):
    """A JSON-like leaf value.

    Parameters
    ----------
    value : str, int, float, bool or None
        The leaf value

    Notes
    -----
    Equality is by type and value: ``Scalar("1") != Scalar(1)`` and
    ``Scalar(True) != Scalar(1)``, although Python considers ``True == 1``.

    """

    value: ScalarValue = None

    @property
    def type_name(self) -> str:
        return scalar_type_name(self.value)

    @property
    def token(self) -> str:
        return scalar_token(self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scalar):
            return NotImplemented
        return self.token == other.token

    def __hash__(self) -> int:
        return hash(self.token)


@dataclass(frozen=True)
class Sequence(Node):
    """An ordered list of nodes.

    Parameters
    ----------
    items : tuple of Node
        Child nodes in document order

    """

    items: tuple[Node, ...] = ()

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class Keyed(Node):
    """A mapping of unique string keys to nodes.

    Parameters
    ----------
    entries : tuple of (str, Node)
        Key/value pairs. Keys must be unique; canonical form keeps them
        sorted lexicographically.

    """

    entries: tuple[tuple[str, Node], ...] = ()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Node] | Iterable[tuple[str, Node]]) -> "Keyed":
        """Build a Keyed node; repeated keys keep the last value."""
        pairs = mapping.items() if isinstance(mapping, Mapping) else mapping
        merged: dict[str, Node] = {}
        for key, value in pairs:
            merged[str(key)] = value
        return cls(entries=tuple(merged.items()))

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]

    def as_dict(self) -> dict[str, Node]:
        return dict(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class TextLeaf(Node):
    """Character data inside a labeled element.

    Parameters
    ----------
    value : str
        The text content

    """

    value: str = ""


@dataclass(frozen=True)
class LabeledElement(Node):
    """A tagged element with attributes and children.

    Parameters
    ----------
    tag : str
        Element name
    attributes : tuple of (str, str)
        Attribute name/value pairs. Canonical form keeps them sorted by name.
    children : tuple of LabeledElement or TextLeaf
        Child nodes in document order

    """

    tag: str
    attributes: tuple[tuple[str, str], ...] = ()
    children: tuple[Node, ...] = field(default=())

    @property
    def attribute_map(self) -> dict[str, str]:
        return dict(self.attributes)


def node_type_name(node: Node) -> str:
    """Return a short, human-readable name for the kind of a node."""
    if isinstance(node, Scalar):
        return node.type_name
    if isinstance(node, Sequence):
        return "array"
    if isinstance(node, Keyed):
        return "object"
    if isinstance(node, LabeledElement):
        return "element"
    if isinstance(node, TextLeaf):
        return "text"
    return type(node).__name__


def render_node(node: Node | None) -> str:
    """Render a node compactly for diff messages.

    Scalars render as JSON literals, text leaves in single quotes, elements
    as their opening tag, and containers as a size summary.
    """
    if node is None:
        return "(missing)"
    if isinstance(node, Scalar):
        value = node.value
        if isinstance(value, float) and not math.isfinite(value):
            return _number_token(value)
        return json.dumps(value, ensure_ascii=False)
    if isinstance(node, TextLeaf):
        return f"'{node.value}'"
    if isinstance(node, LabeledElement):
        return f"<{node.tag}>"
    if isinstance(node, Sequence):
        return f"[{len(node.items)} items]"
    if isinstance(node, Keyed):
        return "{" + ", ".join(node.keys()) + "}"
    return repr(node)


def _key_text(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is None or isinstance(key, (bool, int, float)):
        return scalar_token(key).split(":", 1)[1] or "null"
    return str(key)


def _child_values(value: Any) -> list[Any]:
    if isinstance(value, Node):
        return []
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _build_node(value: Any, children: list[Node]) -> Node:
    if isinstance(value, Node):
        return value
    if isinstance(value, Mapping):
        merged: dict[str, Node] = {}
        for key, child in zip(value.keys(), children):
            text = _key_text(key)
            if text in merged:
                logger.warning(f"Mapping keys normalize to the same key {text!r}; keeping the last value")
            merged[text] = child
        return Keyed(entries=tuple(merged.items()))
    if isinstance(value, (list, tuple)):
        return Sequence(items=tuple(children))
    if value is None or isinstance(value, (str, bool, int, float)):
        return Scalar(value)
    return Scalar(str(value))


def from_python(value: Any) -> Node:
    """Convert plain Python data (as produced by ``json.loads``) into nodes.

    Dicts become :class:`Keyed`, lists and tuples :class:`Sequence`, and
    everything else a :class:`Scalar`. Values that are not JSON scalars
    (dates, decimals, ...) are converted to their string form. Existing
    nodes are returned unchanged.

    Mapping keys are normalized to strings the way JSON spells them, so a
    YAML ``{1: x}``, ``{true: x}`` or ``{null: x}`` has the key ``"1"``,
    ``"true"`` or ``"null"``. When two keys of one mapping normalize to the
    same string, the last value wins and a warning is logged.

    The conversion walks the data with an explicit stack, so nesting depth
    is not limited by the interpreter's recursion limit.
    """
    built: list[Node] = []
    stack: list[tuple[Any, bool]] = [(value, False)]
    while stack:
        current, expanded = stack.pop()
        children = _child_values(current)
        if children and not expanded:
            stack.append((current, True))
            stack.extend((child, False) for child in reversed(children))
            continue
        start = len(built) - len(children)
        node = _build_node(current, built[start:])
        del built[start:]
        built.append(node)
    return built[0]


def to_python(node: Node) -> Any:
    """Convert a JSON-like node tree back into plain Python data.

    Labeled elements become ``{"tag", "attributes", "children"}`` dicts and
    text leaves plain strings.
    """
    if not isinstance(node, (Scalar, Sequence, Keyed, TextLeaf, LabeledElement)):
        raise TypeError(f"Unsupported node type: {type(node).__name__}")

    root: list[Any] = []
    # Each entry is a node and the callback that stores its converted value
    stack: list[tuple[Node, Any]] = [(node, root.append)]
    while stack:
        current, store = stack.pop()
        if isinstance(current, Scalar):
            store(current.value)
        elif isinstance(current, TextLeaf):
            store(current.value)
        elif isinstance(current, Sequence):
            items: list[Any] = [None] * len(current.items)
            store(items)
            stack.extend((item, partial(items.__setitem__, index)) for index, item in enumerate(current.items))
        elif isinstance(current, Keyed):
            mapping: dict[str, Any] = {key: None for key, _ in current.entries}
            store(mapping)
            stack.extend((value, partial(mapping.__setitem__, key)) for key, value in current.entries)
        elif isinstance(current, LabeledElement):
            children: list[Any] = [None] * len(current.children)
            store({"tag": current.tag, "attributes": current.attribute_map, "children": children})
            stack.extend((child, partial(children.__setitem__, index)) for index, child in enumerate(current.children))
        else:
            raise TypeError(f"Unsupported node type: {type(current).__name__}")
    return root[0]
