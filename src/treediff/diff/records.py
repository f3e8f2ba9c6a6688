#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/diff/records.py
"""Diff records and the lazy stream that carries them.

A :class:`DiffRecord` is one reported unit of divergence between two
documents, tagged by kind and anchored to a path. ``str(record)`` gives the
human-readable message; :meth:`DiffRecord.to_dict` gives the structured form.

A :class:`DiffStream` is a restartable, lazily evaluated sequence of records.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from itertools import islice
from typing import Any, Callable, Iterator, Optional

from treediff.constants import ROOT_PATH_LABEL
from treediff.tree.nodes import LabeledElement, Node, node_type_name, render_node, to_python


class DiffKind(str, Enum):
    """Kinds of reported divergence."""

    TAG_OR_TYPE = "tag_or_type"
    VALUE = "value"
    KEY_ONLY_IN = "key_only_in"
    ATTRIBUTE = "attribute"
    EXTRA_ITEM = "extra_item"
    LINE_REMOVED = "line_removed"
    LINE_ADDED = "line_added"
    ROW_ONLY_IN = "row_only_in"


class Side(str, Enum):
    """Which of the two compared documents a record refers to."""

    FIRST = "first"
    SECOND = "second"

    @property
    def opposite(self) -> "Side":
        return Side.SECOND if self is Side.FIRST else Side.FIRST


def _show_path(path: str) -> str:
    return path or ROOT_PATH_LABEL


def _show_attributes(attributes: Any) -> str:
    return json.dumps(dict(attributes or ()), ensure_ascii=False, sort_keys=True)


@dataclass(frozen=True)
class DiffRecord:
    """One reported difference.

    Parameters
    ----------
    kind : DiffKind
        What kind of divergence this is
    path : str
        Where in the document it occurred (dotted keys, ``[i]`` indices,
        ``/tag`` element segments, or ``line:N`` for text)
    left : Any, optional
        Value on the first side (a node, attribute pairs, a line or a row)
    right : Any, optional
        Value on the second side
    side : Side, optional
        For one-sided records, the document that holds the extra content
    index : int, optional
        Position of an extra item, line or row

    """

    kind: DiffKind
    path: str
    left: Any = None
    right: Any = None
    side: Optional[Side] = None
    index: Optional[int] = None

    def __str__(self) -> str:
        return self.message

    @property
    def message(self) -> str:
        """Human-readable description of the difference."""
        where = _show_path(self.path)
        kind = self.kind

        if kind is DiffKind.TAG_OR_TYPE:
            if isinstance(self.left, LabeledElement) and isinstance(self.right, LabeledElement):
                return f"Tag diff at {where}: {self.left.tag} != {self.right.tag}"
            return f"Type diff at '{where}': {_type_label(self.left)} != {_type_label(self.right)}"
        if kind is DiffKind.VALUE:
            return f"Value diff at '{where}': {render_node(self.left)} != {render_node(self.right)}"
        if kind is DiffKind.KEY_ONLY_IN:
            return f"Key '{where}' only in {self.side.value} file."  # type: ignore[union-attr]
        if kind is DiffKind.ATTRIBUTE:
            return f"Attrib diff at {where}: {_show_attributes(self.left)} != {_show_attributes(self.right)}"
        if kind is DiffKind.EXTRA_ITEM:
            return f"Item '{where}' only in {self.side.value}."  # type: ignore[union-attr]
        if kind is DiffKind.LINE_REMOVED:
            return f"- {self.left}"
        if kind is DiffKind.LINE_ADDED:
            return f"+ {self.right}"
        if kind is DiffKind.ROW_ONLY_IN:
            row = self.left if self.side is Side.FIRST else self.right
            return f"Row {json.dumps(list(row), ensure_ascii=False)} only in {self.side.value} file."  # type: ignore
        return f"{kind.value} at {where}"

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict of this record."""
        data: dict[str, Any] = {
            "kind": self.kind.value,
            "path": self.path,
            "left": _to_jsonable(self.left, self.kind),
            "right": _to_jsonable(self.right, self.kind),
            "message": self.message,
        }
        if self.side is not None:
            data["side"] = self.side.value
        if self.index is not None:
            data["index"] = self.index
        return data


def _type_label(node: Any) -> str:
    return node_type_name(node) if isinstance(node, Node) else type(node).__name__


def _to_jsonable(value: Any, kind: DiffKind) -> Any:
    if value is None:
        return None
    if isinstance(value, Node):
        return to_python(value)
    # Attribute pairs are a mapping even when empty; rows are always lists
    if kind is DiffKind.ATTRIBUTE:
        return dict(value)
    if isinstance(value, tuple):
        return list(value)
    return value


class DiffStream:
    """A restartable, lazily evaluated sequence of diff records.

    Each call to ``iter()`` invokes ``factory`` afresh, so iterating twice
    yields the same records and no cursor is shared between consumers.
    Stopping iteration early stops the underlying walk.

    Parameters
    ----------
    factory : callable
        Zero-argument callable returning a fresh iterator of records

    Examples
    --------
    >>> stream = DiffStream(lambda: iter([]))
    >>> stream.is_empty()
    True

    """

    def __init__(self, factory: Callable[[], Iterator[DiffRecord]]) -> None:
        """Store the record factory."""
        self._factory = factory

    def __iter__(self) -> Iterator[DiffRecord]:
        return iter(self._factory())

    def first(self, count: int = 1) -> list[DiffRecord]:
        """Return at most ``count`` records without walking further."""
        return list(islice(self, count))

    def is_empty(self) -> bool:
        """Whether the compared documents have no differences."""
        return not self.first()

    def to_list(self) -> list[DiffRecord]:
        return list(self)

    def lines(self) -> Iterator[str]:
        """Yield the human-readable message of each record."""
        for record in self:
            yield record.message

    @classmethod
    def from_records(cls, records: list[DiffRecord]) -> "DiffStream":
        """Wrap an already computed list of records."""
        frozen = tuple(records)
        return cls(lambda: iter(frozen))
