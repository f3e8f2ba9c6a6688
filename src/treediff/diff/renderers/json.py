#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/diff/renderers/json.py
"""JSON diff renderer for structured output.

This renderer serializes diff records into machine-readable JSON for
programmatic processing.
"""

from __future__ import annotations

import json
from collections import Counter
from typing import Any, Dict, Iterable, Optional, Union

from treediff.diff.multiset import MultisetResult
from treediff.diff.records import DiffRecord


class JsonDiffRenderer:
    """Render diff records as structured JSON.

    Parameters
    ----------
    pretty_print : bool, default = True
        If True, format JSON with indentation
    indent : int, default = 2
        Number of spaces for indentation (if pretty_print=True)

    Examples
    --------
    Render diff as JSON:
        >>> from treediff import compare
        >>> renderer = JsonDiffRenderer()
        >>> json_output = renderer.render(compare('{"a": 1}', '{"a": 2}'), kind="json", mode="full")

    """

    def __init__(
        self,
        pretty_print: bool = True,
        indent: int = 2,
    ):
        """Initialize the JSON diff renderer."""
        self.pretty_print = pretty_print
        self.indent = indent

    def render(
        self,
        diff: Union[Iterable[DiffRecord], MultisetResult],
        kind: Optional[str] = None,
        mode: Optional[str] = None,
    ) -> str:
        """Render records to a JSON string.

        Parameters
        ----------
        diff : iterable of DiffRecord or MultisetResult
            Records to render
        kind : str, optional
            Document kind, included in the output when given
        mode : str, optional
            Comparison mode, included in the output when given

        Returns
        -------
        str
            JSON document with ``differences`` and ``statistics`` keys

        """
        data = self.to_data(diff)
        if kind is not None:
            data["kind"] = kind
        if mode is not None:
            data["mode"] = mode

        if self.pretty_print:
            return json.dumps(data, indent=self.indent, ensure_ascii=False)
        else:
            return json.dumps(data, ensure_ascii=False)

    def to_data(self, diff: Union[Iterable[DiffRecord], MultisetResult]) -> Dict[str, Any]:
        """Build the JSON-serializable structure without encoding it."""
        if isinstance(diff, MultisetResult):
            data: Dict[str, Any] = {
                "type": "multiset_diff",
                "only_in_first": [list(row) for row in diff.only_in_first],
                "only_in_second": [list(row) for row in diff.only_in_second],
            }
            records = list(diff.iter_records())
        else:
            records = list(diff)
            data = {"type": "structural_diff"}

        data["differences"] = [record.to_dict() for record in records]
        by_kind = Counter(record.kind.value for record in records)
        data["statistics"] = {
            "total": len(records),
            "by_kind": dict(sorted(by_kind.items())),
            "identical": not records,
        }
        return data
