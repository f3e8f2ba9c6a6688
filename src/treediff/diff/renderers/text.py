#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/diff/renderers/text.py
"""Plain and colorized text rendering of diff records.

Plain rendering is one message per record. Colorized rendering produces
``rich.text.Text`` lines for terminal display:
- Red for content only in the first document (``-`` lines, first-side items)
- Green for content only in the second document (``+`` lines, second-side items)
- Yellow for changed values, attributes and tags
"""

from __future__ import annotations

from typing import Iterable, Iterator

from rich.text import Text

from treediff.diff.records import DiffKind, DiffRecord, Side

_CHANGE_STYLE = "yellow"
_FIRST_STYLE = "red"
_SECOND_STYLE = "green"


def record_style(record: DiffRecord) -> str:
    """Return the rich style used for a record."""
    if record.kind is DiffKind.LINE_REMOVED:
        return _FIRST_STYLE
    if record.kind is DiffKind.LINE_ADDED:
        return _SECOND_STYLE
    if record.side is Side.FIRST:
        return _FIRST_STYLE
    if record.side is Side.SECOND:
        return _SECOND_STYLE
    return _CHANGE_STYLE


class TextDiffRenderer:
    """Render diff records as text lines.

    Parameters
    ----------
    use_color : bool, default = False
        If True, :meth:`render_rich` styles each line; :meth:`render` always
        yields plain strings
    show_summary : bool, default = False
        If True, append a ``N difference(s)`` summary line

    Examples
    --------
    Print records:
        >>> from treediff import compare
        >>> renderer = TextDiffRenderer()
        >>> for line in renderer.render(compare('{"a": 1}', '{"a": 2}')):
        ...     print(line)
        Value diff at 'a': 1 != 2

    """

    def __init__(self, use_color: bool = False, show_summary: bool = False):
        """Initialize the text renderer."""
        self.use_color = use_color
        self.show_summary = show_summary

    def render(self, records: Iterable[DiffRecord]) -> Iterator[str]:
        """Yield one plain message per record."""
        count = 0
        for record in records:
            count += 1
            yield record.message
        if self.show_summary:
            yield _summary(count)

    def render_rich(self, records: Iterable[DiffRecord]) -> Iterator[Text]:
        """Yield one ``rich.text.Text`` line per record."""
        count = 0
        for record in records:
            count += 1
            style = record_style(record) if self.use_color else ""
            yield Text(record.message, style=style)
        if self.show_summary:
            yield Text(_summary(count), style="bold" if self.use_color else "")


def _summary(count: int) -> str:
    if count == 0:
        return "No differences found."
    return f"{count} difference{'s' if count != 1 else ''}"
