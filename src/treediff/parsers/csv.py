#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/parsers/csv.py
"""CSV/TSV text to rows.

Rows are returned as tuples of cell strings, exactly as read: quoted fields
keep embedded delimiters and newlines, and doubled quotes collapse to one.
Header and empty-row handling belongs to the multiset differ, not here.
"""

from __future__ import annotations

import csv
import io
import logging
from typing import Any

from treediff.constants import DEFAULT_CSV_DELIMITER
from treediff.parsers.base import BaseParser

logger = logging.getLogger(__name__)


def _make_csv_dialect(
    delimiter: str | None = None,
    quotechar: str | None = None,
) -> type[csv.Dialect]:
    r"""Create a CSV dialect class with custom parameters.

    Parameters
    ----------
    delimiter : str | None, default None
        The delimiter character (e.g., ',', '\\t', ';', '|')
    quotechar : str | None, default None
        The quote character (e.g., '"', "'")

    Returns
    -------
    type[csv.Dialect]
        A dialect class based on csv.excel with the specified parameters

    """
    attrs: dict[str, Any] = {}
    if delimiter is not None:
        attrs["delimiter"] = delimiter
    if quotechar is not None:
        attrs["quotechar"] = quotechar

    return type("CustomDialect", (csv.excel,), attrs)


class CsvParser(BaseParser):
    """Parse delimiter-separated text into a list of rows.

    Parameters
    ----------
    delimiter : str, default ","
        Field delimiter. No sniffing is attempted.
    quotechar : str, default '"'
        Quote character

    """

    kind = "csv"
    display_name = "CSV"
    parse_exceptions = (csv.Error,)

    def __init__(self, delimiter: str = DEFAULT_CSV_DELIMITER, quotechar: str = '"') -> None:
        """Initialize the parser with its dialect."""
        self.dialect = _make_csv_dialect(delimiter=delimiter, quotechar=quotechar)

    def _parse_text(self, text: str) -> list[tuple[str, ...]]:
        reader = csv.reader(io.StringIO(text, newline=""), dialect=self.dialect)
        rows = [tuple(row) for row in reader]
        logger.debug(f"Read {len(rows)} CSV rows with delimiter {self.dialect.delimiter!r}")
        return rows
