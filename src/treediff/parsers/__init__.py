#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/parsers/__init__.py
"""Parser adapters from raw document text to nodes or rows."""

from __future__ import annotations

from treediff.constants import DEFAULT_CSV_DELIMITER
from treediff.exceptions import ValidationError
from treediff.parsers.base import BaseParser
from treediff.parsers.csv import CsvParser
from treediff.parsers.json import JsonParser
from treediff.parsers.xml import XmlParser
from treediff.parsers.yaml import YamlParser

_TREE_PARSERS: dict[str, type[BaseParser]] = {
    "json": JsonParser,
    "yaml": YamlParser,
    "xml": XmlParser,
}


def get_parser(kind: str, delimiter: str = DEFAULT_CSV_DELIMITER) -> BaseParser:
    """Return a parser instance for a document kind.

    Parameters
    ----------
    kind : str
        One of ``json``, ``yaml``, ``xml`` or ``csv``
    delimiter : str, default ","
        Field delimiter for ``csv``

    Raises
    ------
    ValidationError
        If no parser exists for ``kind``

    """
    if kind == "csv":
        return CsvParser(delimiter=delimiter)
    try:
        return _TREE_PARSERS[kind]()
    except KeyError:
        raise ValidationError(
            f"No parser for document kind: {kind}", parameter_name="kind", parameter_value=kind
        ) from None


__all__ = [
    "BaseParser",
    "CsvParser",
    "JsonParser",
    "XmlParser",
    "YamlParser",
    "get_parser",
]
