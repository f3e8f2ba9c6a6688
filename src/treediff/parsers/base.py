#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/parsers/base.py
"""Base class for document parsers.

Parsers turn the raw text of one side of a comparison into the canonical
node model (or, for tabular kinds, into rows). Any failure is reported as a
:class:`~treediff.exceptions.ParseError` naming the side that failed, so
the dispatcher can abort the comparison before any diffing starts.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from treediff.constants import SIDE_LABELS, SideName
from treediff.exceptions import ParseError, ValidationError

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Abstract base class for all document parsers.

    Subclasses set :attr:`kind` and :attr:`display_name` and implement
    :meth:`_parse_text`. Exceptions raised by :meth:`_parse_text` are wrapped
    into :class:`ParseError` by :meth:`parse`.

    Examples
    --------
    Implement a custom parser:
        >>> class UpperParser(BaseParser):
        ...     kind = "upper"
        ...     display_name = "UPPER"
        ...     def _parse_text(self, text):
        ...         return text.upper()

    """

    kind: str = ""
    display_name: str = ""
    #: Exception types that indicate malformed input rather than a bug
    parse_exceptions: tuple[type[BaseException], ...] = (ValueError,)

    def parse(self, text: str, side: SideName = "first") -> Any:
        """Parse one side of a comparison.

        Parameters
        ----------
        text : str
            Raw document text
        side : {"first", "second"}, default "first"
            Which document is being parsed, used in error messages

        Returns
        -------
        Any
            The parsed document (a Node, or a list of rows)

        Raises
        ------
        ValidationError
            If ``text`` is not a string
        ParseError
            If the text is malformed, or nested deeper than the underlying
            library can parse

        """
        if isinstance(text, bytes):
            text = text.decode("utf-8-sig")
        if not isinstance(text, str):
            raise ValidationError(
                f"{self.display_name} input must be a string, got {type(text).__name__}",
                parameter_name=f"doc_{side}",
                parameter_value=type(text).__name__,
            )

        logger.debug(f"Parsing {self.kind} document ({side} side, {len(text)} chars)")
        try:
            return self._parse_text(text)
        except RecursionError as e:
            raise ParseError(
                side,
                f"File {SIDE_LABELS.get(side, side)} is not valid {self.display_name}: nesting is too deep to parse",
                document_kind=self.kind,
                original_error=e,
            ) from e
        except self.parse_exceptions as e:
            raise ParseError(
                side,
                f"File {SIDE_LABELS.get(side, side)} is not valid {self.display_name}: {_describe(e)}",
                document_kind=self.kind,
                original_error=e if isinstance(e, Exception) else None,
            ) from e

    @abstractmethod
    def _parse_text(self, text: str) -> Any:
        """Parse raw text; raise one of :attr:`parse_exceptions` on bad input."""
        raise NotImplementedError


def _describe(error: BaseException) -> str:
    return " ".join(str(error).split()) or type(error).__name__
