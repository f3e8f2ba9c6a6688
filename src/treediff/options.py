#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/options.py
"""Comparison options.

This module defines the immutable options object handed to the comparison
dispatcher, and the lenient conversion from loosely-typed configuration
mappings (config files, CLI namespaces, JSON payloads) into it.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from treediff.constants import (
    DEFAULT_CSV_DELIMITER,
    DEFAULT_IGNORE_EMPTY_ROWS,
    DEFAULT_IGNORE_HEADER,
    DEFAULT_MODE,
    MODE_ALIASES,
    ComparisonMode,
)

logger = logging.getLogger(__name__)

# camelCase spellings used by the browser tools
_KEY_ALIASES = {
    "ignoreHeader": "ignore_header",
    "ignoreEmptyRows": "ignore_empty_rows",
    "ignoreEmpty": "ignore_empty_rows",
    "orderSensitive": "order_sensitive",
}

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


def resolve_mode(value: Any) -> ComparisonMode | None:
    """Map a user-supplied mode name to a comparison mode.

    Parameters
    ----------
    value : Any
        Mode name, case-insensitive. Aliases ``order``, ``arrays`` and
        ``preserve`` map to ``ordered``.

    Returns
    -------
    ComparisonMode or None
        The resolved mode, or None when the value is not recognized

    """
    if not isinstance(value, str):
        return None
    return MODE_ALIASES.get(value.strip().lower())


def _coerce_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class CompareOptions(CloneFrozenMixin):
    r"""Options controlling a single comparison.

    Parameters
    ----------
    mode : {"exact", "full", "ordered"}, default "full"
        ``exact`` compares raw text line by line, ``full`` compares structure
        ignoring sequence order, ``ordered`` compares structure keeping it.
    ignore_header : bool, default False
        Drop the first row of each row collection before comparing.
    ignore_empty_rows : bool, default True
        Drop rows whose cells are all empty after trimming.
    delimiter : str, default ","
        Field delimiter used when CSV text is parsed.
    order_sensitive : bool or None, default None
        XML-style switch. When given and ``mode`` was not set explicitly
        through :meth:`from_mapping`, True selects ``ordered`` and False
        selects ``full``.

    Notes
    -----
    Values that are not recognized fall back to their defaults instead of
    raising; a warning is logged for each fallback.

    """

    mode: ComparisonMode = field(
        default=DEFAULT_MODE,
        metadata={"help": "Comparison mode: exact, full (order-insensitive) or ordered", "importance": "core"},
    )
    ignore_header: bool = field(
        default=DEFAULT_IGNORE_HEADER,
        metadata={"help": "Exclude the first row of each side from row comparison", "importance": "core"},
    )
    ignore_empty_rows: bool = field(
        default=DEFAULT_IGNORE_EMPTY_ROWS,
        metadata={"help": "Skip rows whose cells are all blank", "importance": "core"},
    )
    delimiter: str = field(
        default=DEFAULT_CSV_DELIMITER,
        metadata={"help": "CSV field delimiter (single character)", "importance": "advanced"},
    )
    order_sensitive: bool | None = field(
        default=None,
        metadata={"help": "XML child order matters (alias for mode=ordered)", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Normalize option values, falling back to defaults when unrecognized."""
        mode = resolve_mode(self.mode)
        if mode is None:
            logger.warning(f"Unrecognized comparison mode {self.mode!r}, using {DEFAULT_MODE!r}")
            mode = DEFAULT_MODE
        object.__setattr__(self, "mode", mode)

        for name, default in (
            ("ignore_header", DEFAULT_IGNORE_HEADER),
            ("ignore_empty_rows", DEFAULT_IGNORE_EMPTY_ROWS),
        ):
            coerced = _coerce_bool(getattr(self, name))
            if coerced is None:
                logger.warning(f"Unrecognized value {getattr(self, name)!r} for {name}, using {default!r}")
                coerced = default
            object.__setattr__(self, name, coerced)

        if self.order_sensitive is not None:
            object.__setattr__(self, "order_sensitive", _coerce_bool(self.order_sensitive))

        if not isinstance(self.delimiter, str) or len(self.delimiter) != 1:
            if self.delimiter == "\\t":
                object.__setattr__(self, "delimiter", "\t")
            else:
                logger.warning(f"Invalid delimiter {self.delimiter!r}, using {DEFAULT_CSV_DELIMITER!r}")
                object.__setattr__(self, "delimiter", DEFAULT_CSV_DELIMITER)

    @property
    def structural(self) -> bool:
        """Whether this comparison parses and walks document structure."""
        return self.mode != "exact"

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any] | None) -> "CompareOptions":
        """Build options from a loosely-typed configuration mapping.

        Both snake_case and camelCase keys are accepted. Unknown keys are
        ignored with a debug message; unrecognized values fall back to
        defaults.

        Parameters
        ----------
        config : Mapping or None
            Configuration values, e.g. loaded from a config file

        Returns
        -------
        CompareOptions
            Resolved options

        Examples
        --------
        >>> CompareOptions.from_mapping({"mode": "arrays", "ignoreHeader": True}).mode
        'ordered'

        """
        if not config:
            return cls()

        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for raw_key, value in config.items():
            key = _KEY_ALIASES.get(raw_key, raw_key)
            if key not in known:
                logger.debug(f"Ignoring unknown option {raw_key!r}")
                continue
            if value is None:
                continue
            values[key] = value

        # orderSensitive only decides the mode when no explicit mode was given
        order_sensitive = _coerce_bool(values.get("order_sensitive"))
        if "mode" not in values and order_sensitive is not None:
            values["mode"] = "ordered" if order_sensitive else "full"

        return cls(**values)
