#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for treediff.

This module centralizes the literal types, defaults and lookup tables used
across the comparison engine, the parser adapters and the CLI.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Comparison Defaults - Mode and option defaults
3. Path and Rendering - Path separators and root labels
4. Configuration Discovery - Config file names and environment variables
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

ComparisonMode = Literal["exact", "full", "ordered"]
DocumentKind = Literal["text", "json", "yaml", "xml", "csv", "tree", "rows"]
SideName = Literal["first", "second"]
OutputFormat = Literal["text", "json"]
ColorMode = Literal["auto", "always", "never"]

# =============================================================================
# Comparison Defaults
# =============================================================================

COMPARISON_MODES: tuple[ComparisonMode, ...] = ("exact", "full", "ordered")

# Aliases accepted by the original JSON comparator
MODE_ALIASES: dict[str, ComparisonMode] = {
    "exact": "exact",
    "full": "full",
    "ordered": "ordered",
    "order": "ordered",
    "arrays": "ordered",
    "preserve": "ordered",
}

DEFAULT_MODE: ComparisonMode = "full"
DEFAULT_IGNORE_HEADER = False
DEFAULT_IGNORE_EMPTY_ROWS = True
DEFAULT_CSV_DELIMITER = ","
DEFAULT_DOCUMENT_KIND: DocumentKind = "json"

TREE_KINDS: frozenset[str] = frozenset({"json", "yaml", "xml", "tree"})
ROW_KINDS: frozenset[str] = frozenset({"csv", "rows"})
TEXT_KINDS: frozenset[str] = frozenset({"text"})
DOCUMENT_KINDS: tuple[DocumentKind, ...] = ("text", "json", "yaml", "xml", "csv", "tree", "rows")

# Labels used in parse error messages, indexed by side
SIDE_LABELS: dict[SideName, str] = {"first": "A", "second": "B"}

# =============================================================================
# Path and Rendering
# =============================================================================

ROOT_PATH_LABEL = "/"
KEY_SEPARATOR = "."
ELEMENT_SEPARATOR = "/"
TEXT_SEGMENT = "#text"

# =============================================================================
# Configuration Discovery
# =============================================================================

CONFIG_FILENAMES = [".treediff.toml", ".treediff.yaml", ".treediff.yml", ".treediff.json"]
PYPROJECT_TOOL_SECTION = "treediff"
CONFIG_ENV_VAR = "TREEDIFF_CONFIG"

# File extension → document kind, used by the CLI when --kind is omitted
EXTENSION_KINDS: dict[str, DocumentKind] = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".xml": "xml",
    ".svg": "xml",
    ".xhtml": "xml",
    ".csv": "csv",
    ".tsv": "csv",
    ".txt": "text",
}

# Field delimiter implied by a file extension when none is configured
EXTENSION_DELIMITERS: dict[str, str] = {
    ".tsv": "\t",
}
