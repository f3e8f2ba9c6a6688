#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/treediff/diff/renderers/__init__.py
"""Renderers for diff records."""

from treediff.diff.renderers.json import JsonDiffRenderer
from treediff.diff.renderers.text import TextDiffRenderer

__all__ = [
    "JsonDiffRenderer",
    "TextDiffRenderer",
]
