#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for treediff."""

from treediff.cli.main import create_parser, main

__all__ = ["create_parser", "main"]
