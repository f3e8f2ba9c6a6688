#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/treediff/cli/main.py
"""Command-line interface for treediff.

Compare two documents and print their differences, like ``diff`` but aware
of JSON, YAML, XML and CSV structure.

Examples
--------
Order-insensitive JSON comparison:
    $ treediff old.json new.json

Keep array order:
    $ treediff old.json new.json --mode ordered

CSV rows as multisets, skipping the header row:
    $ treediff a.csv b.csv --ignore-header

Structured output:
    $ treediff a.xml b.xml --format json --output diff.json

Exit status follows ``diff``: 0 when the documents are equivalent, 1 when
differences were found, and 2 or more on errors.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from treediff import __version__
from treediff.cli.config import load_config_with_priority, options_for_kind
from treediff.cli.output import print_records, should_use_color
from treediff.constants import (
    CONFIG_ENV_VAR,
    DEFAULT_DOCUMENT_KIND,
    DOCUMENT_KINDS,
    EXTENSION_DELIMITERS,
    EXTENSION_KINDS,
)
from treediff.diff.api import compare
from treediff.diff.renderers.json import JsonDiffRenderer
from treediff.exceptions import ConfigError, FileError, ParseError, ValidationError
from treediff.logging_utils import configure_logging
from treediff.options import CompareOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_DIFFERENCES = 1
EXIT_VALIDATION_ERROR = 2
EXIT_PARSING_ERROR = 3
EXIT_FILE_ERROR = 4

# Kinds that only make sense for in-memory input
_CLI_KINDS = [kind for kind in DOCUMENT_KINDS if kind not in ("tree", "rows")]


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the treediff command.

    Option defaults are None so that values from a config file are only
    overridden by flags the user actually passed.
    """
    parser = argparse.ArgumentParser(
        prog="treediff",
        description="Compare two JSON, YAML, XML, CSV or text documents structurally.",
    )
    parser.add_argument("first", help="First document (use '-' for stdin)")
    parser.add_argument("second", help="Second document (use '-' for stdin)")

    parser.add_argument(
        "--kind",
        "-k",
        choices=_CLI_KINDS,
        help="Document kind (default: detected from the first file's extension, else json)",
    )
    parser.add_argument(
        "--mode",
        "-m",
        help="Comparison mode: full (default, order-insensitive), ordered, or exact",
    )
    parser.add_argument(
        "--ignore-header",
        dest="ignore_header",
        action="store_const",
        const=True,
        help="Exclude the first row of each CSV document",
    )
    parser.add_argument(
        "--keep-empty-rows",
        dest="ignore_empty_rows",
        action="store_const",
        const=False,
        help="Compare blank CSV rows instead of skipping them",
    )
    parser.add_argument("--delimiter", "-d", help="CSV field delimiter (default: ',', use '\\t' for tabs)")

    parser.add_argument(
        "--format",
        "-f",
        choices=["text", "json"],
        default="text",
        help="Output format: text (default, one line per difference) or json",
    )
    parser.add_argument("--output", "-o", help="Write the diff to a file (default: stdout)")
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Colorize text output: auto (default, if terminal), always, never",
    )
    parser.add_argument("--summary", action="store_true", help="Append a count of differences to text output")

    parser.add_argument("--config", help="Configuration file (JSON, TOML or YAML)")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("--trace", action="store_true", help="Verbose log format with timestamps")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _named_document(parsed: argparse.Namespace) -> str:
    return parsed.first if parsed.first != "-" else parsed.second


def detect_kind(path: str) -> str:
    """Guess the document kind from a file extension."""
    if path == "-":
        return DEFAULT_DOCUMENT_KIND
    return EXTENSION_KINDS.get(Path(path).suffix.lower(), DEFAULT_DOCUMENT_KIND)


def read_document(path: str) -> str:
    """Read a document from a path, or from stdin when path is '-'.

    Raises
    ------
    FileError
        If the file cannot be read or stdin is empty

    """
    if path == "-":
        data = sys.stdin.read()
        if not data:
            raise FileError("No data received from stdin", file_path="-")
        return data

    file_path = Path(path)
    if not file_path.is_file():
        raise FileError(f"Source file not found: {path}", file_path=path)
    try:
        return file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(f"Cannot read {path}: {e}", file_path=path, original_error=e) from e


def build_options(parsed: argparse.Namespace, kind: str) -> CompareOptions:
    """Combine config file values and command-line flags into options.

    A CSV document named with a tab-separated extension such as ``.tsv``
    defaults to a tab delimiter unless the config or ``--delimiter`` sets one.

    Raises
    ------
    ConfigError
        If a configuration file is given but cannot be loaded

    """
    config = load_config_with_priority(parsed.config, os.environ.get(CONFIG_ENV_VAR))
    values: Dict[str, Any] = options_for_kind(config, kind)
    for name in ("mode", "ignore_header", "ignore_empty_rows", "delimiter"):
        value = getattr(parsed, name)
        if value is not None:
            values[name] = value
    if kind == "csv" and values.get("delimiter") is None:
        implied = EXTENSION_DELIMITERS.get(Path(_named_document(parsed)).suffix.lower())
        if implied is not None:
            logger.debug(f"Using delimiter {implied!r} implied by {_named_document(parsed)}")
            values["delimiter"] = implied
    return CompareOptions.from_mapping(values)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the treediff command.

    Parameters
    ----------
    argv : list[str], optional
        Command line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Exit code

    """
    parser = create_parser()
    try:
        parsed = parser.parse_args(argv)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else EXIT_SUCCESS

    configure_logging(parsed.log_level, log_file=parsed.log_file, trace_mode=parsed.trace)

    if parsed.first == "-" and parsed.second == "-":
        print("Error: Cannot read both documents from stdin", file=sys.stderr)
        return EXIT_FILE_ERROR

    kind = parsed.kind or detect_kind(_named_document(parsed))

    try:
        options = build_options(parsed, kind)
        text_a = read_document(parsed.first)
        text_b = read_document(parsed.second)
        logger.info(f"Comparing {parsed.first} and {parsed.second} as {kind} ({options.mode} mode)")
        records = compare(text_a, text_b, kind, options).to_list()
    except ConfigError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except ValidationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except ParseError as e:
        print(f"Parse error: {e.message}", file=sys.stderr)
        return EXIT_PARSING_ERROR
    except FileError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_FILE_ERROR

    exit_code = EXIT_DIFFERENCES if records else EXIT_SUCCESS

    if parsed.format == "json":
        output = JsonDiffRenderer().render(records, kind=kind, mode=options.mode)
        if parsed.output:
            Path(parsed.output).write_text(output + "\n", encoding="utf-8")
        else:
            print(output)
        return exit_code

    if parsed.output:
        with open(parsed.output, "w", encoding="utf-8") as f:
            print_records(records, use_color=parsed.color == "always", show_summary=parsed.summary, stream=f)
    else:
        print_records(records, use_color=should_use_color(parsed.color), show_summary=parsed.summary)

    return exit_code
