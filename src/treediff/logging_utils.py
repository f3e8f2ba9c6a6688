"""Logging setup for the treediff command line.

Handlers are attached to the ``treediff`` package logger only, so running
the CLI from inside another application never replaces that application's
root handlers. Library code just logs through ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "treediff"

_PLAIN_FORMAT = "%(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s:%(lineno)d] %(message)s"
_TRACE_DATE_FORMAT = "%H:%M:%S"


def resolve_level(log_level: int | str) -> int:
    """Turn a level name or number into a numeric level; unknown names mean WARNING."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def _formatter(trace_mode: bool) -> logging.Formatter:
    if trace_mode:
        return logging.Formatter(_TRACE_FORMAT, datefmt=_TRACE_DATE_FORMAT)
    return logging.Formatter(_PLAIN_FORMAT)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Send treediff log records to stderr and, optionally, a file.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "DEBUG").
    log_file : str, optional
        Path of a file that receives the same records, appended to.
    trace_mode : bool, default False
        Prefix records with a timestamp, the logger name and line number.

    Returns
    -------
    logging.Logger
        The ``treediff`` package logger.

    """
    level = resolve_level(log_level)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    # Repeated calls (tests, embedding) replace earlier handlers
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = _formatter(trace_mode)
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    package_logger.addHandler(stderr_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning(f"Cannot open log file {log_file}: {exc}")
        else:
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
            package_logger.debug(f"Writing log to {log_file}")

    return package_logger
