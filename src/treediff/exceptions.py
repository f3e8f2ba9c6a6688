#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the treediff library.

This module defines the exception classes raised while preparing a
comparison. Once both documents have been parsed the diff engine itself
raises nothing: every structural asymmetry is reported as a diff record.

Exception Hierarchy
-------------------
- TreeDiffError (base exception)

  - ValidationError (parameter/option validation)
    - ConfigError (invalid or missing configuration)

  - ParseError (malformed input on a named side)

  - FileError (input files cannot be read)

"""

from typing import Any


class TreeDiffError(Exception):
    """Base exception class for all treediff-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(TreeDiffError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ConfigError(ValidationError):
    """Exception raised when configuration is missing or cannot be loaded.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    config_path : str, optional
        Path of the offending configuration file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, parameter_name="config", parameter_value=config_path, original_error=original_error)
        self.config_path = config_path


class ParseError(TreeDiffError):
    """Exception raised when one of the two documents cannot be parsed.

    The comparison is aborted as a whole; no partial result is produced.

    Parameters
    ----------
    side : {"first", "second"}
        Which document failed to parse
    message : str
        Human-readable description of the failure
    document_kind : str, optional
        Kind of document being parsed (json, xml, ...)
    original_error : Exception, optional
        The underlying parser exception

    Attributes
    ----------
    side : str
        Which document failed to parse
    document_kind : str or None
        Kind of document being parsed

    """

    def __init__(
        self,
        side: str,
        message: str,
        document_kind: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the parse error."""
        super().__init__(message, original_error)
        self.side = side
        self.document_kind = document_kind


class FileError(TreeDiffError):
    """Exception raised when an input document cannot be read.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the file that caused the error
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error."""
        super().__init__(message, original_error)
        self.file_path = file_path
