#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the scidoc library.

This module defines the exception classes raised for caller configuration
errors. Failing to find a match or to place a node in a rendered string is
an expected outcome and is reported through ``None`` or empty results, never
through these exceptions.

Exception Hierarchy
-------------------
- ScidocError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for renderer)
    - FactoryRequiredError (raw data supplied without a node factory)

  - FormatError (unsupported/unknown export formats)

"""

from __future__ import annotations

from typing import Any, Sequence


class ScidocError(Exception):
    """Base exception class for all scidoc-specific errors.

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


class ValidationError(ScidocError):
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

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

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


class InvalidOptionsError(ValidationError):
    """Exception raised when incorrect options class is provided to a renderer.

    Parameters
    ----------
    renderer_name : str
        Name of the renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        renderer_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{renderer_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'. "
                f"Please provide the correct options type for the renderer."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.renderer_name = renderer_name
        self.expected_type = expected_type
        self.received_type = received_type


class FactoryRequiredError(ValidationError):
    """Exception raised when raw node data is exported without a node factory.

    Parameters
    ----------
    message : str, optional
        Custom error message

    """

    def __init__(self, message: str | None = None):
        """Initialize the error."""
        super().__init__(
            message or "A node factory is required to convert raw data to nodes",
            parameter_name="factory",
        )


class FormatError(ScidocError):
    """Exception raised for unknown or unsupported export formats.

    Parameters
    ----------
    format_name : str
        The format string that was requested
    supported_formats : sequence of str, optional
        Formats that would have been accepted
    message : str, optional
        Custom error message

    Attributes
    ----------
    format_name : str
        The rejected format string
    supported_formats : list[str]
        Accepted format strings

    """

    def __init__(
        self,
        format_name: str,
        supported_formats: Sequence[str] | None = None,
        message: str | None = None,
    ):
        """Initialize the format error."""
        self.format_name = format_name
        self.supported_formats = list(supported_formats or [])
        if message is None:
            message = f"Unknown format '{format_name}'"
            if self.supported_formats:
                message += f". Supported formats: {', '.join(self.supported_formats)}"
        super().__init__(message)
