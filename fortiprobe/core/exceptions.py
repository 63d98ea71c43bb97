#!/usr/bin/env python3
"""
FortiProbe Core Exceptions

Custom exception hierarchy for FortiProbe.
Provides specific exception types for configuration and fetch failures
so callers can tell a bad config file apart from an unreachable device.
"""

from typing import Optional, Any


class FortiProbeError(Exception):
    """
    Base exception for all FortiProbe errors.

    All custom exceptions in FortiProbe inherit from this class,
    allowing for catch-all error handling when needed.
    """

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


# =============================================================================
# CONFIGURATION EXCEPTIONS
# =============================================================================

class ConfigurationError(FortiProbeError):
    """
    Exception for configuration-related errors.

    Raised when configuration files are invalid, missing,
    or contain incorrect values.
    """
    pass


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when a required configuration file is not found."""

    def __init__(self, file_path: str):
        super().__init__(
            "Configuration file not found",
            details=file_path
        )
        self.file_path = file_path


class ConfigParseError(ConfigurationError):
    """Raised when a configuration file cannot be parsed."""

    def __init__(self, file_path: str, parse_error: str):
        super().__init__(
            "Failed to parse configuration file",
            details=f"{file_path}: {parse_error}"
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration value for '{field}'",
            details=f"value={value!r}, reason={reason}"
        )
        self.field = field
        self.value = value
        self.reason = reason


# =============================================================================
# FETCH EXCEPTIONS
# =============================================================================

class FetchError(FortiProbeError):
    """
    Exception for failures retrieving data from a device.

    Covers the whole fetch boundary: network errors, unexpected HTTP
    status codes and bodies that do not decode into the expected shape.
    A probe that sees one of these aborts the current poll only.
    """

    def __init__(self, message: str, details: Optional[Any] = None,
                 target: Optional[str] = None):
        if target:
            message = f"{message} ({target})"
        super().__init__(message, details)
        self.target = target


class TransportError(FetchError):
    """Raised when the HTTP request itself fails (connect, TLS, timeout)."""
    pass


class HTTPStatusError(FetchError):
    """Raised when the device answers with a non-200 status."""

    def __init__(self, status_code: int, url: str, target: Optional[str] = None):
        super().__init__(
            f"Unexpected HTTP status {status_code}",
            details=url,
            target=target
        )
        self.status_code = status_code
        self.url = url


class DecodeError(FetchError):
    """Raised when a response body is not the expected JSON shape."""
    pass


__all__ = [
    'FortiProbeError',
    'ConfigurationError',
    'ConfigFileNotFoundError',
    'ConfigParseError',
    'ConfigValidationError',
    'FetchError',
    'TransportError',
    'HTTPStatusError',
    'DecodeError',
]
