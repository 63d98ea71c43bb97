#!/usr/bin/env python3
"""
FortiProbe Core Module

Provides shared constants, types, and exceptions used across all FortiProbe modules.
"""

from .types import (
    HAChecksum,
    HAChecksumMember,
    HAChecksumResponse,
    MetricDesc,
    MetricObservation,
)

from .exceptions import (
    FortiProbeError,
    ConfigurationError,
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    FetchError,
    TransportError,
    HTTPStatusError,
    DecodeError,
)

__all__ = [
    # Types
    'HAChecksum',
    'HAChecksumMember',
    'HAChecksumResponse',
    'MetricDesc',
    'MetricObservation',
    # Exceptions
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
