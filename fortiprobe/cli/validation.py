#!/usr/bin/env python3
"""
FortiProbe Input Validation Module

Validates command-line input before it reaches the configuration or
the HTTP client.
"""

import re
import unicodedata
from typing import Optional

from ..client import normalize_target
from ..core.exceptions import ConfigValidationError

_SIZE_PATTERN = re.compile(r'^([\d.]+)([KMG])?B?$', re.IGNORECASE)
_SIZE_MULTIPLIERS = {None: 1, 'K': 1024, 'M': 1024 ** 2, 'G': 1024 ** 3}


class InputValidator:
    """Validation helpers for CLI arguments"""

    @staticmethod
    def sanitize_string(input_str: str, max_length: int = 255) -> Optional[str]:
        """
        Strip control characters and surrounding whitespace

        Args:
            input_str: String to sanitize
            max_length: Maximum allowed length

        Returns:
            Sanitized string or None if invalid
        """
        if not isinstance(input_str, str) or not input_str.strip():
            return None

        sanitized = ''.join(
            char for char in input_str
            if unicodedata.category(char)[0] != 'C'
        )

        if len(sanitized) > max_length:
            return None

        return sanitized.strip()

    @classmethod
    def validate_port(cls, port_value) -> Optional[int]:
        """
        Args:
            port_value: Port number (string or int)

        Returns:
            Valid port number or None
        """
        try:
            if isinstance(port_value, str):
                sanitized = cls.sanitize_string(port_value, max_length=10)
                if not sanitized:
                    return None
                port = int(sanitized)
            else:
                port = int(port_value)
        except (ValueError, TypeError):
            return None

        if not (1 <= port <= 65535):
            return None
        return port

    @classmethod
    def validate_target(cls, url: str) -> Optional[str]:
        """
        Args:
            url: Target base URL

        Returns:
            Normalized http(s) URL or None
        """
        sanitized = cls.sanitize_string(url, max_length=2048)
        if not sanitized:
            return None
        try:
            return normalize_target(sanitized)
        except ConfigValidationError:
            return None


def parse_size(size_str: str) -> Optional[int]:
    """
    Parse a size string with optional suffix (K, M, G) to bytes

    Args:
        size_str: Size string (e.g., "10M", "1G", "500K")

    Returns:
        Size in bytes or None if invalid
    """
    sanitized = InputValidator.sanitize_string(size_str, max_length=20)
    if not sanitized:
        return None

    match = _SIZE_PATTERN.match(sanitized)
    if not match:
        return None

    num_str, suffix = match.groups()
    try:
        num = float(num_str)
    except ValueError:
        return None

    return int(num * _SIZE_MULTIPLIERS[suffix.upper() if suffix else None])
