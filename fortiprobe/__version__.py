#!/usr/bin/env python3
"""
FortiProbe Version Information

Single source of truth for version information.
All other version references should import from here.

Usage:
    from fortiprobe.__version__ import __version__

    print(f"FortiProbe v{__version__}")
"""
from pathlib import Path

# Read version from VERSION file (single source of truth)
_version_file = Path(__file__).parent.parent / 'VERSION'
try:
    with open(_version_file, 'r') as f:
        __version__ = f.read().strip()
except FileNotFoundError:
    __version__ = '0.0.0-dev'

# Package metadata
__author__ = 'FortiProbe Team'
__license__ = 'Apache-2.0'
__description__ = 'Prometheus exporter for FortiGate HA checksum consistency'

# Version info tuple for programmatic comparison
# Example: (0, 3, 0)
try:
    VERSION_INFO = tuple(int(x) for x in __version__.split('-')[0].split('.'))
except (ValueError, AttributeError):
    VERSION_INFO = (0, 0, 0)


def get_version() -> str:
    """
    Return the version string.

    Returns:
        str: Version string (e.g., "0.3.0")
    """
    return __version__


def get_version_info() -> tuple:
    """
    Return version as tuple for programmatic comparison.

    Returns:
        tuple: Version tuple (e.g., (0, 3, 0))
    """
    return VERSION_INFO


def get_version_string_detailed() -> str:
    """
    Get version string for --version output and the landing page.

    Returns:
        str: e.g. "FortiProbe v0.3.0 [BETA]"
    """
    beta_marker = ' [BETA]' if VERSION_INFO[0] == 0 else ''
    return f"FortiProbe v{__version__}{beta_marker}"


__all__ = [
    '__version__',
    '__author__',
    '__license__',
    '__description__',
    'VERSION_INFO',
    'get_version',
    'get_version_info',
    'get_version_string_detailed',
]
