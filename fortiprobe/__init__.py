#!/usr/bin/env python3
"""
FortiProbe - FortiGate HA Checksum Exporter

Polls the HA checksum endpoint of FortiGate appliances and exposes
per-member role and configuration synchronization gauges in
Prometheus format.
"""

# Import version information from single source of truth
from .__version__ import (
    __version__,
    __author__,
    __license__,
    __description__,
    get_version,
    get_version_info,
)

# Public API
__all__ = [
    '__version__',
    '__author__',
    '__license__',
    '__description__',
    'get_version',
    'get_version_info',
]

# Avoid circular imports - modules will be imported where needed
