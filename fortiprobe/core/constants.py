#!/usr/bin/env python3
"""
FortiProbe Core Constants

Centralized constants for FortiOS API paths, exported metric names
and exporter defaults.

All magic numbers and protocol-specific values should be defined here
to ensure consistency across the codebase.
"""

# =============================================================================
# FORTIOS API CONSTANTS
# =============================================================================

HA_CHECKSUMS_PATH = "api/v2/monitor/system/ha-checksums"
HA_CHECKSUMS_QUERY = "scope=global"


# =============================================================================
# METRIC NAMES AND LABELS
# =============================================================================

HA_MEMBER_HAS_ROLE = "fortigate_ha_member_has_role"
HA_CHECKSUM_SYNC = "fortigate_ha_checksum_sync"

PROBE_SUCCESS = "probe_success"
PROBE_DURATION_SECONDS = "probe_duration_seconds"

ROLE_MANAGE_MASTER = "manage_master"
ROLE_ROOT_MASTER = "root_master"

CHECKSUM_GLOBAL = "global"
CHECKSUM_ROOT = "root"
CHECKSUM_ALL = "all"
CHECKSUM_VDOM_PREFIX = "vdom_"

IN_SYNC = 1.0
OUT_OF_SYNC = 0.0


# =============================================================================
# EXPORTER DEFAULTS
# =============================================================================

DEFAULT_LISTEN_ADDRESS = "0.0.0.0"
DEFAULT_LISTEN_PORT = 9710

# Seconds; the fetch is bounded by this unless the scrape header is shorter
DEFAULT_TIMEOUT = 30.0
DEFAULT_TIMEOUT_OFFSET = 0.5

SCRAPE_TIMEOUT_HEADER = "X-Prometheus-Scrape-Timeout-Seconds"

USER_AGENT = "fortiprobe"
