#!/usr/bin/env python3
"""
FortiProbe Server Commands Module

Runs the HTTP exporter and validates configuration files.
"""

import logging
from typing import Dict

from .. import config
from ..config import ExporterConfig, TargetConfig, load_exporter_config, load_targets
from ..core.exceptions import ConfigurationError
from ..server import run_server

logger = logging.getLogger("fortiprobe")


def serve(exporter_config: ExporterConfig, targets: Dict[str, TargetConfig]) -> int:
    """
    Run the exporter in the foreground until interrupted

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    if not targets:
        logger.warning("No targets configured; every /probe request will be rejected")

    try:
        run_server(exporter_config, targets)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except OSError as e:
        logger.error(
            f"Cannot listen on {exporter_config.listen_address}:{exporter_config.listen_port}: {e}")
        return 1
    return 0


def check_config() -> int:
    """
    Load both configuration files and print a summary

    The exporter file is optional, the targets file is not.

    Returns:
        Exit code (0 if both files are valid, 1 otherwise)
    """
    try:
        exporter_config = load_exporter_config()
        targets = load_targets(required=True)
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return 1

    print(f"Config directory: {config.CONFIG_DIR}")
    print(f"  {exporter_config}")
    print(f"  Targets: {len(targets)}")
    for target, target_config in sorted(targets.items()):
        auth = "token" if target_config.token else "no token"
        tls = "insecure" if target_config.insecure else "verified TLS"
        print(f"    {target} ({auth}, {tls})")
        if target_config.include:
            print(f"      include: {', '.join(target_config.include)}")
        if target_config.exclude:
            print(f"      exclude: {', '.join(target_config.exclude)}")
    return 0
