#!/usr/bin/env python3
"""
FortiProbe Probe Commands Module

One-shot probing of a single target from the command line.
"""

import sys
import logging
from typing import Dict, Optional

from ..client import FortiHTTP
from ..config import ExporterConfig, TargetConfig
from ..metrics import render_probe, write_textfile
from ..probe import TargetMetadata, select_probes

logger = logging.getLogger("fortiprobe")


def run_probe(target: str, exporter_config: ExporterConfig, targets: Dict[str, TargetConfig],
              token: Optional[str] = None, output: Optional[str] = None,
              insecure: bool = False) -> int:
    """
    Probe a target once.

    Args:
        target: Normalized target URL
        exporter_config: Exporter settings (timeout, TLS default)
        targets: Configured targets; used for token and probe selection
        token: API token overriding the targets file entry
        output: Write the metrics to this file instead of stdout
        insecure: Skip TLS verification

    Returns:
        Exit code (0 when every probe succeeded, 1 otherwise)
    """
    target_config = targets.get(target) or TargetConfig()
    if token is None:
        token = target_config.token
    if not token:
        logger.warning(f"No API token for {target}, sending unauthenticated requests")

    verify = not (insecure or target_config.insecure or exporter_config.insecure)
    probes = select_probes(target_config.include, target_config.exclude)

    with FortiHTTP(target, token=token, verify=verify,
                   timeout=exporter_config.scrape_timeout) as client:
        payload, success = render_probe(client, TargetMetadata(target), probes)

    if output:
        try:
            write_textfile(output, payload)
        except OSError as e:
            logger.error(f"Failed to write metrics to {output}: {e}")
            return 1
        logger.info(f"Metrics for {target} written to {output}")
    else:
        sys.stdout.write(payload.decode("utf-8"))

    if not success:
        logger.error(f"Probe of {target} failed")
        return 1
    return 0
