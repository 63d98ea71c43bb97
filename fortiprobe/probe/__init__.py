#!/usr/bin/env python3
"""
FortiProbe Probe Registry

Every probe is a function ``probe(client, meta) -> (observations, success)``.
Probes are stateless; each call works on a fresh snapshot from the device.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..core.types import MetricObservation
from .ha_checksum import probe_system_ha_checksum

ProbeResult = Tuple[List[MetricObservation], bool]
ProbeFunc = Callable[..., ProbeResult]


@dataclass(frozen=True)
class TargetMetadata:
    """Information about the target handed to every probe."""
    target: str


# Ordered; probes run in this order on every scrape
PROBES: List[Tuple[str, ProbeFunc]] = [
    ("System/HAChecksum", probe_system_ha_checksum),
]


def select_probes(include: Optional[Iterable[str]] = None,
                  exclude: Optional[Iterable[str]] = None,
                  probes: Sequence[Tuple[str, ProbeFunc]] = None) -> List[Tuple[str, ProbeFunc]]:
    """
    Filter the probe list for a target.

    Args:
        include: Probe names to run; empty or None means all
        exclude: Probe names to skip

    Returns:
        List of (name, function) in registry order
    """
    include = set(include or ())
    exclude = set(exclude or ())
    if probes is None:
        probes = PROBES

    return [
        (name, func) for name, func in probes
        if (not include or name in include) and name not in exclude
    ]


__all__ = [
    'TargetMetadata',
    'PROBES',
    'ProbeResult',
    'select_probes',
    'probe_system_ha_checksum',
]
