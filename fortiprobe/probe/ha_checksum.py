#!/usr/bin/env python3
"""
FortiProbe HA Checksum Probe

Reports each HA cluster member's roles and whether its configuration
checksums match those of a reference member.

The reference is always the first member in the response. It is compared
with itself like every other member, so it always reports in sync. Virtual
domain checksums are compared over the member's own vdom names only: a
vdom that exists on the reference but is missing from a member produces
no sample for that member.
"""

import logging
from typing import List, Sequence, Tuple

from ..core.constants import (
    CHECKSUM_ALL,
    CHECKSUM_GLOBAL,
    CHECKSUM_ROOT,
    CHECKSUM_VDOM_PREFIX,
    HA_CHECKSUM_SYNC,
    HA_CHECKSUMS_PATH,
    HA_CHECKSUMS_QUERY,
    HA_MEMBER_HAS_ROLE,
    IN_SYNC,
    OUT_OF_SYNC,
    ROLE_MANAGE_MASTER,
    ROLE_ROOT_MASTER,
)
from ..core.exceptions import FetchError
from ..core.types import HAChecksumMember, HAChecksumResponse, MetricDesc, MetricObservation

logger = logging.getLogger("fortiprobe")

HAS_ROLE = MetricDesc(
    HA_MEMBER_HAS_ROLE,
    "Master/Slave information",
    ("role", "serial"),
)
CHECKSUM_SYNC = MetricDesc(
    HA_CHECKSUM_SYNC,
    "HA checksum synchronization status (1=synced, 0=out of sync)",
    ("checksum_type", "serial"),
)


def _sync_value(in_sync: bool) -> float:
    return IN_SYNC if in_sync else OUT_OF_SYNC


def role_observations(members: Sequence[HAChecksumMember]) -> List[MetricObservation]:
    """Two role samples per member, emitted for any cluster size."""
    observations = []
    for member in members:
        observations.append(MetricObservation(
            HAS_ROLE, (ROLE_MANAGE_MASTER, member.serial_no), float(member.is_manage_master)))
        observations.append(MetricObservation(
            HAS_ROLE, (ROLE_ROOT_MASTER, member.serial_no), float(member.is_root_master)))
    return observations


def sync_observations(members: Sequence[HAChecksumMember]) -> List[MetricObservation]:
    """
    Compare every member's checksums against the first member.

    Args:
        members: Cluster members in response order

    Returns:
        3 + len(member vdoms) samples per member, or nothing when the
        cluster has fewer than two members
    """
    if len(members) <= 1:
        return []

    reference = members[0].checksum
    observations = []

    for member in members:
        checksum = member.checksum
        serial = member.serial_no

        observations.append(MetricObservation(
            CHECKSUM_SYNC, (CHECKSUM_GLOBAL, serial),
            _sync_value(checksum.global_ == reference.global_)))
        observations.append(MetricObservation(
            CHECKSUM_SYNC, (CHECKSUM_ROOT, serial),
            _sync_value(checksum.root == reference.root)))
        observations.append(MetricObservation(
            CHECKSUM_SYNC, (CHECKSUM_ALL, serial),
            _sync_value(checksum.all == reference.all)))

        for vdom, vdom_checksum in checksum.vdoms.items():
            in_sync = vdom in reference.vdoms and reference.vdoms[vdom] == vdom_checksum
            observations.append(MetricObservation(
                CHECKSUM_SYNC, (f"{CHECKSUM_VDOM_PREFIX}{vdom}", serial),
                _sync_value(in_sync)))

    return observations


def probe_system_ha_checksum(client, meta) -> Tuple[List[MetricObservation], bool]:
    """
    Fetch HA checksums from a target and derive role and sync gauges.

    Args:
        client: FortiHTTP-like object with get(path, query)
        meta: TargetMetadata for the target being probed

    Returns:
        (observations, success). On fetch failure the error is logged
        and ([], False) is returned.
    """
    try:
        res = HAChecksumResponse.from_dict(client.get(HA_CHECKSUMS_PATH, HA_CHECKSUMS_QUERY))
    except FetchError as e:
        logger.error(f"{meta.target}: HA checksum probe failed: {e}")
        return [], False

    logger.debug(f"{meta.target}: {len(res.results)} HA member(s) reported")

    return role_observations(res.results) + sync_observations(res.results), True
