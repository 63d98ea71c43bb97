#!/usr/bin/env python3
"""
FortiProbe Metrics Module

Turns probe observations into Prometheus metric families.

A ProbeCollector is built per scrape and registered in a throwaway
CollectorRegistry, so nothing from one scrape leaks into the next.
Also provides the textfile export used by one-shot CLI probes: the
exposition text is written to a private temporary file and renamed into place
so a node_exporter textfile collector never reads a partial file.
"""
import os
import time
import tempfile
import logging
from collections import OrderedDict
from typing import Iterable, List, Sequence, Tuple

from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.core import GaugeMetricFamily

from .core.constants import PROBE_DURATION_SECONDS, PROBE_SUCCESS
from .core.types import MetricObservation

logger = logging.getLogger("fortiprobe")


def families_from_observations(observations: Iterable[MetricObservation]) -> List[GaugeMetricFamily]:
    """
    Group observations into gauge families.

    Families appear in the order their first observation was seen.

    Args:
        observations: Samples produced by one or more probes

    Returns:
        List of GaugeMetricFamily
    """
    families = OrderedDict()
    for observation in observations:
        desc = observation.desc
        family = families.get(desc.name)
        if family is None:
            family = GaugeMetricFamily(desc.name, desc.documentation, labels=list(desc.label_names))
            families[desc.name] = family
        family.add_metric(list(observation.label_values), observation.value)
    return list(families.values())


class ProbeCollector:
    """
    Custom collector that runs the selected probes on every collect().

    Attributes:
        client: FortiHTTP bound to the target
        meta: TargetMetadata handed to each probe
        probes: Sequence of (name, function) to run
    """

    def __init__(self, client, meta, probes: Sequence[Tuple[str, object]]):
        self.client = client
        self.meta = meta
        self.probes = list(probes)
        self.success = False

    def describe(self):
        # Metric names depend on the device response
        return []

    def collect(self):
        start = time.perf_counter()
        observations = []
        success = True

        for name, probe in self.probes:
            probe_start = time.perf_counter()
            result, ok = probe(self.client, self.meta)
            logger.debug(
                f"{self.meta.target}: probe {name} finished in "
                f"{time.perf_counter() - probe_start:.3f}s (success={ok})"
            )
            if ok:
                observations.extend(result)
            else:
                success = False

        self.success = success
        duration = time.perf_counter() - start

        for family in families_from_observations(observations):
            yield family

        yield GaugeMetricFamily(
            PROBE_SUCCESS, "Was the last probe successful",
            value=1.0 if success else 0.0)
        yield GaugeMetricFamily(
            PROBE_DURATION_SECONDS, "Returns how long the probe took to complete in seconds",
            value=duration)


def render_probe(client, meta, probes) -> Tuple[bytes, bool]:
    """
    Run one scrape against a target and render it in exposition format.

    Args:
        client: FortiHTTP bound to the target
        meta: TargetMetadata for the target
        probes: Sequence of (name, function) to run

    Returns:
        (exposition bytes, overall probe success)
    """
    registry = CollectorRegistry()
    collector = ProbeCollector(client, meta, probes)
    registry.register(collector)
    payload = generate_latest(registry)
    return payload, collector.success


def write_textfile(path: str, payload: bytes) -> None:
    """
    Atomically write exposition text for a textfile collector.

    Each call writes its own uniquely named temporary file in the
    destination directory, so concurrent writers never share one.

    Args:
        path: Destination .prom file
        payload: Rendered exposition bytes
    """
    metrics_dir = os.path.dirname(path)
    if metrics_dir and not os.path.exists(metrics_dir):
        os.makedirs(metrics_dir, exist_ok=True)
        logger.info(f"Created metrics directory: {metrics_dir}")

    # Atomic write: write to temp file, then rename
    temp_fd, temp_path = tempfile.mkstemp(
        suffix='.tmp',
        dir=metrics_dir or '.',
        prefix=f".{os.path.basename(path)}."
    )

    try:
        with os.fdopen(temp_fd, 'wb') as f:
            f.write(payload)
        os.chmod(temp_path, 0o644)
        os.replace(temp_path, path)
    except Exception:
        # Clean up temp file on error
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise

    logger.debug(f"Metrics exported to {path}")
