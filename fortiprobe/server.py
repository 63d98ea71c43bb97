#!/usr/bin/env python3
"""
FortiProbe HTTP Exporter

Serves one scrape per request:

    GET /probe?target=https://fw1.example.net   device metrics
    GET /metrics                                exporter process metrics
    GET /                                       landing page

Requests are handled on their own threads. Each /probe request builds its
own client and registry, so concurrent scrapes of different targets share
nothing.
"""

import logging
import traceback
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Dict, Optional
from urllib.parse import parse_qs, urlsplit

from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

from .__version__ import get_version_string_detailed
from .client import FortiHTTP, normalize_target
from .config import ExporterConfig, TargetConfig
from .core.constants import SCRAPE_TIMEOUT_HEADER
from .core.exceptions import ConfigValidationError
from .metrics import render_probe
from .probe import TargetMetadata, select_probes

logger = logging.getLogger("fortiprobe")

LANDING_PAGE = """<html>
<head><title>FortiProbe</title></head>
<body>
<h1>{version}</h1>
<p><a href="/probe?target=https://fortigate.example.net">Probe example</a></p>
<p><a href="/metrics">Exporter metrics</a></p>
</body>
</html>
"""


def compute_timeout(exporter_config: ExporterConfig, header_value: Optional[str]) -> float:
    """
    Fetch timeout for one scrape.

    The scraper's own timeout header, minus the configured offset, wins
    when it is shorter than the configured scrape timeout.

    Args:
        exporter_config: Exporter settings
        header_value: Raw X-Prometheus-Scrape-Timeout-Seconds value, if any

    Returns:
        Timeout in seconds
    """
    timeout = exporter_config.scrape_timeout
    if header_value:
        try:
            scrape_timeout = float(header_value) - exporter_config.timeout_offset
        except ValueError:
            logger.warning(f"Ignoring invalid {SCRAPE_TIMEOUT_HEADER} header: {header_value!r}")
        else:
            if 0 < scrape_timeout < timeout:
                timeout = scrape_timeout
    return timeout


class ExporterServer(ThreadingHTTPServer):
    """Threading HTTP server carrying the exporter and target configuration."""

    daemon_threads = True

    def __init__(self, exporter_config: ExporterConfig, targets: Dict[str, TargetConfig],
                 server_address=None):
        self.exporter_config = exporter_config
        self.targets = targets
        if server_address is None:
            server_address = (exporter_config.listen_address, exporter_config.listen_port)
        super().__init__(server_address, ExporterRequestHandler)


class ExporterRequestHandler(BaseHTTPRequestHandler):
    """Routes /probe, /metrics and / requests."""

    server_version = "FortiProbe"

    def do_GET(self):
        parts = urlsplit(self.path)
        try:
            if parts.path == "/probe":
                self._handle_probe(parse_qs(parts.query))
            elif parts.path == "/metrics":
                self._send(200, generate_latest(REGISTRY), CONTENT_TYPE_LATEST)
            elif parts.path == "/":
                page = LANDING_PAGE.format(version=get_version_string_detailed())
                self._send(200, page.encode("utf-8"), "text/html; charset=utf-8")
            else:
                self._send_text(404, "Not Found\n")
        except Exception as e:
            logger.error(f"Error handling {self.path}: {e}")
            logger.debug(traceback.format_exc())
            self._send_text(500, f"Internal error: {e}\n")

    def _handle_probe(self, params: Dict[str, list]):
        raw_target = (params.get("target") or [""])[0]
        if not raw_target:
            self._send_text(400, "Target parameter is missing\n")
            return

        try:
            target = normalize_target(raw_target)
        except ConfigValidationError as e:
            self._send_text(400, f"{e}\n")
            return

        target_config = self.server.targets.get(target)
        if target_config is None:
            self._send_text(400, f"No API authentication registered for {target}\n")
            return

        exporter_config = self.server.exporter_config
        timeout = compute_timeout(exporter_config, self.headers.get(SCRAPE_TIMEOUT_HEADER))
        verify = not (target_config.insecure or exporter_config.insecure)
        probes = select_probes(target_config.include, target_config.exclude)

        with FortiHTTP(target, token=target_config.token, verify=verify, timeout=timeout) as client:
            payload, success = render_probe(client, TargetMetadata(target), probes)

        if not success:
            logger.warning(f"Probe of {target} failed")
        self._send(200, payload, CONTENT_TYPE_LATEST)

    def _send_text(self, status: int, text: str):
        self._send(status, text.encode("utf-8"), "text/plain; charset=utf-8")

    def _send(self, status: int, body: bytes, content_type: str):
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        logger.debug(f"{self.address_string()} - {format % args}")


def run_server(exporter_config: ExporterConfig, targets: Dict[str, TargetConfig]):
    """
    Serve until interrupted.

    Args:
        exporter_config: Listen address, port and timeouts
        targets: Configured targets keyed by normalized URL
    """
    httpd = ExporterServer(exporter_config, targets)
    logger.info(
        f"Listening on {exporter_config.listen_address}:{exporter_config.listen_port} "
        f"with {len(targets)} target(s)"
    )
    try:
        httpd.serve_forever()
    finally:
        httpd.server_close()
        logger.info("Exporter stopped")
