#!/usr/bin/env python3
"""
FortiProbe HTTP Exporter Tests

Starts the exporter on an ephemeral local port and scrapes it. Device
requests are served by a patched FortiHTTP.get, so no FortiGate is needed.
"""

import os
import sys
import threading
import unittest
from unittest import mock

import requests

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fortiprobe.client import FortiHTTP
from fortiprobe.config import ExporterConfig, TargetConfig
from fortiprobe.core.exceptions import TransportError
from fortiprobe.server import ExporterServer, compute_timeout

# Talk to the local exporter directly, whatever proxy settings the environment has
HTTP = requests.Session()
HTTP.trust_env = False

PAYLOAD = {
    "results": [
        {"serial_no": "A", "is_manage_master": 1, "is_root_master": 1,
         "checksum": {"global": "x", "root": "y", "all": "z", "vdoms": {}}},
        {"serial_no": "B", "is_manage_master": 0, "is_root_master": 0,
         "checksum": {"global": "x", "root": "y", "all": "OTHER", "vdoms": {}}},
    ]
}


class ComputeTimeoutTests(unittest.TestCase):

    def test_no_header(self):
        self.assertEqual(compute_timeout(ExporterConfig(scrape_timeout=20), None), 20)

    def test_shorter_header_wins(self):
        cfg = ExporterConfig(scrape_timeout=20, timeout_offset=0.5)
        self.assertEqual(compute_timeout(cfg, "10"), 9.5)

    def test_longer_header_ignored(self):
        cfg = ExporterConfig(scrape_timeout=20, timeout_offset=0.5)
        self.assertEqual(compute_timeout(cfg, "60"), 20)

    def test_invalid_header(self):
        cfg = ExporterConfig(scrape_timeout=20)
        with self.assertLogs("fortiprobe", level="WARNING"):
            self.assertEqual(compute_timeout(cfg, "soon"), 20)

    def test_header_below_offset(self):
        cfg = ExporterConfig(scrape_timeout=20, timeout_offset=0.5)
        self.assertEqual(compute_timeout(cfg, "0.2"), 20)


class ExporterServerTests(unittest.TestCase):

    TARGET = "https://fw1.example.net"

    @classmethod
    def setUpClass(cls):
        targets = {cls.TARGET: TargetConfig(token="secret")}
        cls.httpd = ExporterServer(ExporterConfig(), targets, server_address=("127.0.0.1", 0))
        cls.base = f"http://127.0.0.1:{cls.httpd.server_address[1]}"
        cls.thread = threading.Thread(target=cls.httpd.serve_forever, daemon=True)
        cls.thread.start()

    @classmethod
    def tearDownClass(cls):
        cls.httpd.shutdown()
        cls.httpd.server_close()

    def test_probe_success(self):
        with mock.patch.object(FortiHTTP, "get", return_value=PAYLOAD) as get:
            response = HTTP.get(f"{self.base}/probe", params={"target": self.TARGET + "/"}, timeout=5)

        self.assertEqual(response.status_code, 200)
        self.assertIn("text/plain", response.headers["Content-Type"])
        self.assertIn('fortigate_ha_checksum_sync{checksum_type="all",serial="B"} 0.0', response.text)
        self.assertIn('fortigate_ha_checksum_sync{checksum_type="all",serial="A"} 1.0', response.text)
        self.assertIn("probe_success 1.0", response.text)
        get.assert_called_once_with("api/v2/monitor/system/ha-checksums", "scope=global")

    def test_probe_device_failure(self):
        with mock.patch.object(FortiHTTP, "get", side_effect=TransportError("refused")):
            with self.assertLogs("fortiprobe", level="ERROR"):
                response = HTTP.get(f"{self.base}/probe", params={"target": self.TARGET}, timeout=5)

        self.assertEqual(response.status_code, 200)
        self.assertIn("probe_success 0.0", response.text)
        self.assertNotIn("fortigate_ha_member_has_role{", response.text)

    def test_probe_missing_target(self):
        response = HTTP.get(f"{self.base}/probe", timeout=5)
        self.assertEqual(response.status_code, 400)

    def test_probe_unknown_target(self):
        response = HTTP.get(f"{self.base}/probe", params={"target": "https://other.example.net"}, timeout=5)
        self.assertEqual(response.status_code, 400)
        self.assertIn("No API authentication registered", response.text)

    def test_probe_invalid_target(self):
        response = HTTP.get(f"{self.base}/probe", params={"target": "not-a-url"}, timeout=5)
        self.assertEqual(response.status_code, 400)

    def test_landing_page(self):
        response = HTTP.get(f"{self.base}/", timeout=5)
        self.assertEqual(response.status_code, 200)
        self.assertIn("FortiProbe", response.text)

    def test_exporter_metrics(self):
        response = HTTP.get(f"{self.base}/metrics", timeout=5)
        self.assertEqual(response.status_code, 200)

    def test_not_found(self):
        response = HTTP.get(f"{self.base}/nope", timeout=5)
        self.assertEqual(response.status_code, 404)


if __name__ == "__main__":
    unittest.main()
