#!/usr/bin/env python3
"""
FortiProbe Type Decoding Tests

Tests for decoding ha-checksums payloads into dataclasses.
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fortiprobe.core.exceptions import DecodeError, FetchError
from fortiprobe.core.types import (
    HAChecksum,
    HAChecksumMember,
    HAChecksumResponse,
    MetricDesc,
    MetricObservation,
)


class ResponseDecodingTests(unittest.TestCase):
    """HAChecksumResponse.from_dict"""

    def test_full_payload(self):
        res = HAChecksumResponse.from_dict({
            "http_method": "GET",
            "results": [{
                "is_manage_master": 1,
                "is_root_master": 0,
                "serial_no": "FG100FTK00000001",
                "checksum": {
                    "global": "aa", "root": "bb", "all": "cc",
                    "vdoms": {"root": "dd", "dmz": "ee"},
                },
            }],
            "status": "success",
        })
        self.assertEqual(len(res.results), 1)
        first = res.results[0]
        self.assertEqual(first.serial_no, "FG100FTK00000001")
        self.assertEqual(first.is_manage_master, 1)
        self.assertEqual(first.is_root_master, 0)
        self.assertEqual(first.checksum, HAChecksum("aa", "bb", "cc", {"root": "dd", "dmz": "ee"}))

    def test_order_is_preserved(self):
        res = HAChecksumResponse.from_dict({"results": [{"serial_no": s} for s in "CAB"]})
        self.assertEqual([m.serial_no for m in res.results], ["C", "A", "B"])

    def test_missing_fields_take_zero_values(self):
        """Missing keys and nulls behave like absent values"""
        res = HAChecksumResponse.from_dict({"results": [{}, {"checksum": None, "serial_no": None}]})
        self.assertEqual(res.results[0], HAChecksumMember())
        self.assertEqual(res.results[1].checksum.vdoms, {})
        self.assertEqual(res.results[1].serial_no, "")

    def test_null_vdoms_become_empty_mapping(self):
        checksum = HAChecksum.from_dict({"global": "x", "vdoms": None})
        self.assertEqual(checksum.vdoms, {})

    def test_null_vdom_value_is_empty_string(self):
        checksum = HAChecksum.from_dict({"vdoms": {"root": None}})
        self.assertEqual(checksum.vdoms, {"root": ""})

    def test_boolean_flags_rejected(self):
        for flags in ({"is_manage_master": True}, {"is_root_master": False}):
            with self.subTest(flags=flags):
                with self.assertRaises(DecodeError):
                    HAChecksumMember.from_dict(flags)

    def test_wrong_types_rejected(self):
        bad_payloads = [
            [],
            "results",
            {"results": {"serial_no": "A"}},
            {"results": ["A"]},
            {"results": [{"is_manage_master": "1"}]},
            {"results": [{"is_root_master": 1.5}]},
            {"results": [{"serial_no": 42}]},
            {"results": [{"checksum": "abc"}]},
            {"results": [{"checksum": {"global": 1}}]},
            {"results": [{"checksum": {"vdoms": ["root"]}}]},
            {"results": [{"checksum": {"vdoms": {"root": 7}}}]},
        ]
        for payload in bad_payloads:
            with self.subTest(payload=payload):
                with self.assertRaises(DecodeError):
                    HAChecksumResponse.from_dict(payload)

    def test_decode_error_is_fetch_error(self):
        self.assertTrue(issubclass(DecodeError, FetchError))


class MetricObservationTests(unittest.TestCase):

    DESC = MetricDesc("example_gauge", "Example", ("a", "b"))

    def test_labels(self):
        obs = MetricObservation(self.DESC, ("1", "2"), 1.0)
        self.assertEqual(obs.name, "example_gauge")
        self.assertEqual(obs.labels, {"a": "1", "b": "2"})

    def test_label_count_mismatch(self):
        with self.assertRaises(ValueError):
            MetricObservation(self.DESC, ("only-one",), 0.0)


if __name__ == "__main__":
    unittest.main()
