#!/usr/bin/env python3
"""
FortiProbe Logging Tests
"""

import os
import sys
import gzip
import shutil
import logging
import tempfile
import unittest
from logging.handlers import RotatingFileHandler

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fortiprobe.logger import CompressedRotatingFileHandler, setup_logging


class SetupLoggingTests(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        logger = logging.getLogger("fortiprobe")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_file_and_console(self):
        log_file = os.path.join(self.temp_dir, "logs", "fortiprobe.log")
        logger = setup_logging(console=True, log_file=log_file, log_level="debug")

        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(len(logger.handlers), 2)
        self.assertIsInstance(logger.handlers[0], RotatingFileHandler)

        logger.info("hello from the test")
        logger.handlers[0].flush()
        with open(log_file) as f:
            self.assertIn("[INFO] hello from the test", f.read())

    def test_empty_log_file_disables_file_logging(self):
        logger = setup_logging(console=False, log_file="", log_level="INFO")
        self.assertEqual(logger.handlers, [])

    def test_unknown_level_defaults_to_info(self):
        logger = setup_logging(console=True, log_file="", log_level="chatty")
        self.assertEqual(logger.level, logging.INFO)

    def test_repeated_setup_replaces_handlers(self):
        setup_logging(console=True, log_file="", log_level="INFO")
        logger = setup_logging(console=True, log_file="", log_level="INFO")
        self.assertEqual(len(logger.handlers), 1)

    def test_compressed_handler_selected(self):
        log_file = os.path.join(self.temp_dir, "fortiprobe.log")
        logger = setup_logging(console=False, log_file=log_file, log_level="INFO",
                               max_size=1024, backup_count=2, compress=True)
        self.assertIsInstance(logger.handlers[0], CompressedRotatingFileHandler)


class CompressedRotatingFileHandlerTests(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_rotated_file_is_compressed(self):
        log_file = os.path.join(self.temp_dir, "fortiprobe.log")
        handler = CompressedRotatingFileHandler(log_file, maxBytes=100, backupCount=2, compress=True)
        try:
            with open(log_file, 'w') as f:
                f.write("x" * 200)
            handler._compress_logs()  # nothing rotated yet
            self.assertFalse(os.path.exists(f"{log_file}.1.gz"))

            shutil.copy(log_file, f"{log_file}.1")
            handler._compress_logs()

            self.assertTrue(os.path.exists(f"{log_file}.1.gz"))
            self.assertFalse(os.path.exists(f"{log_file}.1"))
            with gzip.open(f"{log_file}.1.gz", 'rt') as f:
                self.assertEqual(f.read(), "x" * 200)
        finally:
            handler.close()


if __name__ == "__main__":
    unittest.main()
