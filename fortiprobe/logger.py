#!/usr/bin/env python3
"""
FortiProbe Logging Module

Sets up logging for the exporter: an optional console handler plus a
size-rotated log file whose rotated copies can be gzip-compressed.
"""
import os
import gzip
import shutil
import logging
import threading
from logging.handlers import RotatingFileHandler

# Initialize logger - config values will be set during setup_logging
logger = logging.getLogger("fortiprobe")
formatter = logging.Formatter('[%(asctime)s] [%(levelname)s] %(message)s', '%Y-%m-%d %H:%M:%S')

LOG_LEVEL_MAP = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}


class CompressedRotatingFileHandler(RotatingFileHandler):
    """
    RotatingFileHandler that gzips rotated files in a background thread
    """

    def __init__(self, filename, mode='a', maxBytes=0, backupCount=0,
                 encoding=None, delay=False, compress=False):
        """
        Initialize the handler with compression option

        Args:
            compress (bool): Whether to compress rotated log files
        """
        self.compress = compress
        super().__init__(filename, mode, maxBytes, backupCount, encoding, delay)

        # Track files that have been compressed to avoid redundant work
        self._compressed_files = set()

    def doRollover(self):
        super().doRollover()

        if self.compress:
            threading.Thread(target=self._compress_logs, daemon=True).start()

    def _compress_logs(self):
        """
        Compress rotated log files (<name>.1, <name>.2, ...)
        """
        for i in range(1, self.backupCount + 1):
            log_file = f"{self.baseFilename}.{i}"
            gz_file = f"{log_file}.gz"

            if (os.path.exists(log_file) and
                    not os.path.exists(gz_file) and
                    log_file not in self._compressed_files):

                try:
                    self._compressed_files.add(log_file)

                    with open(log_file, 'rb') as f_in:
                        with gzip.open(gz_file, 'wb', compresslevel=6) as f_out:
                            shutil.copyfileobj(f_in, f_out, length=1024 * 1024)

                    os.remove(log_file)
                except OSError as e:
                    # Logging from inside a handler would recurse
                    print(f"Error compressing log file {log_file}: {e}")


def setup_logging(console=True, log_file=None, log_level=None, max_size=None,
                  backup_count=None, compress=None):
    """
    Set up logging with optional console output and rotation settings

    Args:
        console (bool): Whether to output logs to console as well
        log_file (str): Path to log file, defaults to config.LOG_FILE.
                        An empty string disables file logging.
        log_level (str): Log level, defaults to config.LOG_LEVEL
        max_size (int): Maximum size of log file in bytes before rotation
        backup_count (int): Number of backup files to keep
        compress (bool): Whether to compress rotated log files

    Returns:
        logging.Logger: The configured "fortiprobe" logger
    """
    from . import config

    if log_file is None:
        log_file = config.LOG_FILE
    if log_level is None:
        log_level = config.LOG_LEVEL
    if max_size is None:
        max_size = config.LOG_MAX_SIZE
    if backup_count is None:
        backup_count = config.LOG_BACKUP_COUNT
    if compress is None:
        compress = config.LOG_COMPRESS

    logger.setLevel(LOG_LEVEL_MAP.get(log_level.upper(), logging.INFO))

    # Clear any existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            if compress:
                file_handler = CompressedRotatingFileHandler(
                    log_file, maxBytes=max_size, backupCount=backup_count, compress=True)
            else:
                file_handler = RotatingFileHandler(
                    log_file, maxBytes=max_size, backupCount=backup_count)

            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            print(f"Error setting up file logging: {e}")

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
