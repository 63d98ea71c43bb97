#!/usr/bin/env python3
"""
FortiProbe Argument Parser Module

Sets up command-line argument parsing with validation.
"""

import argparse

from .validation import InputValidator, parse_size
from ..logger import LOG_LEVEL_MAP


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser with all FortiProbe commands

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="fortiprobe",
        description="FortiProbe - FortiGate HA checksum exporter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Serve /probe?target=... for every target in targets.json
  fortiprobe --serve --config-dir /etc/fortiprobe

  # Probe one device and print the metrics
  fortiprobe --probe https://fw1.example.net --token $FORTI_TOKEN

  # Probe one device and write a node_exporter textfile
  fortiprobe --probe https://fw1.example.net --output /var/lib/node_exporter/fw1.prom

  # Validate configuration files
  fortiprobe --check-config --config-dir /etc/fortiprobe
        """
    )

    # Validation type converters
    def validated_port(value):
        result = InputValidator.validate_port(value)
        if result is None:
            raise argparse.ArgumentTypeError(f"Invalid port: {value}")
        return result

    def validated_target(value):
        result = InputValidator.validate_target(value)
        if result is None:
            raise argparse.ArgumentTypeError(f"Invalid target URL (http/https required): {value}")
        return result

    def validated_size(value):
        result = parse_size(value)
        if result is None:
            raise argparse.ArgumentTypeError(
                f"Invalid size: {value} (use a number with optional K, M or G suffix)")
        return result

    def positive_float(value):
        try:
            result = float(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"Invalid number: {value}")
        if result <= 0:
            raise argparse.ArgumentTypeError(f"Must be positive: {value}")
        return result

    # Commands
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument('--serve', action='store_true',
                       help='Run the HTTP exporter')
    group.add_argument('--probe', metavar='TARGET', type=validated_target,
                       help='Probe a single target once and print or write its metrics')
    group.add_argument('--check-config', action='store_true',
                       help='Validate exporter.json and targets.json')
    group.add_argument('--version', action='store_true',
                       help='Show version and exit')

    # Configuration
    parser.add_argument('--config-dir', metavar='DIR',
                        help='Directory holding exporter.json and targets.json')
    parser.add_argument('--listen-address', metavar='ADDR',
                        help='Address to listen on (overrides exporter.json)')
    parser.add_argument('--port', type=validated_port,
                        help='Port to listen on (overrides exporter.json)')
    parser.add_argument('--timeout', type=positive_float,
                        help='Fetch timeout in seconds (overrides exporter.json)')
    parser.add_argument('--insecure', action='store_true',
                        help='Skip TLS certificate verification')

    # One-shot probe options
    parser.add_argument('--token',
                        help='API token for --probe (defaults to targets.json entry)')
    parser.add_argument('--output', metavar='FILE',
                        help='Write --probe output to FILE atomically instead of stdout')

    # Logging
    parser.add_argument('--log-file', metavar='FILE',
                        help='Log file path (empty string disables file logging)')
    parser.add_argument('--log-level', choices=sorted(LOG_LEVEL_MAP),
                        type=str.upper, help='Log level')
    parser.add_argument('--log-max-size', type=validated_size,
                        help='Rotate log file at this size (e.g. 10M)')
    parser.add_argument('--log-backup-count', type=int,
                        help='Number of rotated log files to keep')
    parser.add_argument('--log-compress', action='store_true',
                        help='Gzip rotated log files')
    parser.add_argument('--debug', action='store_true',
                        help='Shortcut for --log-level DEBUG')

    return parser
