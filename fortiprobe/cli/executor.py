#!/usr/bin/env python3
"""
FortiProbe Command Executor Module

Orchestrates command execution based on parsed arguments.
"""

import os
import dataclasses
from argparse import Namespace

from . import probe_commands
from . import server_commands
from .. import config
from ..__version__ import get_version_string_detailed
from ..config import load_exporter_config, load_targets
from ..core.exceptions import ConfigurationError
from ..logger import setup_logging


def update_global_config(args: Namespace) -> None:
    """
    Update global configuration variables based on command-line arguments

    Args:
        args: Parsed command-line arguments
    """
    if args.config_dir:
        config.set_config_dir(args.config_dir)

    if args.log_file is not None:
        config.LOG_FILE = os.path.abspath(args.log_file) if args.log_file else ""
    elif not args.serve:
        # One-shot commands only log to the console unless asked otherwise
        config.LOG_FILE = ""

    if args.debug:
        config.LOG_LEVEL = "DEBUG"
    elif args.log_level:
        config.LOG_LEVEL = args.log_level

    if args.log_max_size:
        config.LOG_MAX_SIZE = args.log_max_size

    if args.log_backup_count is not None:
        if args.log_backup_count < 0:
            raise ConfigurationError("Log backup count must be a non-negative integer")
        config.LOG_BACKUP_COUNT = args.log_backup_count

    if args.log_compress:
        config.LOG_COMPRESS = True


def apply_overrides(exporter_config: config.ExporterConfig, args: Namespace) -> config.ExporterConfig:
    """Return a copy of exporter_config with command-line overrides applied."""
    overrides = {}
    if args.listen_address:
        overrides["listen_address"] = args.listen_address
    if args.port:
        overrides["listen_port"] = args.port
    if args.timeout:
        overrides["scrape_timeout"] = args.timeout
    if args.insecure:
        overrides["insecure"] = True
    return dataclasses.replace(exporter_config, **overrides)


def execute_command(args: Namespace) -> int:
    """
    Execute the appropriate command based on parsed arguments

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    if args.version:
        print(get_version_string_detailed())
        return 0

    try:
        update_global_config(args)
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return 1

    setup_logging()

    if args.check_config:
        return server_commands.check_config()

    try:
        exporter_config = apply_overrides(load_exporter_config(), args)
        targets = load_targets()
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return 1

    if args.serve:
        return server_commands.serve(exporter_config, targets)

    if args.probe:
        return probe_commands.run_probe(
            args.probe, exporter_config, targets,
            token=args.token, output=args.output, insecure=args.insecure,
        )

    print("No command specified. Use --help for usage information.")
    return 1
