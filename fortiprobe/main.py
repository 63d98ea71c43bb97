#!/usr/bin/env python3
"""
FortiProbe - Main Module

Entry point for the fortiprobe command. Command implementations live in
the cli/ subpackage:

    - cli/parser.py: Argument parsing setup
    - cli/validation.py: Input validation
    - cli/executor.py: Command orchestration
    - cli/probe_commands.py: One-shot probe
    - cli/server_commands.py: HTTP exporter, config check
"""

import sys
import argparse
import traceback

from .cli import create_argument_parser, execute_command


def main(argv=None) -> int:
    """
    Main entry point

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        parser = create_argument_parser()

        try:
            args = parser.parse_args(argv)
        except argparse.ArgumentTypeError as e:
            print(f"Argument validation error: {e}")
            return 1

        return execute_command(args)

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}")
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
