#!/usr/bin/env python3
"""
FortiProbe CLI Module

Provides command-line interface functionality organized by concern:
- parser: Argument parsing setup
- validation: Input validation and sanitization
- executor: Command orchestration
- probe_commands: One-shot probing of a single target
- server_commands: HTTP exporter and config checking
"""

__all__ = [
    'create_argument_parser',
    'execute_command',
    'InputValidator',
    'parse_size',
]

from .parser import create_argument_parser
from .validation import InputValidator, parse_size
from .executor import execute_command
