#!/usr/bin/env python3
"""Allow ``python -m fortiprobe``."""

import sys

from .main import main

sys.exit(main())
