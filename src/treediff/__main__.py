#!/usr/bin/env python3
"""Entry point for running treediff as a module.

This allows the package to be executed as:
    python -m treediff [arguments]
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
