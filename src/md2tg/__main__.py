#!/usr/bin/env python3
"""Entry point for running md2tg as a module.

This allows the package to be executed as:
    python -m md2tg [arguments]
"""

import sys

from md2tg.cli import main

if __name__ == "__main__":
    sys.exit(main())
