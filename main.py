#!/usr/bin/env python3
# /pykilo/main.py
"""
pykilo launcher for running from a source checkout: ``python main.py [FILE]``.
"""

import os
import sys


# Ensure the 'pykilo' package is importable without installation.
project_src = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
if project_src not in sys.path:
    sys.path.insert(0, project_src)

from pykilo.main import start  # noqa: E402


if __name__ == "__main__":
    start()
