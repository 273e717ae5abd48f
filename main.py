#!/usr/bin/env python3
# /lined/main.py
"""
lined launcher
==============

Runs the editor from a source checkout without installing it:

    python main.py [PATH]

The installed console script ``lined`` calls the same ``lined.main.start``.
"""

import os
import sys

# Ensure the 'lined' package under src/ is importable for source runs.
project_root = os.path.dirname(os.path.abspath(__file__))
src_dir = os.path.join(project_root, "src")
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

from lined.main import start  # noqa: E402

if __name__ == "__main__":
    start()
