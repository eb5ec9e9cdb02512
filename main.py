#!/usr/bin/env python3
"""yanker - open graph toolkit.

Usage:
    python main.py <command> ...            # from project root
    python -m yanker.main <command> ...
"""
import sys
from pathlib import Path

# Ensure the project root (this file's directory) is on sys.path so that
# `import yanker` works regardless of how the script is invoked.
_root = str(Path(__file__).resolve().parent)
if _root not in sys.path:
    sys.path.insert(0, _root)

from yanker.main import main  # noqa: E402

if __name__ == '__main__':
    sys.exit(main())
