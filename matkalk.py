#!/usr/bin/env python3
"""
matkalk: Matrix Calculator

Main entry point for the matkalk console calculator. This file is a thin
wrapper that delegates all functionality to the matkalk_pkg package.

Usage:
    python matkalk.py                               # Interactive session
    python matkalk.py -e "det [[1,2],[3,4]]"        # Run one command
    python matkalk.py --field fraction -e "inverse [[2,1],[1,1]]"
    python matkalk.py --health-check                # Self test
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for matkalk.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from matkalk_pkg.cli import main_entry

        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1
    except ImportError as e:
        print(f"Error: Failed to import matkalk_pkg: {e}")
        print("Please ensure all dependencies are installed: pip install -e .")
        return 1


if __name__ == "__main__":
    sys.exit(main())
