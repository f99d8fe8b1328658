#!/usr/bin/env python3
"""
Entry point for running tabify as a module:
    python -m tabify [OPTIONS] [FILE ...]
"""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
