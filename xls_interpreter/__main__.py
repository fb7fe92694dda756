"""
Entry point for running xls_interpreter as a module.

Usage:
    python -m xls_interpreter convert input.xls --output-dir out/
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
