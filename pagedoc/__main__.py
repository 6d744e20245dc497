"""
Entry point for running pagedoc as a module.

Usage:
    python -m pagedoc info document.json
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
