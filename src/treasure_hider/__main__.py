"""
Module execution entry point.

Allows running with: python -m treasure_hider
"""

import sys

from treasure_hider.main import main

if __name__ == "__main__":
    sys.exit(main())
