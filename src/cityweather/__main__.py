"""
Main entry point for the city weather client.
"""

import sys
from cityweather.cli import main

if __name__ == "__main__":
    sys.exit(main())
