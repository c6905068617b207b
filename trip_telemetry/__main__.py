"""
Main entry point for Trip Telemetry when run as a module.

This allows running the tool with: python -m trip_telemetry
"""

import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
