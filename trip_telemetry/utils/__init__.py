"""
Utility functions and helpers for trip telemetry processing.

This module contains:
- Numeric parsing and formatting
- Error handling helpers
- Visualization helpers
- Report rendering
- File I/O utilities
"""

from .numeric import parse_float, parse_number, format_fixed
from .error_handling import RobustErrorHandler, ProcessingError, CorruptedFileError
from .visualization import TelemetryChart, TrackMap
from .report import SummaryReporter
from .io_utils import FileHandler

__all__ = [
    "parse_float",
    "parse_number",
    "format_fixed",
    "RobustErrorHandler",
    "ProcessingError",
    "CorruptedFileError",
    "TelemetryChart",
    "TrackMap",
    "SummaryReporter",
    "FileHandler"
]
