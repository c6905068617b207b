"""
Log parsers for telemetry exports.

This module contains:
- The RowTable produced by every parser
- CSV telemetry parser
"""

from .base import BaseLogParser, RowTable, CORE_COLUMNS
from .csv_parser import CsvLogParser

__all__ = ["BaseLogParser", "RowTable", "CORE_COLUMNS", "CsvLogParser"]
