"""
Trip Telemetry - validation and summary of e-bike telemetry logs.

This package provides tools for loading telemetry CSV exports, flagging
implausible battery and temperature readings, computing trip statistics,
and rendering a normalized time-series chart and a GPS track map with
synchronized hover.
"""

__version__ = "1.0.0"
__author__ = "Trip Telemetry Team"

from .config import TelemetryConfig
from .pipeline import TripLogProcessor, analyze_rows
from .session import ViewSession

__all__ = ["TelemetryConfig", "TripLogProcessor", "analyze_rows", "ViewSession"]
