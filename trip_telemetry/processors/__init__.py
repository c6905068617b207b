"""
Data processing components for trip telemetry.

This module contains processors for:
- Sensor range validation
- Trip summary statistics
- Chart series preparation
- GPS track extraction
"""

from .validator import SensorRangeValidator, ValidationFinding
from .summarizer import TripSummarizer, TripSummary, FieldStatistics
from .chart_series import ChartSeriesBuilder, ChartData, ChartSeries
from .track import TrackExtractor

__all__ = [
    "SensorRangeValidator",
    "ValidationFinding",
    "TripSummarizer",
    "TripSummary",
    "FieldStatistics",
    "ChartSeriesBuilder",
    "ChartData",
    "ChartSeries",
    "TrackExtractor"
]
