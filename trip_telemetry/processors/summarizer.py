"""
Trip summary statistics.

Computes trip-level aggregates from a telemetry row table: distance from the
odometer, duration from the first and last timestamps, and max/min/avg/median
for each tracked sensor field.

Aggregation parses values with the default-to-zero policy, so malformed cells
count as 0.0 rather than being dropped. Only NaN produced by exotic input is
excluded.
"""

import math
import logging
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Sequence

import numpy as np
import pandas as pd

from .base import BaseProcessor
from ..parsers.base import RowTable
from ..utils.numeric import parse_float, parse_number, format_fixed

logger = logging.getLogger(__name__)

NO_DATA = "-"

# Field name -> unit suffix, in report order
TRACKED_FIELDS = {
    'pwm': '',
    'speed': ' km/h',
    'power': ' W',
    'current': ' A',
    'voltage': ' V',
    'battery_level': ' %',
    'system_temp': ' °C',
}


@dataclass(frozen=True)
class FieldStatistics:
    """Formatted statistics for one numeric column."""

    max: str = NO_DATA
    min: str = NO_DATA
    avg: str = NO_DATA
    median: str = NO_DATA
    count: int = 0
    values: Dict[str, Optional[float]] = field(default_factory=dict)

    @property
    def has_data(self) -> bool:
        return self.count > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'max': self.max,
            'min': self.min,
            'avg': self.avg,
            'median': self.median,
            'count': self.count,
            'values': dict(self.values),
        }


@dataclass
class TripSummary:
    """Aggregate distance, duration and per-field statistics for one trip."""

    distance_km: float
    duration_seconds: Optional[int]
    duration: str
    start_time: Optional[pd.Timestamp]
    end_time: Optional[pd.Timestamp]
    start_odometer_km: float
    end_odometer_km: float
    fields: Dict[str, FieldStatistics] = field(default_factory=dict)
    row_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'distance_km': self.distance_km,
            'duration_seconds': self.duration_seconds,
            'duration': self.duration,
            'start_time': self.start_time.isoformat() if self.start_time is not None else None,
            'end_time': self.end_time.isoformat() if self.end_time is not None else None,
            'start_odometer_km': None if math.isnan(self.start_odometer_km) else self.start_odometer_km,
            'end_odometer_km': None if math.isnan(self.end_odometer_km) else self.end_odometer_km,
            'row_count': self.row_count,
            'fields': {name: stats.to_dict() for name, stats in self.fields.items()},
        }


def median(values: Sequence[float]) -> float:
    """
    Median by the even/odd rule.

    Args:
        values: Non-empty sequence of numbers

    Returns:
        Middle element for odd lengths, mean of the two central elements otherwise
    """
    if len(values) == 0:
        raise ValueError("median of empty sequence")

    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[middle]
    return (ordered[middle - 1] + ordered[middle]) / 2


def field_statistics(raw_values: Sequence[Any], suffix: str = '', factor: float = 1.0,
                     no_data: str = NO_DATA) -> FieldStatistics:
    """
    Compute formatted statistics for a column of raw values.

    Args:
        raw_values: Raw cell values
        suffix: Unit suffix appended to every formatted value
        factor: Scale applied after parsing
        no_data: Sentinel used when no numeric value remains

    Returns:
        FieldStatistics with one-decimal formatted values
    """
    values = [parse_number(value) * factor for value in raw_values]
    values = [value for value in values if not np.isnan(value)]

    if not values:
        return FieldStatistics(max=no_data, min=no_data, avg=no_data, median=no_data)

    # Sequential sum keeps the mean identical to a left-to-right reduction
    total = 0.0
    for value in values:
        total += value

    raw = {
        'max': max(values),
        'min': min(values),
        'avg': total / len(values),
        'median': float(median(values)),
    }

    return FieldStatistics(
        max=format_fixed(raw['max']) + suffix,
        min=format_fixed(raw['min']) + suffix,
        avg=format_fixed(raw['avg']) + suffix,
        median=format_fixed(raw['median']) + suffix,
        count=len(values),
        values=raw,
    )


def parse_timestamp(date: str, time: str) -> Optional[pd.Timestamp]:
    """Combine date and time cells into a timestamp, None if unparseable."""
    text = f"{date} {time}".strip()
    if not text:
        return None

    timestamp = pd.to_datetime(text, errors='coerce')
    if pd.isna(timestamp):
        return None

    # Offsets are folded into naive UTC so every pair can be subtracted
    if timestamp.tzinfo is not None:
        timestamp = timestamp.tz_convert('UTC').tz_localize(None)
    return timestamp


def format_duration(total_seconds: int) -> str:
    """Format whole seconds as 'H hours M minutes S seconds'."""
    hours = math.floor(total_seconds / 3600)
    minutes = math.floor(math.fmod(total_seconds, 3600) / 60)
    seconds = int(math.fmod(total_seconds, 60))
    return f"{hours} hours {minutes} minutes {seconds} seconds"


class TripSummarizer(BaseProcessor):
    """Computes the trip summary of a telemetry row table."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize summarizer.

        Args:
            config: Configuration dictionary (no_data_marker, distance_divisor)
        """
        super().__init__(config)

        self.no_data = self.config.get('no_data_marker', NO_DATA)
        self.distance_divisor = float(self.config.get('distance_divisor', 1000.0))
        self.fields = dict(TRACKED_FIELDS)

    def process(self, rows) -> Optional[TripSummary]:
        return self.summarize(rows)

    def summarize(self, rows) -> Optional[TripSummary]:
        """
        Summarize a trip.

        Args:
            rows: RowTable, DataFrame or list of row mappings

        Returns:
            TripSummary, or None when the table has no rows
        """
        table = RowTable.coerce(rows)
        if not self.validate_input(table):
            logger.warning("Cannot determine summary: telemetry table has no rows")
            return None

        start = table.first()
        end = table.last()

        distance_km = (
            parse_number(end.get('totaldistance', ''))
            - parse_number(start.get('totaldistance', ''))
        ) / self.distance_divisor

        start_time = parse_timestamp(start.get('date', ''), start.get('time', ''))
        end_time = parse_timestamp(end.get('date', ''), end.get('time', ''))

        if start_time is not None and end_time is not None:
            duration_seconds = int((end_time - start_time).total_seconds())
            duration = format_duration(duration_seconds)
        else:
            logger.warning("Cannot determine trip duration: unparseable start or end timestamp")
            duration_seconds = None
            duration = "unknown"

        stats = {
            name: field_statistics(table.column(name), suffix, no_data=self.no_data)
            for name, suffix in self.fields.items()
        }

        summary = TripSummary(
            distance_km=distance_km,
            duration_seconds=duration_seconds,
            duration=duration,
            start_time=start_time,
            end_time=end_time,
            start_odometer_km=parse_float(start.get('totaldistance', '')) / self.distance_divisor,
            end_odometer_km=parse_float(end.get('totaldistance', '')) / self.distance_divisor,
            fields=stats,
            row_count=len(table),
        )

        logger.info(f"Trip summary: {format_fixed(distance_km)} km in {duration}")
        return summary


def summarize(rows, config: Optional[Dict[str, Any]] = None) -> Optional[TripSummary]:
    """Summarize a row table with default (or given) settings."""
    return TripSummarizer(config).summarize(rows)
