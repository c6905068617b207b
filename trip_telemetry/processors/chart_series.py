"""
Time-series preparation for the telemetry chart.

Builds one min-max normalized series per sensor field on a shared
"date time" label axis so fields with different units can be overlaid.
Raw values are kept for hover text.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

import numpy as np

from .base import BaseProcessor
from ..parsers.base import RowTable
from ..utils.numeric import parse_number, format_fixed

logger = logging.getLogger(__name__)


# (field, display name, colour, visible by default)
CHART_TRACES = [
    ('speed', 'Speed (km/h)', '#1f77b4', True),
    ('gps_speed', 'GPS Speed (km/h)', '#ff7f0e', False),
    ('power', 'Power (W)', '#2ca02c', True),
    ('current', 'Current (A)', '#d62728', True),
    ('voltage', 'Voltage (V)', '#9467bd', True),
    ('battery_level', 'Battery (%)', '#8c564b', True),
    ('system_temp', 'Temperature (°C)', '#e377c2', True),
    ('pwm', 'PWM (%)', '#17becf', True),
]


@dataclass
class ChartSeries:
    """One chart trace: raw values, normalized values and hover text."""

    field: str
    name: str
    color: str
    raw: np.ndarray
    normalized: np.ndarray
    hover_text: List[str] = field(default_factory=list)
    visible: bool = True


@dataclass
class ChartData:
    """Shared label axis plus every trace."""

    labels: List[str]
    series: List[ChartSeries]

    def __len__(self) -> int:
        return len(self.labels)

    def get(self, field_name: str) -> Optional[ChartSeries]:
        for series in self.series:
            if series.field == field_name:
                return series
        return None

    def hover_lines(self, index: int) -> List[str]:
        """Unified hover text for one sample: 'Name: value unit' per visible trace."""
        return [
            f"{series.name}: {series.hover_text[index]}"
            for series in self.series
            if series.visible
        ]


def normalize(values: np.ndarray) -> np.ndarray:
    """
    Min-max normalize a series to [0, 1].

    Constant series map to 0.0.

    Args:
        values: Series to normalize

    Returns:
        Normalized copy
    """
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return values.copy()

    finite = values[np.isfinite(values)]
    if finite.size == 0:
        return np.zeros_like(values)

    lower, upper = finite.min(), finite.max()
    span = upper - lower
    if span == 0:
        return np.zeros_like(values)

    return (values - lower) / span


class ChartSeriesBuilder(BaseProcessor):
    """Builds normalized chart series from a row table."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.traces = list(CHART_TRACES)

    def process(self, rows) -> ChartData:
        return self.build(rows)

    def build(self, rows) -> ChartData:
        """
        Build chart data.

        Args:
            rows: RowTable, DataFrame or list of row mappings

        Returns:
            ChartData with one series per configured trace
        """
        table = RowTable.coerce(rows)
        dates = table.column('date')
        times = table.column('time')
        labels = [f"{date} {time}" for date, time in zip(dates, times)]

        series = []
        for field_name, name, color, visible in self.traces:
            raw = np.array([parse_number(value) for value in table.column(field_name)], dtype=float)
            unit = name.split(' ')[1] if ' ' in name else ''
            series.append(ChartSeries(
                field=field_name,
                name=name,
                color=color,
                raw=raw,
                normalized=normalize(raw),
                hover_text=[f"{format_fixed(value)} {unit}" for value in raw],
                visible=visible,
            ))

        logger.debug(f"Built {len(series)} chart series over {len(labels)} samples")
        return ChartData(labels=labels, series=series)
