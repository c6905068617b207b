"""
View session for interactive trip inspection.

Owns everything currently displayed for one loaded file: the row table,
findings, summary, chart and map. Once a new file has been read, the
previous state is disposed before analysis, so nothing carries over between
files and a failed read leaves the current view in place. Chart hover is wired to
the map through a single callback owned by the session.
"""

from typing import Callable, Dict, Any, List, Optional, Tuple, Union
from pathlib import Path
import logging

from .config import TelemetryConfig
from .parsers import RowTable
from .pipeline import TripLogProcessor
from .utils import TelemetryChart, TrackMap

logger = logging.getLogger(__name__)

HoverListener = Callable[[int, Optional[Tuple[float, float]]], None]


class ViewSession:
    """Current view state of one loaded telemetry file."""

    def __init__(self, config: Optional[TelemetryConfig] = None):
        """
        Initialize an empty session.

        Args:
            config: Processing configuration. If None, uses default config.
        """
        self.config = config or TelemetryConfig()
        self.processor = TripLogProcessor(self.config)

        self.rows = None
        self.findings = []
        self.summary = None
        self.chart_data = None
        self.track = []
        self.chart = None
        self.map = None
        self.errors = {}
        self._hover_listener = None

    @property
    def loaded(self) -> bool:
        return self.rows is not None

    @property
    def gps_available(self) -> bool:
        return bool(self.track)

    def load(self, source: Union[str, Path, RowTable, Any], render: bool = True) -> 'ViewSession':
        """
        Replace the current view with a new file or row table.

        Args:
            source: CSV path, RowTable, DataFrame or list of row mappings
            render: Whether to build the chart and map figures

        Returns:
            The session itself

        Raises:
            FileNotFoundError: If the file doesn't exist (current view is kept)
            CorruptedFileError: If the file cannot be read (current view is kept)
        """
        if isinstance(source, (str, Path)):
            rows = self.processor.load(source)
        else:
            rows = RowTable.coerce(source)

        self.dispose()

        results = self.processor.analyze(rows)
        self.rows = results['rows']
        self.findings = results['findings']
        self.summary = results['summary']
        self.chart_data = results['chart_data']
        self.track = results['track']
        self.errors = results['errors']

        if render:
            self._render()

        logger.info(f"Loaded {len(self.rows)} rows, {len(self.findings)} invalid")
        return self

    def _render(self):
        """Build chart and map figures and connect hover to the marker."""
        settings = self.config.to_dict()

        self.map = TrackMap(settings)
        self.map.render(self.track)

        if self.chart_data is not None:
            self.chart = TelemetryChart(settings)
            self.chart.render(self.chart_data)
            self.chart.connect_hover(self.on_hover)

    def set_hover_listener(self, listener: Optional[HoverListener]):
        """
        Register an additional listener notified on every hover.

        The listener receives the row index and its (latitude, longitude),
        or None when that row has no usable coordinates.
        """
        self._hover_listener = listener

    def on_hover(self, row_index: int) -> Optional[Tuple[float, float]]:
        """
        Push the hovered row's position to the map marker.

        Args:
            row_index: 0-based row index under the chart cursor

        Returns:
            The (latitude, longitude) pushed to the map, or None
        """
        if self.rows is None:
            return None

        position = self.processor.track_extractor.position_at(self.rows, row_index)
        if position is not None and self.map is not None:
            self.map.move_marker(*position)

        if self._hover_listener is not None:
            self._hover_listener(row_index, position)

        return position

    def summary_html(self) -> str:
        """Summary and findings as HTML, or a notice when no summary exists."""
        reporter = self.processor.reporter
        if self.summary is None:
            body = '<p>Cannot determine trip summary.</p>\n'
        else:
            body = reporter.render_html(self.summary)
        return body + reporter.render_findings_html(self.findings)

    def findings_text(self) -> List[str]:
        return self.processor.reporter.render_findings(self.findings)

    def state(self) -> Dict[str, Any]:
        """Snapshot of what the session currently holds."""
        return {
            'loaded': self.loaded,
            'row_count': len(self.rows) if self.rows is not None else 0,
            'invalid_rows': len(self.findings),
            'summary_available': self.summary is not None,
            'gps_available': self.gps_available,
            'chart_open': self.chart is not None,
            'map_open': self.map is not None,
        }

    def dispose(self):
        """Close figures and drop every reference to the current file."""
        if self.chart is not None:
            self.chart.close()
        if self.map is not None:
            self.map.close()

        self.rows = None
        self.findings = []
        self.summary = None
        self.chart_data = None
        self.track = []
        self.chart = None
        self.map = None
        self.errors = {}
