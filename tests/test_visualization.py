"""
Tests for the telemetry chart and the GPS track map.

Tests rendering, image output, hover dispatch and marker movement.
"""

import pytest
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend for testing
import tempfile
import shutil
from pathlib import Path
from unittest.mock import MagicMock

from trip_telemetry.processors.chart_series import ChartSeriesBuilder
from trip_telemetry.utils.visualization import TelemetryChart, TrackMap


ROWS = [
    {'date': '2024-01-01', 'time': '10:00:00', 'speed': '10', 'power': '200'},
    {'date': '2024-01-01', 'time': '10:00:01', 'speed': '15', 'power': '250'},
    {'date': '2024-01-01', 'time': '10:00:02', 'speed': '20', 'power': '220'},
]

TRACK = [(52.0, 13.0), (52.001, 13.002), (52.002, 13.003)]


class TestTelemetryChart:
    """Test cases for TelemetryChart."""

    def setup_method(self):
        """Set up test fixtures before each test method."""
        self.config = {'chart_dpi': 50}
        self.chart = TelemetryChart(self.config)
        self.chart_data = ChartSeriesBuilder().build(ROWS)
        self.temp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        """Clean up after each test method."""
        self.chart.close()
        shutil.rmtree(self.temp_dir)

    def test_initialization(self):
        assert self.chart.default_dpi == 50
        assert self.chart.figure is None

    def test_render_without_saving(self):
        """Test that render builds a figure with one line per visible trace."""
        result = self.chart.render(self.chart_data)

        assert result is None
        assert self.chart.figure is not None
        visible = [s for s in self.chart_data.series if s.visible]
        # Visible traces plus the hover cursor
        assert len(self.chart.ax.get_lines()) == len(visible) + 1
        assert self.chart.ax.get_xlabel() == 'Time'
        assert self.chart.ax.get_ylabel() == 'Normalized'

    def test_render_saves_image(self):
        output_path = Path(self.temp_dir) / "chart.png"
        result = self.chart.render(self.chart_data, str(output_path))

        assert result == str(output_path)
        assert output_path.exists()

    def test_hover_at_invokes_callback(self):
        callback = MagicMock()
        self.chart.connect_hover(callback)
        self.chart.render(self.chart_data)

        assert self.chart.hover_at(2) == 2
        callback.assert_called_once_with(2)

    def test_hover_out_of_range(self):
        callback = MagicMock()
        self.chart.render(self.chart_data)
        self.chart.connect_hover(callback)

        assert self.chart.hover_at(3) is None
        assert self.chart.hover_at(-1) is None
        callback.assert_not_called()

    def test_motion_event_maps_to_row_index(self):
        """Test that a mouse position on the time axis resolves to the nearest row."""
        callback = MagicMock()
        self.chart.render(self.chart_data)
        self.chart.connect_hover(callback)

        event = MagicMock()
        event.inaxes = self.chart.ax
        event.xdata = 1.4
        self.chart._on_motion(event)

        callback.assert_called_once_with(1)

    def test_motion_outside_axes_ignored(self):
        callback = MagicMock()
        self.chart.render(self.chart_data)
        self.chart.connect_hover(callback)

        event = MagicMock()
        event.inaxes = None
        self.chart._on_motion(event)

        callback.assert_not_called()

    def test_empty_chart(self):
        chart_data = ChartSeriesBuilder().build([])
        self.chart.render(chart_data)
        assert self.chart.hover_at(0) is None

    def test_close(self):
        self.chart.render(self.chart_data)
        self.chart.close()

        assert self.chart.figure is None
        assert self.chart.chart_data is None


class TestTrackMap:
    """Test cases for TrackMap."""

    def setup_method(self):
        """Set up test fixtures before each test method."""
        self.track_map = TrackMap({'chart_dpi': 50})
        self.temp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        """Clean up after each test method."""
        self.track_map.close()
        shutil.rmtree(self.temp_dir)

    def test_render_places_marker_on_first_point(self):
        self.track_map.render(TRACK)

        assert self.track_map.has_track
        assert self.track_map.marker_position() == TRACK[0]

    def test_render_saves_image(self):
        output_path = Path(self.temp_dir) / "map.png"
        result = self.track_map.render(TRACK, str(output_path))

        assert result == str(output_path)
        assert output_path.exists()

    def test_move_marker(self):
        """Test that the marker follows and the view pans to it."""
        self.track_map.render(TRACK)

        assert self.track_map.move_marker(52.002, 13.003)
        assert self.track_map.marker_position() == (52.002, 13.003)

        x_min, x_max = self.track_map.ax.get_xlim()
        y_min, y_max = self.track_map.ax.get_ylim()
        assert (x_min + x_max) / 2 == pytest.approx(13.003, abs=1e-4)
        assert (y_min + y_max) / 2 == pytest.approx(52.002, abs=1e-4)

    def test_placeholder_without_coordinates(self):
        output_path = Path(self.temp_dir) / "map.png"
        self.track_map.render([], str(output_path))

        assert output_path.exists()
        assert not self.track_map.has_track
        assert self.track_map.marker_position() is None
        assert not self.track_map.move_marker(1.0, 2.0)
        texts = [text.get_text() for text in self.track_map.ax.texts]
        assert 'No GPS data in file' in texts

    def test_close(self):
        self.track_map.render(TRACK)
        self.track_map.close()

        assert self.track_map.figure is None
        assert self.track_map.track == []
