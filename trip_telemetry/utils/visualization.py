"""
Visualization utilities for trip telemetry.

Creates the two views of a loaded trip:
- Normalized overlay chart of every sensor field over time
- GPS track map with a position marker that follows chart hover
"""

import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns
from typing import Optional, Dict, Any, Callable, List, Tuple
import logging


logger = logging.getLogger(__name__)

MAX_TIME_TICKS = 10


class TelemetryChart:
    """Overlay chart of normalized telemetry series with hover support."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize telemetry chart.

        Args:
            config: Configuration dictionary with visualization parameters
        """
        self.config = config or {}

        self.default_figsize = (14, 6)
        self.default_dpi = self.config.get('chart_dpi', 150)

        self.figure = None
        self.ax = None
        self.chart_data = None
        self._cursor = None
        self._hover_callback = None
        self._connection_id = None

    def render(self, chart_data, output_path: Optional[str] = None) -> Optional[str]:
        """
        Draw the normalized series of every visible trace.

        Args:
            chart_data: ChartData with labels and series
            output_path: Optional path to save the chart image

        Returns:
            Path to saved image, or None when not saved
        """
        logger.info("Creating telemetry chart")

        self.close()
        sns.set_style("whitegrid")

        self.chart_data = chart_data
        self.figure, self.ax = plt.subplots(figsize=self.default_figsize)

        x = np.arange(len(chart_data))
        visible = [series for series in chart_data.series if series.visible]
        for series in visible:
            self.ax.plot(x, series.normalized, color=series.color,
                         linewidth=1, label=series.name)

        self._set_time_ticks(chart_data.labels)

        self.ax.set_xlabel('Time')
        self.ax.set_ylabel('Normalized')
        self.ax.set_ylim(-0.05, 1.05)
        if visible:
            self.ax.legend(loc='upper center', bbox_to_anchor=(0.5, 1.12),
                           ncol=len(visible), fontsize=8, frameon=False)

        self._cursor = self.ax.axvline(0, color='gray', linestyle='--',
                                       linewidth=0.8, visible=False)

        if self._hover_callback is not None:
            self._connect()

        if output_path is None:
            return None

        self.figure.savefig(output_path, dpi=self.default_dpi, bbox_inches='tight')
        logger.info(f"Saved telemetry chart to {output_path}")
        return output_path

    def _set_time_ticks(self, labels: List[str]):
        """Label at most MAX_TIME_TICKS evenly spaced samples."""
        if not labels:
            return

        positions = np.unique(np.linspace(0, len(labels) - 1,
                                          min(len(labels), MAX_TIME_TICKS)).astype(int))
        self.ax.set_xticks(positions)
        self.ax.set_xticklabels([labels[pos] for pos in positions],
                                rotation=30, ha='right', fontsize=8)

    def connect_hover(self, callback: Callable[[int], None]):
        """
        Register the callback invoked with the row index under the cursor.

        Only one callback is kept; registering again replaces it.
        """
        self._hover_callback = callback
        if self.figure is not None:
            self._connect()

    def _connect(self):
        self._disconnect()
        self._connection_id = self.figure.canvas.mpl_connect(
            'motion_notify_event', self._on_motion
        )

    def _disconnect(self):
        if self._connection_id is not None and self.figure is not None:
            self.figure.canvas.mpl_disconnect(self._connection_id)
        self._connection_id = None

    def _on_motion(self, event):
        """Translate a mouse position on the time axis to a row index."""
        if event.inaxes is not self.ax or event.xdata is None:
            return
        self.hover_at(int(round(event.xdata)))

    def hover_at(self, index: int) -> Optional[int]:
        """
        Move the hover cursor to a sample and notify the callback.

        Args:
            index: 0-based row index

        Returns:
            The index if it is within the chart, otherwise None
        """
        if self.chart_data is None or not 0 <= index < len(self.chart_data):
            return None

        if self._cursor is not None:
            self._cursor.set_xdata([index, index])
            self._cursor.set_visible(True)
            self.figure.canvas.draw_idle()

        if self._hover_callback is not None:
            self._hover_callback(index)

        return index

    def close(self):
        """Release the figure and forget the rendered data."""
        self._disconnect()
        if self.figure is not None:
            plt.close(self.figure)
        self.figure = None
        self.ax = None
        self.chart_data = None
        self._cursor = None


class TrackMap:
    """GPS track plot with a movable position marker."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize track map.

        Args:
            config: Configuration dictionary with visualization parameters
        """
        self.config = config or {}

        self.default_figsize = (8, 8)
        self.default_dpi = self.config.get('chart_dpi', 150)

        self.figure = None
        self.ax = None
        self.marker = None
        self.track = []

    @property
    def has_track(self) -> bool:
        return self.marker is not None

    def render(self, track: List[Tuple[float, float]],
               output_path: Optional[str] = None) -> Optional[str]:
        """
        Draw the track and place the marker on its first point.

        Args:
            track: (latitude, longitude) pairs in row order
            output_path: Optional path to save the map image

        Returns:
            Path to saved image, or None when not saved
        """
        if not track:
            logger.warning("No GPS coordinates to draw, rendering placeholder")
            return self.render_placeholder(output_path)

        logger.info(f"Creating track map with {len(track)} points")

        self.close()
        sns.set_style("white")

        self.track = list(track)
        lats = np.array([lat for lat, _ in track])
        lons = np.array([lon for _, lon in track])

        self.figure, self.ax = plt.subplots(figsize=self.default_figsize)
        self.ax.plot(lons, lats, color='blue', linewidth=2, label='Track')
        self.marker, = self.ax.plot([lons[0]], [lats[0]], marker='o', color='red',
                                    markersize=8, linestyle='none', label='Position')

        # Degrees of longitude shrink with latitude
        cos_lat = np.cos(np.radians(lats.mean()))
        if cos_lat > 1e-6:
            self.ax.set_aspect(1.0 / cos_lat, adjustable='datalim')

        self.ax.set_xlabel('Longitude')
        self.ax.set_ylabel('Latitude')
        self.ax.set_title('GPS Track')
        self.ax.legend(loc='best')
        self.ax.grid(True, alpha=0.3)

        if output_path is None:
            return None

        self.figure.savefig(output_path, dpi=self.default_dpi, bbox_inches='tight')
        logger.info(f"Saved track map to {output_path}")
        return output_path

    def render_placeholder(self, output_path: Optional[str] = None) -> Optional[str]:
        """Draw the 'no GPS data' message in place of a map."""
        self.close()

        self.figure, self.ax = plt.subplots(figsize=self.default_figsize)
        self.ax.axis('off')
        self.ax.text(0.5, 0.5, 'No GPS data in file',
                     ha='center', va='center', transform=self.ax.transAxes,
                     fontsize=14, color='red')

        if output_path is None:
            return None

        self.figure.savefig(output_path, dpi=self.default_dpi, bbox_inches='tight')
        logger.info(f"Saved GPS placeholder to {output_path}")
        return output_path

    def move_marker(self, lat: float, lon: float) -> bool:
        """
        Reposition the marker and pan the view to it.

        Args:
            lat: Latitude in degrees
            lon: Longitude in degrees

        Returns:
            True if the marker moved, False when no track is drawn
        """
        if self.marker is None:
            return False

        self.marker.set_data([lon], [lat])

        x_min, x_max = self.ax.get_xlim()
        y_min, y_max = self.ax.get_ylim()
        half_width = (x_max - x_min) / 2
        half_height = (y_max - y_min) / 2
        self.ax.set_xlim(lon - half_width, lon + half_width)
        self.ax.set_ylim(lat - half_height, lat + half_height)

        self.figure.canvas.draw_idle()
        return True

    def marker_position(self) -> Optional[Tuple[float, float]]:
        """Current (latitude, longitude) of the marker."""
        if self.marker is None:
            return None
        xdata, ydata = self.marker.get_data()
        return (float(ydata[0]), float(xdata[0]))

    def close(self):
        """Release the figure, the marker and the track."""
        if self.figure is not None:
            plt.close(self.figure)
        self.figure = None
        self.ax = None
        self.marker = None
        self.track = []
