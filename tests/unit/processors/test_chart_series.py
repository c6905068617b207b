"""
Unit tests for chart series preparation.
"""

import unittest
import numpy as np

from trip_telemetry.processors.chart_series import (
    ChartSeriesBuilder, ChartData, normalize, CHART_TRACES
)


class TestNormalize(unittest.TestCase):
    """Test min-max normalization."""

    def test_range(self):
        np.testing.assert_allclose(normalize([0, 5, 10]), [0.0, 0.5, 1.0])

    def test_offset_values(self):
        np.testing.assert_allclose(normalize([10, 20]), [0.0, 1.0])

    def test_constant_series(self):
        """Test that a flat series maps to zeros."""
        np.testing.assert_array_equal(normalize([7, 7, 7]), [0.0, 0.0, 0.0])

    def test_empty_series(self):
        self.assertEqual(normalize([]).size, 0)

    def test_values_within_unit_interval(self):
        values = normalize([3.2, -1.0, 8.5, 0.0, 4.4])
        self.assertTrue(np.all(values >= 0.0))
        self.assertTrue(np.all(values <= 1.0))


class TestChartSeriesBuilder(unittest.TestCase):
    """Test chart data construction."""

    def setUp(self):
        """Set up test fixtures."""
        self.rows = [
            {'date': '2024-01-01', 'time': '10:00:00', 'speed': '10', 'power': '200',
             'battery_level': '80'},
            {'date': '2024-01-01', 'time': '10:01:00', 'speed': '20', 'power': 'x',
             'battery_level': '80'},
        ]
        self.chart_data = ChartSeriesBuilder().build(self.rows)

    def test_labels(self):
        """Test the shared date time label axis."""
        self.assertIsInstance(self.chart_data, ChartData)
        self.assertEqual(self.chart_data.labels,
                         ['2024-01-01 10:00:00', '2024-01-01 10:01:00'])
        self.assertEqual(len(self.chart_data), 2)

    def test_trace_order(self):
        """Test that one series exists per trace, in display order."""
        fields = [series.field for series in self.chart_data.series]
        self.assertEqual(fields, [trace[0] for trace in CHART_TRACES])

    def test_gps_speed_hidden(self):
        self.assertFalse(self.chart_data.get('gps_speed').visible)
        self.assertTrue(self.chart_data.get('speed').visible)

    def test_raw_and_normalized_values(self):
        """Test raw values with default-to-zero parsing and their normalization."""
        power = self.chart_data.get('power')
        np.testing.assert_array_equal(power.raw, [200.0, 0.0])
        np.testing.assert_allclose(power.normalized, [1.0, 0.0])

    def test_constant_field(self):
        np.testing.assert_array_equal(self.chart_data.get('battery_level').normalized, [0.0, 0.0])

    def test_missing_field(self):
        """Test that an absent column charts as zeros."""
        voltage = self.chart_data.get('voltage')
        np.testing.assert_array_equal(voltage.raw, [0.0, 0.0])
        np.testing.assert_array_equal(voltage.normalized, [0.0, 0.0])

    def test_hover_text(self):
        """Test hover text carries the raw value and the unit."""
        self.assertEqual(self.chart_data.get('speed').hover_text, ['10.0 (km/h)', '20.0 (km/h)'])
        self.assertEqual(self.chart_data.get('power').hover_text[0], '200.0 (W)')

    def test_hover_lines(self):
        """Test the unified hover lines of one sample."""
        lines = self.chart_data.hover_lines(1)

        self.assertIn('Speed (km/h): 20.0 (km/h)', lines)
        self.assertFalse(any(line.startswith('GPS Speed') for line in lines))

    def test_unknown_series(self):
        self.assertIsNone(self.chart_data.get('altitude'))

    def test_empty_table(self):
        chart_data = ChartSeriesBuilder().build([])
        self.assertEqual(len(chart_data), 0)
        self.assertEqual(len(chart_data.series), len(CHART_TRACES))


if __name__ == '__main__':
    unittest.main()
