"""
Unit tests for the CSV telemetry parser and the row table it produces.

Tests parsing of well-formed files, header quirks and unreadable input.
"""

import unittest
import tempfile
import shutil
import pandas as pd
from pathlib import Path

from trip_telemetry.parsers import CsvLogParser, RowTable, CORE_COLUMNS
from trip_telemetry.processors.validator import SensorRangeValidator
from trip_telemetry.utils.error_handling import CorruptedFileError


SAMPLE_CSV = (
    "date,time,totaldistance,battery_level,system_temp,speed,latitude,longitude\n"
    "2024-01-01,10:00:00,1000,80,20,10,1.0,2.0\n"
    "2024-01-01,10:01:00,2000,70,22,20,1.1,2.1\n"
)


class TestRowTable(unittest.TestCase):
    """Test RowTable behaviour."""

    def setUp(self):
        """Set up test fixtures."""
        self.table = RowTable.from_records([
            {'date': '2024-01-01', 'speed': '10', 'pwm': None},
            {'date': '2024-01-01', 'speed': 20, 'pwm': 1.5},
        ])

    def test_cells_are_strings(self):
        """Test that every cell is kept as a string."""
        self.assertEqual(self.table.get(1, 'speed'), '20')
        self.assertEqual(self.table.get(1, 'pwm'), '1.5')
        self.assertEqual(self.table.get(0, 'pwm'), '')

    def test_missing_column_reads_blank(self):
        """Test that absent columns read as empty strings."""
        self.assertFalse(self.table.has_column('voltage'))
        self.assertEqual(self.table.column('voltage'), ['', ''])
        self.assertEqual(self.table.get(0, 'voltage'), '')

    def test_first_and_last(self):
        """Test first and last row access."""
        self.assertEqual(self.table.first()['speed'], '10')
        self.assertEqual(self.table.last()['speed'], '20')
        self.assertEqual(self.table[-1]['speed'], '20')

    def test_index_out_of_range(self):
        """Test that indexing past the end raises IndexError."""
        with self.assertRaises(IndexError):
            self.table[2]

    def test_empty_table(self):
        """Test an empty table."""
        table = RowTable()
        self.assertTrue(table.empty)
        self.assertEqual(len(table), 0)
        self.assertIsNone(table.first())
        self.assertIsNone(table.last())
        self.assertEqual(list(table), [])

    def test_coerce(self):
        """Test that coerce accepts tables, frames, lists and None."""
        self.assertIs(RowTable.coerce(self.table), self.table)
        self.assertEqual(len(RowTable.coerce(pd.DataFrame({'a': ['1', '2']}))), 2)
        self.assertEqual(len(RowTable.coerce([{'a': '1'}])), 1)
        self.assertTrue(RowTable.coerce(None).empty)

    def test_column_names_are_stripped(self):
        """Test that header whitespace is removed."""
        table = RowTable(pd.DataFrame({' speed ': ['1']}))
        self.assertEqual(table.columns, ['speed'])

    def test_iteration_order(self):
        """Test that iteration follows row order."""
        speeds = [row['speed'] for row in self.table]
        self.assertEqual(speeds, ['10', '20'])


class TestCsvLogParser(unittest.TestCase):
    """Test CSV parser functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.parser = CsvLogParser()
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir)

    def _write(self, name, content, encoding='utf-8'):
        path = Path(self.temp_dir) / name
        path.write_text(content, encoding=encoding)
        return str(path)

    def test_supported_extensions(self):
        """Test that parser supports correct extensions."""
        self.assertIn('.csv', self.parser.supported_extensions)

    def test_validate_file_nonexistent(self):
        """Test validation of non-existent file."""
        self.assertFalse(self.parser.validate_file('nonexistent.csv'))

    def test_validate_file_wrong_extension(self):
        """Test validation of file with wrong extension."""
        path = self._write('trip.json', '{}')
        self.assertFalse(self.parser.validate_file(path))

    def test_parse_valid_file(self):
        """Test parsing a well-formed file."""
        table = self.parser.parse(self._write('trip.csv', SAMPLE_CSV))

        self.assertEqual(len(table), 2)
        self.assertEqual(table.get(0, 'battery_level'), '80')
        self.assertEqual(table.get(1, 'time'), '10:01:00')
        self.assertEqual(table.get(1, 'latitude'), '1.1')

    def test_blank_cells_stay_blank(self):
        """Test that blank cells are read as empty strings, not NaN."""
        content = "date,time,latitude,longitude\n2024-01-01,10:00:00,,\n"
        table = self.parser.parse(self._write('trip.csv', content))

        self.assertEqual(table.get(0, 'latitude'), '')
        self.assertEqual(table.get(0, 'longitude'), '')

    def test_na_strings_are_not_converted(self):
        """Test that strings like 'NA' survive as raw text."""
        content = "battery_level,system_temp\nNA,null\n"
        table = self.parser.parse(self._write('trip.csv', content))

        self.assertEqual(table.get(0, 'battery_level'), 'NA')
        self.assertEqual(table.get(0, 'system_temp'), 'null')

    def test_byte_order_mark(self):
        """Test that a UTF-8 BOM does not leak into the first column name."""
        table = self.parser.parse(self._write('trip.csv', '\ufeff' + SAMPLE_CSV))
        self.assertEqual(table.columns[0], 'date')

    def test_header_only_file(self):
        """Test that a header without rows yields an empty table."""
        table = self.parser.parse(self._write('trip.csv', "date,time,battery_level\n"))

        self.assertTrue(table.empty)
        self.assertEqual(table.columns, ['date', 'time', 'battery_level'])

    def test_empty_file(self):
        """Test that an empty file yields an empty table."""
        table = self.parser.parse(self._write('trip.csv', ''))
        self.assertTrue(table.empty)

    def test_missing_file(self):
        """Test that a missing file raises FileNotFoundError."""
        with self.assertRaises(FileNotFoundError):
            self.parser.parse(str(Path(self.temp_dir) / 'missing.csv'))

    def test_malformed_file(self):
        """Test that ragged rows are reported as a corrupted file."""
        path = self._write('trip.csv', "a,b\n1,2\n3,4,5,6\n")
        with self.assertRaises(CorruptedFileError):
            self.parser.parse(path)

    def test_missing_core_columns_warns(self):
        """Test that absent core columns are logged."""
        path = self._write('trip.csv', "date,time\n2024-01-01,10:00:00\n")
        with self.assertLogs('trip_telemetry.parsers.csv_parser', level='WARNING') as logs:
            self.parser.parse(path)
        self.assertTrue(any('battery_level' in message for message in logs.output))

    def test_parse_text(self):
        """Test parsing CSV content held in memory."""
        table = self.parser.parse_text(SAMPLE_CSV)
        self.assertEqual(len(table), 2)
        self.assertEqual(table.columns[0], 'date')
        self.assertTrue(all(column in CORE_COLUMNS for column in table.columns))
        self.assertTrue(self.parser.parse_text('   ').empty)

    def test_trailing_delimiter_keeps_columns_aligned(self):
        """Test that a trailing comma on every row does not shift columns."""
        content = (
            "date,time,totaldistance,battery_level,system_temp\n"
            "2024-01-01,10:00:00,1000,80,20,\n"
            "2024-01-01,10:01:00,2000,150,22,\n"
        )
        table = self.parser.parse(self._write('trip.csv', content))

        self.assertEqual(table.columns,
                         ['date', 'time', 'totaldistance', 'battery_level', 'system_temp'])
        self.assertEqual(table.row(0), {'date': '2024-01-01', 'time': '10:00:00',
                                        'totaldistance': '1000', 'battery_level': '80',
                                        'system_temp': '20'})

        findings = SensorRangeValidator().validate(self.parser.parse_text(content))
        self.assertEqual([f.description for f in findings], ['Battery = 150'])

    def test_cells_keep_leading_spaces(self):
        """Test that cell text reaches findings exactly as written."""
        table = self.parser.parse_text("battery_level,system_temp\n 150,20\n")

        self.assertEqual(table.get(0, 'battery_level'), ' 150')
        findings = SensorRangeValidator().validate(table)
        self.assertEqual(findings[0].description, 'Battery =  150')

    def test_custom_delimiter(self):
        """Test a semicolon separated export."""
        parser = CsvLogParser({'delimiter': ';'})
        table = parser.parse_text("speed;power\n10;200\n")
        self.assertEqual(table.get(0, 'power'), '200')


if __name__ == '__main__':
    unittest.main()
