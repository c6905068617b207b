"""
CSV parser for telemetry logs.

Reads a header-row CSV export into a RowTable, keeping every cell as the
raw string found in the file.
"""

from .base import BaseLogParser, RowTable, CORE_COLUMNS
from ..utils.error_handling import CorruptedFileError, validate_dataframe_integrity
import pandas as pd
from pathlib import Path
from io import StringIO
import logging


class CsvLogParser(BaseLogParser):
    """Parser for CSV telemetry exports."""

    def __init__(self, config=None):
        super().__init__(config)
        self._supported_extensions = {'.csv', '.txt'}
        self.logger = logging.getLogger(__name__)

        self.delimiter = self.config.get('delimiter', ',')
        self.encoding = self.config.get('encoding', 'utf-8-sig')

    def parse(self, file_path: str) -> RowTable:
        """
        Parse a CSV telemetry file.

        Args:
            file_path: Path to the CSV file

        Returns:
            RowTable in file order
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Telemetry file not found: {file_path}")

        self.logger.info(f"Parsing CSV telemetry file: {path.name}")

        try:
            frame = pd.read_csv(
                path,
                sep=self.delimiter,
                dtype=str,
                keep_default_na=False,
                encoding=self.encoding,
                index_col=False
            )
        except pd.errors.EmptyDataError:
            self.logger.warning(f"File {path.name} contains no header row")
            return RowTable()
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise CorruptedFileError(f"Cannot read {path.name} as CSV: {e}") from e

        return self._to_row_table(frame, path.name)

    def parse_text(self, text: str, source_name: str = "<text>") -> RowTable:
        """
        Parse CSV content already held in memory.

        Args:
            text: CSV text including the header row
            source_name: Name used in log messages

        Returns:
            RowTable in input order
        """
        if not text.strip():
            self.logger.warning(f"{source_name} is empty")
            return RowTable()

        try:
            frame = pd.read_csv(
                StringIO(text.lstrip('\ufeff')),
                sep=self.delimiter,
                dtype=str,
                keep_default_na=False,
                index_col=False
            )
        except pd.errors.ParserError as e:
            raise CorruptedFileError(f"Cannot read {source_name} as CSV: {e}") from e

        return self._to_row_table(frame, source_name)

    def _to_row_table(self, frame: pd.DataFrame, source_name: str) -> RowTable:
        """Wrap a parsed frame and report missing core columns."""
        table = RowTable(frame)

        integrity = validate_dataframe_integrity(table.to_frame(), CORE_COLUMNS)
        if integrity['missing_columns']:
            self.logger.warning(
                f"{source_name} is missing columns: {', '.join(integrity['missing_columns'])}"
            )

        self.logger.info(f"Parsed {len(table)} rows from {source_name}")
        return table
