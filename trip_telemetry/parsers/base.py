"""
Base class for telemetry log parsers and the row table they produce.

Defines the common interface that all log format parsers must implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, Iterator, List, Mapping, Sequence, Union
import pandas as pd
from pathlib import Path


# Columns consumed by validation, summary, chart and map
CORE_COLUMNS = [
    'date', 'time', 'totaldistance', 'battery_level', 'system_temp',
    'speed', 'power', 'current', 'voltage', 'pwm', 'latitude', 'longitude'
]


class RowTable:
    """
    Ordered, read-only table of telemetry rows.

    Every cell is kept as its raw string; numeric interpretation is left to
    the consumers. Columns that are absent read as empty strings.
    """

    def __init__(self, frame: Optional[pd.DataFrame] = None):
        """
        Args:
            frame: DataFrame holding the rows in file order
        """
        if frame is None:
            frame = pd.DataFrame()
        frame = frame.astype(object)
        frame.columns = [str(col).strip() for col in frame.columns]
        frame = frame.where(frame.notna(), '')
        self._frame = frame.astype(str).reset_index(drop=True)

    @classmethod
    def from_records(cls, records: Sequence[Mapping[str, Any]]) -> 'RowTable':
        """Build a table from a sequence of field -> value mappings."""
        return cls(pd.DataFrame.from_records([dict(record) for record in records]))

    @classmethod
    def coerce(cls, rows: Union['RowTable', pd.DataFrame, Sequence[Mapping[str, Any]], None]) -> 'RowTable':
        """Accept a RowTable, a DataFrame or a list of mappings."""
        if isinstance(rows, RowTable):
            return rows
        if rows is None:
            return cls()
        if isinstance(rows, pd.DataFrame):
            return cls(rows)
        return cls.from_records(list(rows))

    @property
    def columns(self) -> List[str]:
        """Column names in file order."""
        return list(self._frame.columns)

    @property
    def empty(self) -> bool:
        return len(self._frame) == 0

    def has_column(self, name: str) -> bool:
        return name in self._frame.columns

    def column(self, name: str) -> List[str]:
        """Raw values of one column, empty strings when the column is absent."""
        if name not in self._frame.columns:
            return [''] * len(self._frame)
        return self._frame[name].tolist()

    def to_frame(self) -> pd.DataFrame:
        """Return a copy of the underlying DataFrame."""
        return self._frame.copy()

    def row(self, index: int) -> Dict[str, str]:
        """Return one row (0-based) as a dictionary."""
        return self._frame.iloc[index].to_dict()

    def get(self, index: int, field: str) -> str:
        """Raw value of ``field`` in row ``index`` ('' when absent)."""
        if field not in self._frame.columns:
            return ''
        return self._frame.at[index, field]

    def first(self) -> Optional[Dict[str, str]]:
        return self.row(0) if len(self) else None

    def last(self) -> Optional[Dict[str, str]]:
        return self.row(len(self) - 1) if len(self) else None

    def __len__(self) -> int:
        return len(self._frame)

    def __getitem__(self, index: int) -> Dict[str, str]:
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError(f"Row index out of range: {index}")
        return self.row(index)

    def __iter__(self) -> Iterator[Dict[str, str]]:
        for index in range(len(self)):
            yield self.row(index)

    def __repr__(self) -> str:
        return f"RowTable(rows={len(self)}, columns={self.columns})"


class BaseLogParser(ABC):
    """Abstract base class for telemetry log parsers."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the parser with optional configuration.

        Args:
            config: Optional configuration dictionary for parser settings
        """
        self.config = config or {}
        self._supported_extensions = set()

    @property
    def supported_extensions(self) -> set:
        """Return set of supported file extensions."""
        return self._supported_extensions

    @abstractmethod
    def parse(self, file_path: str) -> RowTable:
        """
        Parse a log file and return its rows.

        Args:
            file_path: Path to the log file to parse

        Returns:
            RowTable with one row per telemetry sample

        Raises:
            FileNotFoundError: If the file doesn't exist
            CorruptedFileError: If the file cannot be read as a table
        """
        pass

    def validate_file(self, file_path: str) -> bool:
        """
        Validate that the file exists and has a supported extension.

        Args:
            file_path: Path to the file to validate

        Returns:
            True if file is valid, False otherwise
        """
        path = Path(file_path)
        return (path.exists() and
                path.is_file() and
                path.suffix.lower() in self._supported_extensions)
