"""
Base classes for data processors.

Defines common interfaces for all processing components in the pipeline.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

from ..parsers.base import RowTable


class BaseProcessor(ABC):
    """Abstract base class for row table processors."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the processor with optional configuration.

        Args:
            config: Optional configuration dictionary for processor settings
        """
        self.config = config or {}

    @abstractmethod
    def process(self, rows: RowTable) -> Any:
        """
        Process a row table and return the processor's result.

        Args:
            rows: Input row table

        Returns:
            Processor-specific result
        """
        pass

    def validate_input(self, rows: Any) -> bool:
        """
        Check that the input can be treated as a non-empty row table.

        Args:
            rows: Input to check

        Returns:
            True if rows are present, False otherwise
        """
        try:
            return not RowTable.coerce(rows).empty
        except (TypeError, ValueError):
            return False
