"""
Error handling utilities for trip telemetry processing.

Provides the exception hierarchy, stage isolation for the processing
pipeline and row table integrity checks.
"""

import pandas as pd
from typing import Dict, Any, List, Optional
import logging
import traceback
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Base exception for processing errors."""
    pass


class CorruptedFileError(ProcessingError):
    """Exception raised when a telemetry file is corrupted or unreadable."""
    pass


class ConfigurationError(ProcessingError, ValueError):
    """Exception raised for invalid configuration values."""
    pass


class RobustErrorHandler:
    """Isolates pipeline stages so one failing stage does not stop the others."""

    def __init__(self):
        """Initialize error handler with an empty error log."""
        self.error_log = []

    @contextmanager
    def handle_processing_errors(self, operation_name: str, critical: bool = False):
        """
        Context manager for handling processing errors.

        Args:
            operation_name: Name of the operation being performed
            critical: Whether the operation is critical (raises on failure)
        """
        try:
            logger.debug(f"Starting operation: {operation_name}")
            yield
            logger.debug(f"Completed operation: {operation_name}")
        except Exception as e:
            error_info = {
                'operation': operation_name,
                'error_type': type(e).__name__,
                'error_message': str(e),
                'traceback': traceback.format_exc()
            }
            self.error_log.append(error_info)

            logger.error(f"Error in {operation_name}: {e}")
            logger.debug(f"Full traceback: {traceback.format_exc()}")

            if critical:
                raise ProcessingError(f"Critical error in {operation_name}: {e}") from e
            else:
                logger.warning(f"Non-critical error in {operation_name}, continuing...")

    def has_errors(self) -> bool:
        """Return True if any operation failed."""
        return bool(self.error_log)

    def get_error_summary(self) -> Dict[str, Any]:
        """
        Get a summary of all errors encountered.

        Returns:
            Dictionary with error statistics and details
        """
        if not self.error_log:
            return {'total_errors': 0, 'error_types': {}, 'operations': {}}

        error_types = {}
        operations = {}

        for error in self.error_log:
            error_type = error['error_type']
            operation = error['operation']

            error_types[error_type] = error_types.get(error_type, 0) + 1
            operations[operation] = operations.get(operation, 0) + 1

        return {
            'total_errors': len(self.error_log),
            'error_types': error_types,
            'operations': operations,
            'recent_errors': [
                {k: v for k, v in error.items() if k != 'traceback'}
                for error in self.error_log[-5:]
            ]
        }


def validate_dataframe_integrity(df: Optional[pd.DataFrame],
                                 required_columns: Optional[List[str]] = None) -> Dict[str, Any]:
    """
    Check a row table for emptiness, missing columns and blank cells.

    Args:
        df: DataFrame to validate
        required_columns: List of required column names

    Returns:
        Dictionary with validation results
    """
    if df is None:
        return {
            'valid': False,
            'error': 'DataFrame is None',
            'row_count': 0,
            'column_count': 0,
            'missing_columns': required_columns or [],
            'blank_percentages': {}
        }

    if df.empty:
        return {
            'valid': False,
            'error': 'DataFrame is empty',
            'row_count': 0,
            'column_count': len(df.columns),
            'missing_columns': [col for col in (required_columns or []) if col not in df.columns],
            'blank_percentages': {}
        }

    missing_columns = []
    if required_columns:
        missing_columns = [col for col in required_columns if col not in df.columns]

    # Cells are strings, so "missing" means blank rather than NaN
    blank_percentages = {}
    for col in df.columns:
        blank_count = (df[col].astype(str).str.strip() == '').sum()
        blank_percentages[col] = blank_count / len(df) * 100

    is_valid = len(missing_columns) == 0

    return {
        'valid': is_valid,
        'error': f'Missing columns: {missing_columns}' if missing_columns else None,
        'row_count': len(df),
        'column_count': len(df.columns),
        'missing_columns': missing_columns,
        'blank_percentages': blank_percentages
    }
