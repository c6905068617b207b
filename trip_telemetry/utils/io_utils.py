"""
File I/O utilities.

This module provides common file handling operations.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional


class FileHandler:
    """Handles file I/O operations for the trip telemetry processor."""

    def __init__(self, config=None):
        """Initialize file handler."""
        self.config = config or {}

    def save_json(self, data: Dict[str, Any], file_path: str):
        """
        Save dictionary to JSON file.

        Args:
            data: Dictionary to save
            file_path: Path where to save the file
        """
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, default=str, ensure_ascii=False)

    def save_text(self, text: str, file_path: str):
        """
        Save text (HTML, plain reports) to a file.

        Args:
            text: Content to write
            file_path: Path where to save the file
        """
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding='utf-8')

    def find_csv_files(self, directory: str, extensions: Optional[List[str]] = None) -> List[str]:
        """
        Find telemetry CSV files in a directory.

        Args:
            directory: Directory to search
            extensions: List of file extensions to look for

        Returns:
            List of found file paths
        """
        if extensions is None:
            extensions = ['.csv']

        directory_path = Path(directory)
        found_files = []

        for ext in extensions:
            found_files.extend(directory_path.glob(f"*{ext}"))

        return [str(f) for f in sorted(found_files)]

    def validate_output_directory(self, output_dir: str) -> bool:
        """
        Validate that output directory can be created/written to.

        Args:
            output_dir: Output directory path

        Returns:
            True if directory is valid, False otherwise
        """
        try:
            path = Path(output_dir)
            path.mkdir(parents=True, exist_ok=True)

            # Test write access
            test_file = path / ".test_write"
            test_file.write_text("test")
            test_file.unlink()

            return True
        except OSError:
            return False
