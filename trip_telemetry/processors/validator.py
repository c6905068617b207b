"""
Sensor range validation for telemetry rows.

Flags rows whose battery level or controller temperature fall outside
physically plausible ranges. Findings are informational: they are reported
to the user and never stop processing.
"""

import math
import logging
from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Tuple

from .base import BaseProcessor
from ..parsers.base import RowTable
from ..utils.numeric import parse_float

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationFinding:
    """One invalid row: 1-based row number and its violation messages."""

    row_number: int
    messages: Tuple[str, ...]

    @property
    def description(self) -> str:
        return ', '.join(self.messages)

    def to_dict(self) -> Dict[str, Any]:
        return {'row_number': self.row_number, 'messages': list(self.messages)}


@dataclass(frozen=True)
class RangeCheck:
    """Inclusive range check on one field."""

    field: str
    label: str
    minimum: float
    maximum: float

    def message(self, raw_value: str, flag_unparseable: bool = False) -> Optional[str]:
        """Return the violation message for ``raw_value``, or None if it passes."""
        value = parse_float(raw_value)

        # NaN fails both comparisons, so non-numeric values pass
        if value < self.minimum or value > self.maximum:
            return f"{self.label} = {raw_value}"

        if flag_unparseable and math.isnan(value) and raw_value.strip():
            return f"{self.label} = {raw_value} (not a number)"

        return None


class SensorRangeValidator(BaseProcessor):
    """Checks battery level and system temperature of every row."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize validator.

        Args:
            config: Configuration dictionary with range bounds
        """
        super().__init__(config)

        self.flag_unparseable = bool(self.config.get('flag_unparseable', False))

        # Order matters: battery messages precede temperature messages
        self.checks = [
            RangeCheck('battery_level', 'Battery',
                       self.config.get('battery_min', 0.0),
                       self.config.get('battery_max', 100.0)),
            RangeCheck('system_temp', 'Temperature',
                       self.config.get('temperature_min', -50.0),
                       self.config.get('temperature_max', 100.0)),
        ]

    def process(self, rows) -> List[ValidationFinding]:
        return self.validate(rows)

    def validate(self, rows) -> List[ValidationFinding]:
        """
        Validate every row of the table.

        Args:
            rows: RowTable, DataFrame or list of row mappings

        Returns:
            Findings in row order (empty when every row passes)
        """
        table = RowTable.coerce(rows)
        columns = {check.field: table.column(check.field) for check in self.checks}

        findings = []
        for index in range(len(table)):
            messages = []
            for check in self.checks:
                message = check.message(columns[check.field][index], self.flag_unparseable)
                if message:
                    messages.append(message)

            if messages:
                findings.append(ValidationFinding(row_number=index + 1, messages=tuple(messages)))

        if findings:
            logger.info(f"Found {len(findings)} rows with out-of-range sensor values")
        else:
            logger.debug(f"All {len(table)} rows passed range validation")

        return findings


def validate(rows, config: Optional[Dict[str, Any]] = None) -> List[ValidationFinding]:
    """Validate a row table with default (or given) ranges."""
    return SensorRangeValidator(config).validate(rows)
