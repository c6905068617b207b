"""
Numeric parsing and formatting helpers for raw telemetry strings.

CSV cells arrive as opaque strings. Two parse policies are used throughout
the package:

- ``parse_float``: NaN-aware parse used by range checks. The longest leading
  decimal number of the trimmed string is taken ("12.5V" -> 12.5); strings
  without a numeric prefix give NaN.
- ``parse_number``: same parse, but NaN defaults to 0.0. Used for
  aggregation, chart series and distance.
"""

import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

_NUMBER_PREFIX = re.compile(
    r'^[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)'
)

_ONE_DECIMAL = Decimal('0.1')


def parse_float(value: Any) -> float:
    """
    Parse a raw cell value into a float, NaN when no number can be read.

    Args:
        value: Raw cell value (normally a string; numbers pass through)

    Returns:
        Parsed float or NaN
    """
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)

    match = _NUMBER_PREFIX.match(str(value).strip())
    if not match:
        return math.nan

    text = match.group(0)
    if text.endswith('Infinity'):
        return -math.inf if text.startswith('-') else math.inf
    return float(text)


def parse_number(value: Any) -> float:
    """Parse a raw cell value, defaulting to 0.0 when it is not a number."""
    result = parse_float(value)
    if math.isnan(result):
        return 0.0
    return result


def format_fixed(value: float, digits: int = 1) -> str:
    """
    Format a float with a fixed number of decimals.

    Ties round half away from zero on the exact binary value.

    Args:
        value: Value to format
        digits: Number of decimal places

    Returns:
        Formatted string ("NaN" and "Infinity" for non-finite values)
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'

    if value == 0:
        value = 0.0

    quantum = _ONE_DECIMAL if digits == 1 else Decimal(1).scaleb(-digits)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{rounded:f}"
