"""
GPS track extraction.

Turns latitude/longitude cells into the coordinate path drawn on the map,
and resolves chart hover positions (row indices) to map coordinates.
"""

import math
import logging
from typing import Dict, Any, List, Optional, Tuple

from .base import BaseProcessor
from ..parsers.base import RowTable
from ..utils.numeric import parse_float

logger = logging.getLogger(__name__)

LatLon = Tuple[float, float]


def _coordinate_pair(latitude: str, longitude: str) -> Optional[LatLon]:
    """Parse one coordinate pair, None when either cell is blank or not a number."""
    if not latitude.strip() or not longitude.strip():
        return None

    lat = parse_float(latitude)
    lon = parse_float(longitude)
    if math.isnan(lat) or math.isnan(lon):
        return None
    return (lat, lon)


class TrackExtractor(BaseProcessor):
    """Extracts the GPS track of a trip."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.lat_field = self.config.get('latitude_field', 'latitude')
        self.lon_field = self.config.get('longitude_field', 'longitude')

    def process(self, rows) -> List[LatLon]:
        return self.extract(rows)

    def extract(self, rows) -> List[LatLon]:
        """
        Collect (latitude, longitude) pairs in row order.

        Args:
            rows: RowTable, DataFrame or list of row mappings

        Returns:
            Coordinate pairs; rows missing either coordinate are skipped
        """
        table = RowTable.coerce(rows)
        pairs = zip(table.column(self.lat_field), table.column(self.lon_field))

        track = []
        for latitude, longitude in pairs:
            pair = _coordinate_pair(latitude, longitude)
            if pair is not None:
                track.append(pair)

        if not track:
            logger.warning("No GPS coordinates in telemetry table")
        else:
            skipped = len(table) - len(track)
            if skipped:
                logger.debug(f"Skipped {skipped} rows without usable coordinates")

        return track

    def position_at(self, rows, index: int) -> Optional[LatLon]:
        """
        Resolve a row index to its coordinates.

        Args:
            rows: RowTable, DataFrame or list of row mappings
            index: 0-based row index

        Returns:
            (latitude, longitude), or None if the index is out of range or the
            row has no usable coordinates
        """
        table = RowTable.coerce(rows)
        if not 0 <= index < len(table):
            return None
        return _coordinate_pair(table.get(index, self.lat_field), table.get(index, self.lon_field))
