# roundtrip_planner/api/services/map_service.py
"""Service layer for map-related operations."""

import logging
from typing import Any, Dict, List, Optional

from roundtrip_planner.api.models import Itinerary, LatLng

logger = logging.getLogger(__name__)

# One color per segment, in travel order; later segments reuse the last one.
SEGMENT_COLORS = ["blue", "green", "red"]


class MapService:
    """Prepares resolved routes for drawing on the map."""

    @staticmethod
    def validate_coordinates(lat: float, lng: float) -> bool:
        """Validate that coordinates are within valid ranges.

        Args:
            lat: Latitude
            lng: Longitude

        Returns:
            True if valid, False otherwise
        """
        return -90 <= lat <= 90 and -180 <= lng <= 180

    @staticmethod
    def segment_color(index: int) -> str:
        """Color for the 0-based segment ``index``."""
        return SEGMENT_COLORS[min(index, len(SEGMENT_COLORS) - 1)]

    @staticmethod
    def calculate_bounds(itinerary: Itinerary) -> Dict[str, Any]:
        """Calculate the bounding box covering every leg's polyline.

        Args:
            itinerary: Resolved itinerary

        Returns:
            Dictionary with north, south, east, west bounds (empty if no geometry)
        """
        points: List[LatLng] = []
        for leg in itinerary.legs:
            points.extend(leg.route.coordinates())

        if not points:
            return {}

        lats = [p[0] for p in points]
        lngs = [p[1] for p in points]
        return {
            'north': max(lats),
            'south': min(lats),
            'east': max(lngs),
            'west': min(lngs)
        }

    @staticmethod
    def to_map_payload(itinerary: Itinerary) -> Dict[str, Any]:
        """Build polylines (with segment colors) plus bounds for the frontend."""
        overlays = []
        for index, leg in enumerate(itinerary.legs):
            overlays.append({
                'segment': index + 1,
                'color': MapService.segment_color(index),
                'polyline': leg.route.polyline,
            })

        bounds = MapService.calculate_bounds(itinerary)
        if not bounds:
            logger.warning("Itinerary has no route geometry to draw")
        return {'overlays': overlays, 'bounds': bounds}

    @staticmethod
    def parse_point(data: Optional[Dict[str, Any]]) -> Optional[LatLng]:
        """Read a ``lat``/``lng`` pair from request data.

        Returns:
            (lat, lng) or None when missing

        Raises:
            ValueError: if values are not numbers or are out of range
        """
        if not data or data.get('lat') is None or data.get('lng') is None:
            return None
        try:
            lat, lng = float(data['lat']), float(data['lng'])
        except TypeError as e:
            raise ValueError(f"Coordinates must be numbers: {e}") from e
        if not MapService.validate_coordinates(lat, lng):
            raise ValueError(f"Coordinates out of range: {lat}, {lng}")
        return lat, lng


# Export for use in other modules
__all__ = ['MapService']
