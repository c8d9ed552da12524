"""Shared data structures for round-trip planning.

Waypoints, routes and itineraries are plain frozen dataclasses so the
geocoding / directions adapters and the resolution services can share a
single source-of-truth definition without importing each other.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from googlemaps.convert import decode_polyline

# (latitude, longitude)
LatLng = Tuple[float, float]

# start, stop 1, stop 2
WAYPOINT_SLOTS = 3


@dataclass(frozen=True)
class Waypoint:
    """A trip stop: the confirmed address label plus its resolved point."""

    address: Optional[str] = None
    point: Optional[LatLng] = None

    @property
    def is_resolved(self) -> bool:
        return self.point is not None

    def to_dict(self) -> dict:
        return {
            "address": self.address,
            "lat": self.point[0] if self.point else None,
            "lng": self.point[1] if self.point else None,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Waypoint":
        if not data:
            return cls()
        lat, lng = data.get("lat"), data.get("lng")
        point = (float(lat), float(lng)) if lat is not None and lng is not None else None
        return cls(address=data.get("address"), point=point)


@dataclass(frozen=True)
class Placemark:
    """A geocoding candidate offered to the user for confirmation."""

    address: str
    point: LatLng
    place_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "address": self.address,
            "lat": self.point[0],
            "lng": self.point[1],
            "place_id": self.place_id,
        }


@dataclass(frozen=True)
class Step:
    """One turn-by-turn instruction of a route."""

    instructions: str
    distance: float  # meters

    def to_dict(self) -> dict:
        return {"instructions": self.instructions, "distance": self.distance}


@dataclass(frozen=True)
class Route:
    """A candidate route returned by the directions provider."""

    expected_duration: float  # seconds
    distance: float  # meters
    polyline: str = ""  # encoded overview polyline
    steps: Tuple[Step, ...] = field(default_factory=tuple)
    summary: str = ""

    def coordinates(self) -> List[LatLng]:
        """Decode the overview polyline into (lat, lng) pairs."""
        if not self.polyline:
            return []
        return [(p["lat"], p["lng"]) for p in decode_polyline(self.polyline)]

    def to_dict(self) -> dict:
        return {
            "expected_duration": self.expected_duration,
            "distance": self.distance,
            "polyline": self.polyline,
            "summary": self.summary,
            "steps": [step.to_dict() for step in self.steps],
        }


@dataclass(frozen=True)
class Leg:
    """One directed segment of the trip with its selected route."""

    start_address: str
    end_address: str
    route: Route

    def to_dict(self) -> dict:
        return {
            "start_address": self.start_address,
            "end_address": self.end_address,
            "route": self.route.to_dict(),
        }


@dataclass(frozen=True)
class Itinerary:
    """The complete ordered set of legs plus the aggregate trip duration."""

    legs: Tuple[Leg, ...]
    total_duration: float

    @property
    def total_distance(self) -> float:
        return sum(leg.route.distance for leg in self.legs)

    def to_dict(self) -> dict:
        return {
            "legs": [leg.to_dict() for leg in self.legs],
            "total_duration": self.total_duration,
            "total_distance": self.total_distance,
        }
