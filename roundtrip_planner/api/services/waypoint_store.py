# roundtrip_planner/api/services/waypoint_store.py
"""Holds the user-confirmed waypoints of the trip being planned."""

import logging
from typing import Any, Dict, List, Optional

from roundtrip_planner.api.errors import InsufficientWaypoints
from roundtrip_planner.api.models import WAYPOINT_SLOTS, LatLng, Waypoint

logger = logging.getLogger(__name__)


class WaypointStore:
    """Three waypoint slots: start, stop 1 and stop 2.

    The store is the single source of truth for what the user confirmed;
    the UI reflects it, never the other way round.
    """

    def __init__(self, waypoints: Optional[List[Waypoint]] = None):
        self._slots: List[Waypoint] = [Waypoint() for _ in range(WAYPOINT_SLOTS)]
        for index, waypoint in enumerate(waypoints or []):
            self.update(index, waypoint.address, waypoint.point)

    def __len__(self):
        return len(self._slots)

    def __getitem__(self, index: int) -> Waypoint:
        return self._slots[self._check_index(index)]

    @property
    def waypoints(self) -> List[Waypoint]:
        return list(self._slots)

    def _check_index(self, index: int) -> int:
        if not isinstance(index, int) or not 0 <= index < len(self._slots):
            raise IndexError(f"Waypoint index must be in [0, {len(self._slots)}), got {index!r}")
        return index

    def update(self, index: int, address: Optional[str], point: Optional[LatLng]) -> None:
        """Overwrite the address and point of a slot in one assignment."""
        self._slots[self._check_index(index)] = Waypoint(
            address=address,
            point=tuple(point) if point is not None else None,
        )
        logger.debug(f"Waypoint {index} set to {address!r}")

    def clear(self, index: int) -> None:
        """Mark a slot as unresolved (user edited or emptied the input)."""
        self._slots[self._check_index(index)] = Waypoint()
        logger.debug(f"Waypoint {index} cleared")

    def swap(self, i: int, j: int) -> None:
        """Exchange the full contents of two slots."""
        self._check_index(i)
        self._check_index(j)
        self._slots[i], self._slots[j] = self._slots[j], self._slots[i]

    def is_ready_for_trip(self) -> bool:
        """Start must be resolved, plus at least one of the two stops."""
        start, stop1, stop2 = self._slots[0], self._slots[1], self._slots[2]
        return start.is_resolved and (stop1.is_resolved or stop2.is_resolved)

    def closed_round_trip(self) -> List[Waypoint]:
        """Resolved waypoints in slot order with the first appended again.

        Raises:
            InsufficientWaypoints: if the store is not ready for a trip
        """
        if not self.is_ready_for_trip():
            raise InsufficientWaypoints()

        resolved = [w for w in self._slots if w.is_resolved]
        resolved.append(resolved[0])
        return resolved

    def to_dict(self) -> Dict[str, Any]:
        return {
            "waypoints": [w.to_dict() for w in self._slots],
            "ready": self.is_ready_for_trip(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "WaypointStore":
        entries = (data or {}).get("waypoints") or []
        return cls([Waypoint.from_dict(entry) for entry in entries[:WAYPOINT_SLOTS]])


__all__ = ["WaypointStore"]
