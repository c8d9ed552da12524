# roundtrip_planner/api/services/trip_service.py
"""Service layer that resolves a closed round trip into an itinerary."""

import enum
import logging
from typing import Callable, List, Optional, Sequence

from roundtrip_planner.api.config import get_directions_config
from roundtrip_planner.api.errors import DirectionsUnavailable
from roundtrip_planner.api.models import Itinerary, Leg, Route, Waypoint
from roundtrip_planner.api.services.waypoint_store import WaypointStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def select_fastest_route(routes: Sequence[Route]) -> Route:
    """Return the route with the smallest expected duration.

    Ties go to the earliest candidate in provider order.
    """
    if not routes:
        raise DirectionsUnavailable()
    return min(routes, key=lambda r: r.expected_duration)


class LegResolver:
    """Resolves one directed pair of waypoints into its fastest route."""

    def __init__(self, provider, mode: Optional[str] = None, alternates: Optional[bool] = None):
        cfg = get_directions_config()
        self.provider = provider
        self.mode = mode or cfg["mode"]
        self.alternates = cfg["alternatives"] if alternates is None else alternates

    def resolve_leg(self, origin: Waypoint, destination: Waypoint) -> Leg:
        """Request alternate routes and keep the quickest one.

        Raises:
            DirectionsUnavailable: if the provider fails or returns no routes
        """
        routes = self.provider.route(
            origin.point,
            destination.point,
            alternates=self.alternates,
            mode=self.mode,
        )
        if not routes:
            logger.warning(f"No routes between {origin.address!r} and {destination.address!r}")
            raise DirectionsUnavailable()

        route = select_fastest_route(routes)
        logger.debug(
            f"Picked {route.expected_duration:.0f}s route out of {len(routes)} "
            f"for {origin.address!r} -> {destination.address!r}"
        )
        return Leg(
            start_address=origin.address or "",
            end_address=destination.address or "",
            route=route,
        )


class AggregatorState(enum.Enum):
    IDLE = "idle"
    RESOLVING_LEG = "resolving_leg"
    COMPLETE = "complete"
    FAILED = "failed"


class ItineraryAggregator:
    """Resolves every leg of a closed round trip, strictly one after another.

    Leg ``i + 1`` is requested only once leg ``i`` has resolved, so legs come
    out in travel order and the total is summed in that same order. The first
    failing leg aborts the pass; partial results are never handed out.
    """

    def __init__(
        self,
        sequence: Sequence[Waypoint],
        resolver: LegResolver,
        on_progress: Optional[ProgressCallback] = None,
    ):
        if len(sequence) < 2:
            raise ValueError("A round trip needs at least two waypoints")
        self.sequence = list(sequence)
        self.resolver = resolver
        self.on_progress = on_progress
        self.state = AggregatorState.IDLE
        self.leg_index: Optional[int] = None
        self._legs: List[Leg] = []
        self._total = 0.0

    @property
    def leg_count(self) -> int:
        return len(self.sequence) - 1

    def resolve(self) -> Itinerary:
        """Run the single resolution pass.

        Raises:
            DirectionsUnavailable: as soon as any leg fails
            RuntimeError: if this aggregator already ran
        """
        if self.state is not AggregatorState.IDLE:
            raise RuntimeError(f"Aggregator already ran (state={self.state.value})")

        for index in range(self.leg_count):
            self.state = AggregatorState.RESOLVING_LEG
            self.leg_index = index
            if self.on_progress:
                self.on_progress(index, self.leg_count)

            try:
                leg = self.resolver.resolve_leg(self.sequence[index], self.sequence[index + 1])
            except DirectionsUnavailable as e:
                self._fail(index)
                raise DirectionsUnavailable(leg_index=index) from e

            self._legs.append(leg)
            self._total += leg.route.expected_duration

        self.state = AggregatorState.COMPLETE
        itinerary = Itinerary(legs=tuple(self._legs), total_duration=self._total)
        logger.info(f"Resolved {len(itinerary.legs)} legs, total {itinerary.total_duration:.0f}s")
        return itinerary

    def _fail(self, index: int) -> None:
        logger.error(f"Directions unavailable for leg {index + 1} of {self.leg_count}")
        self.state = AggregatorState.FAILED
        self._legs = []
        self._total = 0.0


class TripService:
    """Entry point the presentation layer uses to plan a trip."""

    def __init__(self, resolver: LegResolver):
        self.resolver = resolver

    def submit_trip(
        self,
        store: WaypointStore,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Itinerary:
        """Resolve the store's closed round trip into an itinerary.

        The round-trip sequence is snapshotted here, so later edits to the
        store do not affect a pass already under way. There is no way to
        cancel a pass once started.

        Raises:
            InsufficientWaypoints: if the store is not ready for a trip
            DirectionsUnavailable: if any leg fails
        """
        sequence = store.closed_round_trip()
        logger.info(f"Submitting round trip through {len(sequence) - 1} waypoints")
        return ItineraryAggregator(sequence, self.resolver, on_progress).resolve()


__all__ = [
    "select_fastest_route",
    "LegResolver",
    "AggregatorState",
    "ItineraryAggregator",
    "TripService",
]
