# roundtrip_planner/routes/websocket/trip.py
"""WebSocket handlers for submitting trips with live progress."""

import logging
import time

from roundtrip_planner.api.directions import GoogleDirectionsProvider
from roundtrip_planner.api.errors import DirectionsUnavailable, InsufficientWaypoints
from roundtrip_planner.api.services.map_service import MapService
from roundtrip_planner.api.services.trip_service import LegResolver, TripService
from roundtrip_planner.api.services.waypoint_store import WaypointStore
from roundtrip_planner.routes.travel import build_trip_response

from .base import BaseWebSocketHandler, NAMESPACE

logger = logging.getLogger(__name__)


def store_from_payload(data):
    """Build a waypoint store from socket data, validating every coordinate.

    Raises:
        ValueError: if the payload or any coordinate is malformed
    """
    entries = data.get("waypoints") if isinstance(data, dict) else None
    if entries is None:
        entries = []
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        raise ValueError("waypoints must be a list of objects")

    store = WaypointStore()
    for index, entry in enumerate(entries[:len(store)]):
        point = MapService.parse_point(entry)
        if point is not None:
            store.update(index, entry.get("address"), point)
    return store


class TripHandler(BaseWebSocketHandler):
    """Handles trip submission over the socket.

    Progress events only say which leg is being requested; leg data is sent
    once, with the complete itinerary.
    """

    def __init__(self, socketio, namespace=NAMESPACE, directions=None):
        super().__init__(socketio, namespace)
        self.trip_service = TripService(LegResolver(directions or GoogleDirectionsProvider()))

    def register_handlers(self):
        """Register trip-related event handlers."""

        @self.socketio.on('submit_trip', namespace=self.namespace)
        def handle_submit_trip(data):
            """Resolve the posted waypoints and emit the itinerary."""
            self.log_event('submit_trip')

            def report(index, total):
                self.emit_to_client('trip_progress', {'leg_index': index, 'total': total})

            try:
                store = store_from_payload(data)
                itinerary = self.trip_service.submit_trip(store, on_progress=report)
            except (ValueError, InsufficientWaypoints, DirectionsUnavailable) as e:
                self.handle_error(e, 'submit_trip')
                return

            self.emit_to_client('itinerary_ready', build_trip_response(itinerary))

        @self.socketio.on('ping', namespace=self.namespace)
        def handle_ping():
            """Handle ping for connection testing."""
            self.emit_to_client('pong', {'timestamp': time.time()})
