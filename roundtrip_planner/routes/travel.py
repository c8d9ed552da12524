# roundtrip_planner/routes/travel.py
"""Travel routes and blueprint configuration."""

import logging

from flask import Blueprint, jsonify, request, session

from roundtrip_planner.api.config import get_google_maps_config
from roundtrip_planner.api.directions import GoogleDirectionsProvider
from roundtrip_planner.api.errors import (
    DirectionsUnavailable,
    GeocodingUnavailable,
    InsufficientWaypoints,
)
from roundtrip_planner.api.geocoding import GoogleGeocodingProvider
from roundtrip_planner.api.services.itinerary_service import ItineraryService
from roundtrip_planner.api.services.map_service import MapService
from roundtrip_planner.api.services.trip_service import LegResolver, TripService
from roundtrip_planner.api.services.waypoint_store import WaypointStore

logger = logging.getLogger(__name__)


def load_store():
    """Rebuild the waypoint store from the Flask session."""
    return WaypointStore.from_dict(session.get('waypoints'))


def save_store(store):
    session['waypoints'] = store.to_dict()
    session.modified = True


def slot_index(data, key, default):
    """Read a slot index from request data; explicit nulls are rejected."""
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"{key} must be a waypoint index")
    return int(value)


def build_trip_response(itinerary):
    return ItineraryService.to_response(itinerary, MapService.to_map_payload(itinerary))


def create_travel_blueprint(geocoder=None, directions=None):
    """Create and configure the travel blueprint.

    Args:
        geocoder: Geocoding provider; Google when omitted
        directions: Directions provider; Google when omitted

    Returns:
        Configured Flask Blueprint
    """
    travel_bp = Blueprint("travel", __name__, url_prefix="/travel")

    geocoder = geocoder or GoogleGeocodingProvider()
    trip_service = TripService(LegResolver(directions or GoogleDirectionsProvider()))

    @travel_bp.errorhandler(IndexError)
    @travel_bp.errorhandler(ValueError)
    def bad_request(e):
        return jsonify({"error": str(e)}), 400

    @travel_bp.route("/api/config")
    def api_config():
        """Return Google Maps configuration for frontend."""
        config = get_google_maps_config()

        if config.get("api_key"):
            return jsonify({
                "auth_type": "api_key",
                "google_maps_api_key": config["api_key"],
                "google_maps_client_id": config.get("client_id", ""),
                "client_secret_configured": bool(config.get("client_secret"))
            })
        else:
            return jsonify({
                "error": "No Google Maps API key configured"
            }), 500

    @travel_bp.route("/api/geocode", methods=["POST"])
    def api_geocode():
        """Return address candidates for the user to pick from."""
        data = request.get_json(silent=True) or {}
        try:
            placemarks = geocoder.geocode(data.get("text", ""))
        except GeocodingUnavailable as e:
            return jsonify({"error": e.message}), 404
        return jsonify({"candidates": [p.to_dict() for p in placemarks]})

    @travel_bp.route("/api/waypoints", methods=["GET"])
    def api_waypoints():
        return jsonify(load_store().to_dict())

    @travel_bp.route("/api/waypoints/<int:index>", methods=["PUT"])
    def api_update_waypoint(index):
        """Confirm a candidate for one slot."""
        data = request.get_json(silent=True) or {}
        point = MapService.parse_point(data)
        if point is None:
            raise ValueError("lat and lng are required")

        store = load_store()
        store.update(index, data.get("address"), point)
        save_store(store)
        return jsonify(store.to_dict())

    @travel_bp.route("/api/waypoints/<int:index>", methods=["DELETE"])
    def api_clear_waypoint(index):
        store = load_store()
        store.clear(index)
        save_store(store)
        return jsonify(store.to_dict())

    @travel_bp.route("/api/waypoints/swap", methods=["POST"])
    def api_swap_waypoints():
        """Swap two slots; defaults to the two destinations."""
        data = request.get_json(silent=True) or {}
        store = load_store()
        store.swap(slot_index(data, "i", 1), slot_index(data, "j", 2))
        save_store(store)
        return jsonify(store.to_dict())

    @travel_bp.route("/api/waypoints/current", methods=["POST"])
    def api_current_location():
        """Fill the starting slot from the device's current location."""
        point = MapService.parse_point(request.get_json(silent=True))
        if point is None:
            raise ValueError("lat and lng are required")

        try:
            placemark = geocoder.reverse_geocode(point)
        except GeocodingUnavailable as e:
            return jsonify({"error": e.message}), 404

        store = load_store()
        store.update(0, placemark.address, placemark.point)
        save_store(store)
        return jsonify(store.to_dict())

    @travel_bp.route("/api/trip", methods=["POST"])
    def api_trip():
        """Resolve the confirmed waypoints into a round-trip itinerary."""
        ItineraryService.clear_session()
        try:
            itinerary = trip_service.submit_trip(load_store())
        except InsufficientWaypoints as e:
            return jsonify({"error": e.message}), 400
        except DirectionsUnavailable as e:
            logger.error(f"Trip failed at leg {e.leg_index}")
            return jsonify({"error": e.message}), 502

        response = build_trip_response(itinerary)
        ItineraryService.store_in_session(response)
        return jsonify(response)

    @travel_bp.route("/api/trip", methods=["GET"])
    def api_last_trip():
        response = ItineraryService.get_from_session()
        if response is None:
            return jsonify({"error": "No itinerary yet"}), 404
        return jsonify(response)

    @travel_bp.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok", "service": "travel"})

    return travel_bp


__all__ = ['create_travel_blueprint', 'load_store', 'save_store', 'build_trip_response']
