# roundtrip_planner/api/geocoding.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

import googlemaps
from googlemaps.exceptions import ApiError, Timeout, TransportError

from roundtrip_planner.api.config import get_directions_config, get_google_maps_config
from roundtrip_planner.api.errors import GeocodingUnavailable
from roundtrip_planner.api.models import LatLng, Placemark

logger = logging.getLogger(__name__)

_gmaps: googlemaps.Client | None = None


class SingleAttemptClient(googlemaps.Client):
    """googlemaps.Client that sends every request exactly once.

    The stock client re-sends on 5xx responses until ``retry_timeout``
    runs out; here the first failure is final.
    """

    def _request(self, url, params, first_request_time=None, retry_counter=0, *args, **kwargs):
        if retry_counter > 0:
            raise TransportError(f"Request to {url} failed; not retrying")
        return super()._request(url, params, first_request_time, retry_counter, *args, **kwargs)


def build_client(api_key: str, timeout: int) -> googlemaps.Client:
    return SingleAttemptClient(key=api_key, timeout=timeout, retry_over_query_limit=False)


def _get_client() -> googlemaps.Client | None:
    """Return a cached googlemaps.Client instance."""
    global _gmaps
    if _gmaps is None:
        try:
            cfg = get_google_maps_config()
            api_key = cfg.get("api_key", "")
            if not api_key:
                logger.error("No Google Maps API key found in config")
                return None
            logger.info(f"Initializing Google Maps client with key: {api_key[:10]}...")
            _gmaps = build_client(api_key, get_directions_config()["timeout"])
        except ValueError as e:
            logger.error(f"Failed to initialize Google Maps client: {e}")
            return None
    return _gmaps


def _to_placemark(result: Dict[str, Any]) -> Placemark:
    loc = result["geometry"]["location"]
    return Placemark(
        address=result.get("formatted_address", ""),
        point=(loc["lat"], loc["lng"]),
        place_id=result.get("place_id"),
    )


class GoogleGeocodingProvider:
    """Turns free-text input into selectable placemark candidates."""

    def __init__(self, client: googlemaps.Client | None = None):
        self._client = client

    @property
    def client(self) -> googlemaps.Client | None:
        return self._client or _get_client()

    def geocode(self, text: str) -> List[Placemark]:
        """Resolve address text to candidates, in provider order.

        Raises:
            GeocodingUnavailable: if nothing matches or the provider fails
        """
        query = (text or "").strip()
        if not query:
            raise GeocodingUnavailable()

        client = self.client
        if client is None:
            logger.error("No Google Maps client available")
            raise GeocodingUnavailable()

        cfg = get_directions_config()
        try:
            logger.debug(f"Geocoding address: {query}")
            results = client.geocode(query, language=cfg["language"], region=cfg["region"])
        except (ApiError, TransportError, Timeout) as e:
            logger.error(f"Geocoding error for '{query}': {e}")
            raise GeocodingUnavailable() from e

        if not results:
            logger.warning(f"No results found for address: {query}")
            raise GeocodingUnavailable()

        placemarks = [_to_placemark(r) for r in results]
        logger.info(f"Geocoded '{query}' to {len(placemarks)} candidate(s)")
        return placemarks

    def reverse_geocode(self, point: LatLng) -> Placemark:
        """Resolve a coordinate (e.g. the device location) to its best address."""
        client = self.client
        if client is None:
            logger.error("No Google Maps client available")
            raise GeocodingUnavailable()

        try:
            results = client.reverse_geocode(point, language=get_directions_config()["language"])
        except (ApiError, TransportError, Timeout) as e:
            logger.error(f"Reverse geocoding error for {point}: {e}")
            raise GeocodingUnavailable() from e

        if not results:
            logger.warning(f"No address found for {point}")
            raise GeocodingUnavailable()

        return _to_placemark(results[0])


# Re-export for clean imports elsewhere
__all__ = [
    "GoogleGeocodingProvider",
    "SingleAttemptClient",
    "build_client",
]
