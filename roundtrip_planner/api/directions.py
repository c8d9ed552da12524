# roundtrip_planner/api/directions.py
"""Google Directions adapter: origin/destination pair -> candidate routes."""
from __future__ import annotations

import html
import logging
import re
from typing import Any, Dict, List

import googlemaps
from googlemaps.exceptions import ApiError, Timeout, TransportError

from roundtrip_planner.api.config import get_directions_config
from roundtrip_planner.api.errors import DirectionsUnavailable
from roundtrip_planner.api.geocoding import _get_client
from roundtrip_planner.api.models import LatLng, Route, Step

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]+>")


def _plain_instructions(raw: str) -> str:
    """Strip the HTML markup Google puts in step instructions."""
    text = _TAG_RE.sub(" ", raw or "")
    return " ".join(html.unescape(text).split())


def _parse_route(payload: Dict[str, Any]) -> Route:
    # Requests carry no waypoints, so each route has exactly one leg.
    leg = payload["legs"][0]
    steps = tuple(
        Step(
            instructions=_plain_instructions(s.get("html_instructions", "")),
            distance=float(s["distance"]["value"]),
        )
        for s in leg.get("steps", [])
    )
    return Route(
        expected_duration=float(leg["duration"]["value"]),
        distance=float(leg["distance"]["value"]),
        polyline=payload.get("overview_polyline", {}).get("points", ""),
        steps=steps,
        summary=payload.get("summary", ""),
    )


class GoogleDirectionsProvider:
    """Requests candidate routes between two points."""

    def __init__(self, client: googlemaps.Client | None = None):
        self._client = client

    @property
    def client(self) -> googlemaps.Client | None:
        return self._client or _get_client()

    def route(
        self,
        origin: LatLng,
        destination: LatLng,
        alternates: bool = True,
        mode: str = "driving",
    ) -> List[Route]:
        """Return candidate routes in provider order; empty if none exist.

        Raises:
            DirectionsUnavailable: if the provider cannot be reached or errors
        """
        client = self.client
        if client is None:
            logger.error("No Google Maps client available")
            raise DirectionsUnavailable()

        cfg = get_directions_config()
        try:
            logger.debug(f"Requesting {mode} directions {origin} -> {destination}")
            payloads = client.directions(
                origin,
                destination,
                mode=mode,
                alternatives=alternates,
                language=cfg["language"],
                region=cfg["region"],
            )
        except (ApiError, TransportError, Timeout) as e:
            logger.error(f"Directions error for {origin} -> {destination}: {e}")
            raise DirectionsUnavailable() from e

        try:
            routes = [_parse_route(p) for p in payloads or []]
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Malformed directions response for {origin} -> {destination}: {e!r}")
            raise DirectionsUnavailable() from e

        logger.debug(f"Directions returned {len(routes)} candidate route(s)")
        return routes


__all__ = ["GoogleDirectionsProvider"]
