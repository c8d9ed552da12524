"""Shared pytest fixtures: fake Google providers and sample trips."""

import pytest

from roundtrip_planner.api.errors import DirectionsUnavailable, GeocodingUnavailable
from roundtrip_planner.api.models import Placemark, Route, Step, Waypoint

# Google's documented sample polyline: (38.5, -120.2) -> (40.7, -120.95) -> (43.252, -126.453)
SAMPLE_POLYLINE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"

POINT_A = (37.3349, -122.0090)
POINT_B = (37.7749, -122.4194)
POINT_C = (37.8044, -122.2712)


def make_route(duration, distance=1000.0, polyline="", steps=(), summary=""):
    return Route(
        expected_duration=duration,
        distance=distance,
        polyline=polyline,
        steps=tuple(steps),
        summary=summary,
    )


class FakeDirectionsProvider:
    """Returns canned routes per (origin, destination) and records calls."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def route(self, origin, destination, alternates=True, mode="driving"):
        self.calls.append((origin, destination, alternates, mode))
        result = self.routes.get((origin, destination), [])
        if isinstance(result, Exception):
            raise result
        return list(result)


class FakeGeocodingProvider:
    def __init__(self, candidates=None, reverse=None):
        self.candidates = dict(candidates or {})
        self.reverse = dict(reverse or {})

    def geocode(self, text):
        if text not in self.candidates:
            raise GeocodingUnavailable()
        return self.candidates[text]

    def reverse_geocode(self, point):
        if point not in self.reverse:
            raise GeocodingUnavailable()
        return self.reverse[point]


@pytest.fixture
def waypoint_a():
    return Waypoint("1 Infinite Loop, Cupertino", POINT_A)


@pytest.fixture
def waypoint_b():
    return Waypoint("San Francisco, CA", POINT_B)


@pytest.fixture
def waypoint_c():
    return Waypoint("Oakland, CA", POINT_C)


@pytest.fixture
def three_stop_directions():
    """A -> B -> C -> A, each leg with alternates in scrambled order."""
    return FakeDirectionsProvider({
        (POINT_A, POINT_B): [
            make_route(3000.0, 70000.0, summary="I-280"),
            make_route(2700.5, 75000.0, SAMPLE_POLYLINE, [Step("Head north", 804.672)], "US-101"),
        ],
        (POINT_B, POINT_C): [make_route(900.25, 19000.0, summary="I-80")],
        (POINT_C, POINT_A): [
            make_route(2600.0, 72000.0, summary="I-880"),
            make_route(2800.0, 69000.0, summary="I-680"),
        ],
    })


@pytest.fixture
def failing_directions():
    """Second leg (B -> C) has no route."""
    return FakeDirectionsProvider({
        (POINT_A, POINT_B): [make_route(2700.0)],
        (POINT_B, POINT_C): DirectionsUnavailable(),
        (POINT_C, POINT_A): [make_route(2600.0)],
    })


@pytest.fixture
def geocoder():
    return FakeGeocodingProvider(
        candidates={
            "oakland": [
                Placemark("Oakland, CA, USA", POINT_C, "oak-ca"),
                Placemark("Oakland, MD, USA", (39.4079, -79.4067), "oak-md"),
            ],
        },
        reverse={POINT_A: Placemark("1 Infinite Loop, Cupertino, CA", POINT_A)},
    )
