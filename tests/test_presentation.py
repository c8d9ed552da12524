"""Tests for itinerary text formatting and map payloads."""

import pytest

from roundtrip_planner.api.models import Itinerary, Leg, Step
from roundtrip_planner.api.services.itinerary_service import (
    ItineraryService,
    format_duration,
    format_miles,
    format_step,
)
from roundtrip_planner.api.services.map_service import MapService

from conftest import SAMPLE_POLYLINE, make_route


@pytest.mark.parametrize("seconds, expected", [
    (0, "0 seconds"),
    (1, "1 second"),
    (59.6, "1 minute"),
    (3600, "1 hour"),
    (3900, "1 hour, 5 minutes"),
    (7325, "2 hours, 2 minutes, 5 seconds"),
    (3601, "1 hour, 1 second"),
])
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_format_miles():
    assert format_miles(1609.344) == "1.00"
    assert format_miles(804.672) == "0.50"
    assert format_miles(0) == "0.00"


def test_format_step():
    assert format_step(1, Step("Head north", 804.672)) == "1. Head north - 0.50 miles"


@pytest.fixture
def itinerary():
    return Itinerary(
        legs=(
            Leg("A", "B", make_route(1800.0, 1609.344, SAMPLE_POLYLINE,
                                     [Step("Head north", 804.672), Step("Turn right", 804.672)])),
            Leg("B", "A", make_route(1500.0, 3218.688)),
        ),
        total_duration=3300.0,
    )


def test_itinerary_text(itinerary):
    text = ItineraryService.format_itinerary_text(itinerary)

    assert text.split("\n\n") == [
        "Segment #1\nStarting point: A\n1. Head north - 0.50 miles\n2. Turn right - 0.50 miles\n"
        "Ending point: B\nDistance: 1.00 miles\nExpected travel time: 30 minutes",
        "Segment #2\nStarting point: B\nEnding point: A\nDistance: 2.00 miles\n"
        "Expected travel time: 25 minutes",
        "Total: 55 minutes",
    ]


def test_to_response(itinerary):
    response = ItineraryService.to_response(itinerary, {"overlays": []})

    assert response["total_time"] == "55 minutes"
    assert response["itinerary"]["total_duration"] == 3300.0
    assert response["itinerary"]["total_distance"] == pytest.approx(4828.032)
    assert [leg["start_address"] for leg in response["itinerary"]["legs"]] == ["A", "B"]


def test_segment_colors():
    assert [MapService.segment_color(i) for i in range(4)] == ["blue", "green", "red", "red"]


def test_bounds_cover_all_polylines(itinerary):
    bounds = MapService.calculate_bounds(itinerary)

    assert bounds["north"] == pytest.approx(43.252)
    assert bounds["south"] == pytest.approx(38.5)
    assert bounds["east"] == pytest.approx(-120.2)
    assert bounds["west"] == pytest.approx(-126.453)


def test_map_payload(itinerary):
    payload = MapService.to_map_payload(itinerary)

    assert payload["overlays"] == [
        {"segment": 1, "color": "blue", "polyline": SAMPLE_POLYLINE},
        {"segment": 2, "color": "green", "polyline": ""},
    ]


def test_bounds_empty_without_geometry():
    itinerary = Itinerary(legs=(Leg("A", "B", make_route(10.0)),), total_duration=10.0)

    assert MapService.calculate_bounds(itinerary) == {}


def test_parse_point():
    assert MapService.parse_point({"lat": "37.5", "lng": -122}) == (37.5, -122.0)
    assert MapService.parse_point({"lat": 1}) is None
    with pytest.raises(ValueError):
        MapService.parse_point({"lat": 91, "lng": 0})
