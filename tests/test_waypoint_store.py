"""Tests for the waypoint store."""

import pytest

from roundtrip_planner.api.errors import InsufficientWaypoints
from roundtrip_planner.api.models import Waypoint
from roundtrip_planner.api.services.waypoint_store import WaypointStore

from conftest import POINT_A, POINT_B, POINT_C


def test_new_store_has_three_empty_slots():
    store = WaypointStore()

    assert len(store) == 3
    assert all(not w.is_resolved for w in store.waypoints)
    assert not store.is_ready_for_trip()


def test_ready_with_start_and_one_stop():
    store = WaypointStore()
    store.update(0, "A", POINT_A)
    store.update(1, "B", POINT_B)

    assert store.is_ready_for_trip()


def test_ready_with_start_and_second_stop_only():
    store = WaypointStore()
    store.update(0, "A", POINT_A)
    store.update(2, "C", POINT_C)

    assert store.is_ready_for_trip()


def test_not_ready_without_start():
    store = WaypointStore()
    store.update(1, "B", POINT_B)
    store.update(2, "C", POINT_C)

    assert not store.is_ready_for_trip()
    with pytest.raises(InsufficientWaypoints):
        store.closed_round_trip()


def test_not_ready_with_start_only():
    store = WaypointStore()
    store.update(0, "A", POINT_A)

    assert not store.is_ready_for_trip()


def test_update_overwrites_both_fields():
    store = WaypointStore()
    store.update(1, "B", POINT_B)
    store.update(1, "C", POINT_C)

    assert store[1] == Waypoint("C", POINT_C)


def test_clear_unresolves_slot():
    store = WaypointStore()
    store.update(0, "A", POINT_A)
    store.update(1, "B", POINT_B)

    store.clear(1)

    assert store[1] == Waypoint()
    assert not store.is_ready_for_trip()


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_out_of_range_index_rejected(index):
    store = WaypointStore()

    with pytest.raises(IndexError):
        store.update(index, "X", POINT_A)
    with pytest.raises(IndexError):
        store.clear(index)


def test_closed_round_trip_appends_start():
    store = WaypointStore()
    store.update(0, "A", POINT_A)
    store.update(1, "B", POINT_B)
    store.update(2, "C", POINT_C)

    sequence = store.closed_round_trip()

    assert [w.address for w in sequence] == ["A", "B", "C", "A"]
    assert sequence[0] == sequence[-1]


def test_closed_round_trip_skips_unresolved_slots():
    store = WaypointStore()
    store.update(0, "A", POINT_A)
    store.update(2, "C", POINT_C)

    sequence = store.closed_round_trip()

    assert [w.point for w in sequence] == [POINT_A, POINT_C, POINT_A]
    assert len(sequence) == 2 + 1


def test_swap_exchanges_address_and_point():
    store = WaypointStore()
    store.update(0, "S", POINT_A)
    store.update(1, "D1", POINT_B)
    store.update(2, "D2", POINT_C)

    store.swap(1, 2)

    assert store[0] == Waypoint("S", POINT_A)
    assert store[1] == Waypoint("D2", POINT_C)
    assert store[2] == Waypoint("D1", POINT_B)


def test_swap_with_empty_slot():
    store = WaypointStore()
    store.update(0, "S", POINT_A)
    store.update(1, "D1", POINT_B)

    store.swap(1, 2)

    assert not store[1].is_resolved
    assert store[2] == Waypoint("D1", POINT_B)
    assert store.is_ready_for_trip()


def test_session_dict_restores_store():
    store = WaypointStore()
    store.update(0, "A", POINT_A)
    store.update(2, "C", POINT_C)

    restored = WaypointStore.from_dict(store.to_dict())

    assert restored.waypoints == store.waypoints
    assert restored.to_dict()["ready"] is True


def test_from_dict_tolerates_missing_data():
    assert WaypointStore.from_dict(None).waypoints == [Waypoint()] * 3
    assert WaypointStore.from_dict({"waypoints": [{"address": "A"}]})[0] == Waypoint("A", None)
