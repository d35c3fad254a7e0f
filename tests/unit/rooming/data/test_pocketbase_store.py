"""Tests for the PocketBase-backed trip store."""

from __future__ import annotations

import logging
from unittest.mock import Mock

import pytest
from pocketbase.client import ClientResponseError  # type: ignore[attr-defined]

from rooming.data import PocketBaseTripStore
from rooming.errors import InvalidCapacityError, RoomingError, UnknownTripError
from rooming.models import ConstraintKind, ConstraintLevel, Person


def _record(**fields):
    record = Mock()
    for name, value in fields.items():
        setattr(record, name, value)
    return record


def _response_error(status):
    error = ClientResponseError("request failed")
    error.status = status
    return error


class TestPocketBaseTripStore:
    """Mapping PocketBase records to models."""

    def test_list_people(self, mock_pocketbase):
        mock_pocketbase.collection("students").get_full_list.return_value = [
            _record(id="s1", name="Ann"),
            _record(id="s2", name=None),
        ]
        store = PocketBaseTripStore(mock_pocketbase)

        people = store.list_people("trip1")

        assert people == [Person(id="s1", name="Ann"), Person(id="s2", name="")]
        query = mock_pocketbase.collection("students").get_full_list.call_args.kwargs["query_params"]
        assert query == {"filter": "trip = 'trip1'", "sort": "name"}

    def test_list_constraints(self, mock_pocketbase):
        mock_pocketbase.collection("roommate_constraints").get_full_list.return_value = [
            _record(id="c1", student_a="s1", student_b="s2", kind="must", level="admin"),
            _record(id="c2", student_a="s2", student_b="s1", kind="prefer_not", level="student"),
        ]
        store = PocketBaseTripStore(mock_pocketbase)

        constraints = store.list_constraints("trip1")

        assert [c.id for c in constraints] == ["c1", "c2"]
        assert constraints[0].pair == ("s1", "s2")
        assert constraints[0].kind is ConstraintKind.MUST
        assert constraints[1].level is ConstraintLevel.STUDENT
        query = mock_pocketbase.collection("roommate_constraints").get_full_list.call_args.kwargs["query_params"]
        assert query["filter"] == "student_a.trip = 'trip1'"

    def test_malformed_constraint_skipped(self, mock_pocketbase, caplog):
        mock_pocketbase.collection("roommate_constraints").get_full_list.return_value = [
            _record(id="c1", student_a="s1", student_b="s2", kind="maybe", level="admin"),
            _record(id="c2", student_a="s1", student_b="s2", kind="prefer", level="student"),
        ]
        store = PocketBaseTripStore(mock_pocketbase)

        with caplog.at_level(logging.WARNING):
            constraints = store.list_constraints("trip1")

        assert [c.id for c in constraints] == ["c2"]
        assert "c1" in caplog.text

    def test_room_capacity_from_trip_and_groups(self, mock_pocketbase):
        mock_pocketbase.collection("trips").get_one.return_value = _record(id="trip1", room_size=2)
        mock_pocketbase.collection("room_groups").get_full_list.return_value = [
            _record(id="g1", size=4, count=1),
            _record(id="g2", size=3, count=2),
        ]
        store = PocketBaseTripStore(mock_pocketbase)

        capacity = store.get_room_capacity("trip1")

        assert capacity.room_size == 2
        assert [(g.size, g.count) for g in capacity.room_groups] == [(4, 1), (3, 2)]
        assert capacity.max_room_size == 4

    def test_room_capacity_without_groups(self, mock_pocketbase):
        mock_pocketbase.collection("trips").get_one.return_value = _record(id="trip1", room_size=3)
        store = PocketBaseTripStore(mock_pocketbase)

        assert store.get_room_capacity("trip1").max_room_size == 3

    def test_missing_trip_raises_unknown_trip(self, mock_pocketbase):
        mock_pocketbase.collection("trips").get_one.side_effect = _response_error(404)
        store = PocketBaseTripStore(mock_pocketbase)

        with pytest.raises(UnknownTripError):
            store.list_people("gone")

    def test_other_errors_propagate(self, mock_pocketbase):
        mock_pocketbase.collection("trips").get_one.side_effect = _response_error(500)
        store = PocketBaseTripStore(mock_pocketbase)

        with pytest.raises(ClientResponseError):
            store.list_constraints("trip1")

    def test_filter_values_are_escaped(self, mock_pocketbase):
        store = PocketBaseTripStore(mock_pocketbase)

        store.list_people("o'brien")

        query = mock_pocketbase.collection("students").get_full_list.call_args.kwargs["query_params"]
        assert query["filter"] == "trip = 'o''brien'"


class TestPocketBaseRoomCapacity:
    """Room configuration rows that cannot be used."""

    def test_invalid_group_rows_skipped(self, mock_pocketbase, caplog):
        mock_pocketbase.collection("trips").get_one.return_value = _record(id="trip1", room_size=0)
        mock_pocketbase.collection("room_groups").get_full_list.return_value = [
            _record(id="g1", size=0, count=2),
            _record(id="g2", size=3, count=2),
        ]
        store = PocketBaseTripStore(mock_pocketbase)

        with caplog.at_level(logging.WARNING):
            capacity = store.get_room_capacity("trip1")

        assert [(g.size, g.count) for g in capacity.room_groups] == [(3, 2)]
        assert capacity.max_room_size == 3
        assert "g1" in caplog.text

    def test_negative_room_size_ignored(self, mock_pocketbase):
        mock_pocketbase.collection("trips").get_one.return_value = _record(id="trip1", room_size=-2)
        mock_pocketbase.collection("room_groups").get_full_list.return_value = [_record(id="g1", size=4, count=1)]
        store = PocketBaseTripStore(mock_pocketbase)

        capacity = store.get_room_capacity("trip1")

        assert capacity.room_size is None
        assert capacity.max_room_size == 4

    def test_no_usable_room_size_raises(self, mock_pocketbase):
        mock_pocketbase.collection("trips").get_one.return_value = _record(id="trip1", room_size=0)
        mock_pocketbase.collection("room_groups").get_full_list.return_value = [_record(id="g1", size=0, count=1)]
        store = PocketBaseTripStore(mock_pocketbase)

        with pytest.raises(InvalidCapacityError) as exc_info:
            store.get_room_capacity("trip1")

        assert exc_info.value.trip_id == "trip1"
        assert isinstance(exc_info.value, RoomingError)


class TestPocketBaseSnapshot:
    """Reading a whole trip at once."""

    def test_trip_fetched_once(self, mock_pocketbase):
        trips = mock_pocketbase.collection("trips")
        trips.get_one.return_value = _record(id="trip1", room_size=2)
        mock_pocketbase.collection("students").get_full_list.return_value = [
            _record(id="s1", name="Ann"),
            _record(id="s2", name="Ben"),
        ]
        mock_pocketbase.collection("roommate_constraints").get_full_list.return_value = [
            _record(id="c1", student_a="s1", student_b="s2", kind="prefer", level="student"),
        ]
        store = PocketBaseTripStore(mock_pocketbase)

        snapshot = store.load_snapshot("trip1")

        trips.get_one.assert_called_once_with("trip1")
        assert [p.id for p in snapshot.people] == ["s1", "s2"]
        assert [c.id for c in snapshot.constraints] == ["c1"]
        assert snapshot.capacity.max_room_size == 2

    def test_missing_trip(self, mock_pocketbase):
        mock_pocketbase.collection("trips").get_one.side_effect = _response_error(404)
        store = PocketBaseTripStore(mock_pocketbase)

        with pytest.raises(UnknownTripError):
            store.load_snapshot("gone")

        mock_pocketbase.collection("students").get_full_list.assert_not_called()
