"""PocketBase-backed trip data source.

Read-only adapter over the collections the trip app writes:

- trips:                room_size
- room_groups:          trip (relation), size, count
- students:             trip (relation), name
- roommate_constraints: student_a, student_b (relations), kind, level

Record ids are PocketBase string ids and are used as person ids directly."""

from __future__ import annotations

import logging
from typing import Any

from pocketbase import PocketBase
from pocketbase.client import ClientResponseError  # type: ignore[attr-defined]
from pydantic import ValidationError

from ..errors import InvalidCapacityError, UnknownTripError
from ..models import Constraint, ConstraintKind, ConstraintLevel, Person, RoomCapacity, RoomGroup, TripSnapshot

logger = logging.getLogger(__name__)


def _escape_filter_value(value: Any) -> str:
    """Escape a value for a single-quoted PocketBase filter literal (O'Brien -> O''Brien)."""
    return str(value).replace("'", "''")


class PocketBaseTripStore:
    """TripDataSource reading from PocketBase"""

    def __init__(self, pb_client: PocketBase) -> None:
        """Initialize with an authenticated PocketBase client.

        Args:
            pb_client: PocketBase client instance
        """
        self.pb = pb_client

    def _trip_filter(self, field: str, trip_id: Any) -> str:
        return f"{field} = '{_escape_filter_value(trip_id)}'"

    def _get_trip(self, trip_id: Any) -> Any:
        try:
            return self.pb.collection("trips").get_one(str(trip_id))
        except ClientResponseError as e:
            if getattr(e, "status", None) == 404:
                raise UnknownTripError(trip_id) from e
            raise

    def load_snapshot(self, trip_id: Any) -> TripSnapshot:
        """Read people, constraints and rooms with a single trip lookup."""
        trip = self._get_trip(trip_id)
        return TripSnapshot(
            people=self._fetch_people(trip_id),
            constraints=self._fetch_constraints(trip_id),
            capacity=self._fetch_room_capacity(trip, trip_id),
        )

    def list_people(self, trip_id: Any) -> list[Person]:
        self._get_trip(trip_id)
        return self._fetch_people(trip_id)

    def list_constraints(self, trip_id: Any) -> list[Constraint]:
        self._get_trip(trip_id)
        return self._fetch_constraints(trip_id)

    def get_room_capacity(self, trip_id: Any) -> RoomCapacity:
        return self._fetch_room_capacity(self._get_trip(trip_id), trip_id)

    def _fetch_people(self, trip_id: Any) -> list[Person]:
        records = self.pb.collection("students").get_full_list(
            query_params={"filter": self._trip_filter("trip", trip_id), "sort": "name"}
        )
        people = [Person(id=record.id, name=getattr(record, "name", "") or "") for record in records]
        logger.debug(f"Loaded {len(people)} students for trip {trip_id}")
        return people

    def _fetch_constraints(self, trip_id: Any) -> list[Constraint]:
        records = self.pb.collection("roommate_constraints").get_full_list(
            query_params={"filter": self._trip_filter("student_a.trip", trip_id), "sort": "created"}
        )
        constraints = []
        for record in records:
            constraint = self._map_to_constraint(record)
            if constraint is not None:
                constraints.append(constraint)
        logger.debug(f"Loaded {len(constraints)} constraints for trip {trip_id}")
        return constraints

    def _fetch_room_capacity(self, trip: Any, trip_id: Any) -> RoomCapacity:
        group_records = self.pb.collection("room_groups").get_full_list(
            query_params={"filter": self._trip_filter("trip", trip_id)}
        )
        groups = []
        for record in group_records:
            group = self._map_to_room_group(record)
            if group is not None:
                groups.append(group)

        room_size = self._map_room_size(getattr(trip, "room_size", None), trip_id)

        try:
            return RoomCapacity(room_size=room_size, room_groups=groups)
        except ValidationError as e:
            raise InvalidCapacityError(trip_id, "no room_size and no valid room groups") from e

    def _map_room_size(self, value: Any, trip_id: Any) -> int | None:
        """Trip room_size as a positive int; 0 or empty means the trip uses room groups only"""
        if not value:
            return None
        try:
            room_size = int(value)
        except (TypeError, ValueError):
            room_size = 0
        if room_size < 1:
            logger.warning(f"Ignoring invalid room_size {value!r} on trip {trip_id}")
            return None
        return room_size

    def _map_to_room_group(self, record: Any) -> RoomGroup | None:
        """Map a room_groups record, skipping rows with a missing or non-positive size"""
        try:
            return RoomGroup(size=getattr(record, "size", 0), count=getattr(record, "count", 1) or 1)
        except ValidationError as e:
            logger.warning(f"Skipping malformed room group record {getattr(record, 'id', '?')}: {e}")
            return None

    def _map_to_constraint(self, record: Any) -> Constraint | None:
        """Map a roommate_constraints record, skipping rows with unknown kinds or levels"""
        try:
            return Constraint(
                id=record.id,
                subject_id=getattr(record, "student_a", ""),
                target_id=getattr(record, "student_b", ""),
                kind=ConstraintKind(getattr(record, "kind", "")),
                level=ConstraintLevel(getattr(record, "level", "")),
            )
        except (ValueError, ValidationError) as e:
            logger.warning(f"Skipping malformed constraint record {getattr(record, 'id', '?')}: {e}")
            return None
