"""In-process trip store, used by tests and the ``memory`` data source."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from ..errors import UnknownTripError
from ..models import Constraint, Person, RoomCapacity, TripSnapshot

logger = logging.getLogger(__name__)


@dataclass
class TripRecord:
    people: list[Person] = field(default_factory=list)
    constraints: list[Constraint] = field(default_factory=list)
    capacity: RoomCapacity = field(default_factory=lambda: RoomCapacity(room_size=2))


class InMemoryTripStore:
    """Dict-backed TripDataSource.

    Reads return copies so callers always work on a snapshot.
    """

    def __init__(self) -> None:
        self._trips: dict[Any, TripRecord] = {}
        self._lock = threading.Lock()

    def add_trip(
        self,
        trip_id: Any,
        people: Iterable[Person],
        constraints: Iterable[Constraint] = (),
        capacity: RoomCapacity | None = None,
    ) -> None:
        record = TripRecord(people=list(people), constraints=list(constraints))
        if capacity is not None:
            record.capacity = capacity
        with self._lock:
            self._trips[trip_id] = record
        logger.debug(f"Stored trip {trip_id} with {len(record.people)} people")

    def remove_trip(self, trip_id: Any) -> None:
        with self._lock:
            self._trips.pop(trip_id, None)

    def _get(self, trip_id: Any) -> TripRecord:
        with self._lock:
            record = self._trips.get(trip_id)
        if record is None:
            raise UnknownTripError(trip_id)
        return record

    def load_snapshot(self, trip_id: Any) -> TripSnapshot:
        record = self._get(trip_id)
        return TripSnapshot(people=list(record.people), constraints=list(record.constraints), capacity=record.capacity)

    def list_constraints(self, trip_id: Any) -> list[Constraint]:
        return list(self._get(trip_id).constraints)

    def list_people(self, trip_id: Any) -> list[Person]:
        return list(self._get(trip_id).people)

    def get_room_capacity(self, trip_id: Any) -> RoomCapacity:
        return self._get(trip_id).capacity
