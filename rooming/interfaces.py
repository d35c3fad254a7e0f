"""Protocols for the collaborators the core consumes.

Storage and optimization live outside the core; anything with these methods
can be plugged into RoomingService."""

from __future__ import annotations

from typing import Any, Protocol

from .models import Constraint, Person, RoomCapacity, RoomPartition, TripSnapshot


class TripDataSource(Protocol):
    """Read access to a trip's people, constraints and rooms"""

    def load_snapshot(self, trip_id: Any) -> TripSnapshot:
        """People, constraints and rooms read together, checking the trip once"""
        ...

    def list_constraints(self, trip_id: Any) -> list[Constraint]:
        """Every raw constraint on the trip, from every level"""
        ...

    def list_people(self, trip_id: Any) -> list[Person]:
        """Everyone on the trip"""
        ...

    def get_room_capacity(self, trip_id: Any) -> RoomCapacity:
        """The trip's room configuration"""
        ...


class RoomSolver(Protocol):
    """The external room-assignment optimizer"""

    def solve(self, trip_id: Any) -> list[RoomPartition]:
        """One or more best-scoring partitions of the trip's people"""
        ...
