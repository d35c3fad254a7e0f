"""Error classes for the rooming core.

Contradictory constraints are never errors; they are reported as findings.
These exceptions cover malformed input and optimizer defects only.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import Constraint, PersonId


class RoomingError(Exception):
    """Base exception for the rooming core."""

    pass


class InvalidReferenceError(RoomingError):
    """Raised when a constraint names a person outside the trip, or names itself."""

    def __init__(self, constraint: Constraint, missing_ids: Iterable[PersonId] = (), reason: str | None = None):
        self.constraint = constraint
        self.missing_ids = list(missing_ids)
        if reason is None:
            missing = ", ".join(str(pid) for pid in self.missing_ids)
            reason = f"constraint {constraint.id} references unknown people: {missing}"
        self.reason = reason
        super().__init__(reason)

    def to_dict(self) -> dict[str, Any]:
        return {
            "constraint_id": self.constraint.id,
            "subject_id": self.constraint.subject_id,
            "target_id": self.constraint.target_id,
            "missing_ids": self.missing_ids,
            "message": self.reason,
        }


class PartitionMismatchError(RoomingError):
    """Raised when candidate partitions disagree on who is being housed.

    This points at a defect in the optimizer, not at user input.
    """

    def __init__(
        self,
        message: str,
        expected_ids: Iterable[PersonId] = (),
        offending_ids: Iterable[PersonId] = (),
        partition_index: int | None = None,
    ):
        self.expected_ids = set(expected_ids)
        self.offending_ids = set(offending_ids)
        self.partition_index = partition_index
        super().__init__(message)


class UnknownTripError(RoomingError):
    """Raised when a data source has no record of the requested trip."""

    def __init__(self, trip_id: Any):
        self.trip_id = trip_id
        super().__init__(f"trip {trip_id} not found")


class HardConflictsExistError(RoomingError):
    """Raised when solving is requested while mandatory constraints contradict each other."""

    def __init__(self, trip_id: Any, conflict_count: int | None = None):
        self.trip_id = trip_id
        self.conflict_count = conflict_count
        found = "unresolved" if conflict_count is None else str(conflict_count)
        super().__init__(f"trip {trip_id} has {found} hard conflict(s), resolve before solving")


class SolverUnavailableError(RoomingError):
    """Raised when the optimizer cannot be reached or answers with an error."""

    pass


class InvalidCapacityError(RoomingError):
    """Raised when a trip's stored room configuration has no usable room size."""

    def __init__(self, trip_id: Any, reason: str):
        self.trip_id = trip_id
        self.reason = reason
        super().__init__(f"trip {trip_id} has no usable room configuration: {reason}")
