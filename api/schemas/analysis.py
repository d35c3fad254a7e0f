"""
Pydantic schemas for constraint analysis and reconciliation endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from rooming.models import Constraint, Person, ReconciliationResult, RoomCapacity, RoomPartition


class AnalyzeSnapshotRequest(BaseModel):
    """Analyze a snapshot supplied inline rather than read from the data source."""

    people: list[Person]
    constraints: list[Constraint] = Field(default_factory=list)
    room_capacity: RoomCapacity


class ReconcileRequest(BaseModel):
    """Tied partitions returned by the optimizer."""

    partitions: list[RoomPartition]


class ReconcileResponse(ReconciliationResult):
    """Reconciliation plus the human readable option count."""

    summary: str = ""
