"""
Rooming - constraint analysis and solution reconciliation for trip room assignment.

This package contains:
- models: Domain models (Person, Constraint, findings, partitions)
- analysis: Effective preferences, overrides, mismatches, mandatory groups
- reconcile: Locked rooms and swap groups across tied optimizer partitions
- data: Trip data sources (in-memory, PocketBase)
- service: RoomingService, the entry point for callers
"""

from rooming.analysis import ConstraintAnalyzer
from rooming.errors import (
    HardConflictsExistError,
    InvalidCapacityError,
    InvalidReferenceError,
    PartitionMismatchError,
    RoomingError,
    UnknownTripError,
)
from rooming.models import (
    AnalysisResult,
    Constraint,
    ConstraintKind,
    ConstraintLevel,
    Person,
    ReconciliationResult,
    RoomCapacity,
    RoomPartition,
)
from rooming.reconcile import SolutionReconciler
from rooming.service import RoomingService

__all__ = [
    "AnalysisResult",
    "Constraint",
    "ConstraintAnalyzer",
    "ConstraintKind",
    "ConstraintLevel",
    "HardConflictsExistError",
    "InvalidCapacityError",
    "InvalidReferenceError",
    "PartitionMismatchError",
    "Person",
    "ReconciliationResult",
    "RoomCapacity",
    "RoomPartition",
    "RoomingError",
    "RoomingService",
    "SolutionReconciler",
    "UnknownTripError",
]
