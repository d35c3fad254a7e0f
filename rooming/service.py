"""
RoomingService - the operations the core exposes to callers.

Wires a TripDataSource and, optionally, a RoomSolver to the analyzer and the
reconciler. Holds no per-trip state, so one instance can serve concurrent
requests for different trips.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from .analysis import ConstraintAnalyzer
from .errors import HardConflictsExistError
from .interfaces import RoomSolver, TripDataSource
from .models import AnalysisResult, ReconciliationResult, RoomPartition, SolveResult
from .reconcile import SolutionReconciler

logger = logging.getLogger(__name__)


class RoomingService:
    """Constraint analysis and solution reconciliation for trips."""

    def __init__(
        self,
        data_source: TripDataSource,
        solver: RoomSolver | None = None,
        strict_references: bool = False,
    ) -> None:
        self.data_source = data_source
        self.solver = solver
        self.analyzer = ConstraintAnalyzer(strict_references=strict_references)
        self.reconciler = SolutionReconciler()

    def analyze_constraints(self, trip_id: Any) -> AnalysisResult:
        """Load a trip's snapshot and analyze it."""
        snapshot = self.data_source.load_snapshot(trip_id)
        return self.analyzer.analyze(snapshot.people, snapshot.constraints, snapshot.capacity, trip_id=trip_id)

    def reconcile_solutions(self, partitions: Sequence[RoomPartition]) -> ReconciliationResult:
        return self.reconciler.reconcile(partitions)

    def solve_and_reconcile(self, trip_id: Any) -> SolveResult:
        """
        Run the optimizer for a trip and reconcile its tied partitions.

        Refuses to call the optimizer while hard conflicts exist, since no
        partition can satisfy them.

        Raises:
            RuntimeError: If the service has no solver
            HardConflictsExistError: If the trip has hard conflicts
            PartitionMismatchError: If the optimizer returns inconsistent partitions
        """
        if self.solver is None:
            raise RuntimeError("RoomingService was created without a solver")

        analysis = self.analyze_constraints(trip_id)
        if analysis.hard_conflicts:
            raise HardConflictsExistError(trip_id, len(analysis.hard_conflicts))
        if analysis.people_count == 0:
            return SolveResult()

        partitions = self.solver.solve(trip_id)
        logger.info(f"Solver returned {len(partitions)} partitions for trip {trip_id}")
        if not partitions:
            return SolveResult()

        best = max(partition.score for partition in partitions)
        tied = [partition for partition in partitions if partition.score == best]
        return SolveResult(score=best, partitions=tied, reconciliation=self.reconciler.reconcile(tied))
