"""
Constraint analysis pass for one trip.

Runs the effective preference resolver first, then override, mismatch and
mandatory-group analysis, and assembles everything into an AnalysisResult.
Each call recomputes from the snapshot it is given; nothing is cached.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from ..models import AnalysisResult, Constraint, ConstraintView, Person, RoomCapacity
from .effective import resolve_effective_constraints
from .mandatory_groups import MandatoryGroupAnalyzer
from .mismatches import detect_mismatches
from .overrides import OverrideDetector
from .validation import split_valid_constraints

logger = logging.getLogger(__name__)


class ConstraintAnalyzer:
    """Analyzes a trip's constraints and reports every contradiction as a finding."""

    def __init__(self, strict_references: bool = False) -> None:
        self.strict_references = strict_references
        self.override_detector = OverrideDetector()
        self.mandatory_analyzer = MandatoryGroupAnalyzer()

    def analyze(
        self,
        people: Iterable[Person],
        constraints: Iterable[Constraint],
        capacity: RoomCapacity,
        trip_id: Any = None,
    ) -> AnalysisResult:
        """
        Analyze a constraint snapshot.

        Constraints naming unknown people (or pairing someone with themselves)
        are dropped with a warning and listed in ``invalid_references``, unless
        the analyzer is strict, in which case the first one is raised.

        Args:
            people: Everyone on the trip
            constraints: Raw constraints from every level
            capacity: Room configuration for the oversized-group check
            trip_id: Echoed back on the result

        Returns:
            AnalysisResult

        Raises:
            InvalidReferenceError: On a bad reference when strict_references is set
        """
        people = list(people)
        constraints = list(constraints)
        if not people:
            logger.info(f"Trip {trip_id} has no people; nothing to analyze")
            return AnalysisResult(trip_id=trip_id)

        names = {person.id: person.name for person in people}
        valid, rejected = split_valid_constraints(constraints, names.keys(), strict=self.strict_references)

        effective = resolve_effective_constraints(valid, names)
        override_report = self.override_detector.detect(valid, names)
        mismatches = detect_mismatches(effective)
        group_report = self.mandatory_analyzer.analyze(effective, people, capacity)

        views = [
            ConstraintView(
                **constraint.model_dump(include=set(Constraint.model_fields)),
                subject_name=names.get(constraint.subject_id),
                target_name=names.get(constraint.target_id),
                overridden_by=override_report.explanations.get(constraint.id),
            )
            for constraint in valid
        ]

        result = AnalysisResult(
            trip_id=trip_id,
            people_count=len(people),
            constraints=views,
            effective=list(effective.values()),
            overrides=override_report.overrides,
            mismatches=mismatches,
            hard_conflicts=group_report.hard_conflicts,
            oversized_groups=group_report.oversized_groups,
            invalid_references=[error.to_dict() for error in rejected],
        )

        logger.info(
            f"Analyzed trip {trip_id}: {len(people)} people, {len(valid)} constraints "
            f"({len(rejected)} excluded), {len(result.overrides)} overrides, "
            f"{len(result.mismatches)} mismatches, {len(result.hard_conflicts)} hard conflicts, "
            f"{len(result.oversized_groups)} oversized groups"
        )
        return result
