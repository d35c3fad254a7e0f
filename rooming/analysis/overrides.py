"""Override detection.

An override is an ordered pair where one level says "together" and another
says "apart". The effective constraint already picks a winner; this module
makes the disagreement visible, both per pair and per raw constraint.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from ..models import Constraint, LevelKind, Override, PersonId
from .effective import group_by_pair

logger = logging.getLogger(__name__)


@dataclass
class OverrideReport:
    """Result of override detection."""

    overrides: list[Override] = field(default_factory=list)
    # constraint id -> "Admin says Must, Parent says Must Not"
    explanations: dict[int | str, str] = field(default_factory=dict)


def describe_opposition(opposing: Iterable[Constraint]) -> str:
    return ", ".join(LevelKind(level=c.level, kind=c.kind).describe() for c in opposing)


class OverrideDetector:
    """Finds pairs whose raw constraints disagree in polarity across levels."""

    def detect(
        self,
        constraints: Iterable[Constraint],
        names: Mapping[PersonId, str] | None = None,
    ) -> OverrideReport:
        """Detect overrides in a raw constraint snapshot.

        Args:
            constraints: Raw constraint snapshot
            names: Optional id -> display name lookup

        Returns:
            OverrideReport with one Override per mixed pair and an
            explanation for every constraint taking part in one
        """
        names = names or {}
        report = OverrideReport()

        for (subject_id, target_id), group in group_by_pair(constraints).items():
            positives = [c for c in group if c.kind.is_positive]
            negatives = [c for c in group if not c.kind.is_positive]
            if not positives or not negatives:
                continue

            report.overrides.append(
                Override(
                    subject_id=subject_id,
                    target_id=target_id,
                    positives=[LevelKind(level=c.level, kind=c.kind) for c in positives],
                    negatives=[LevelKind(level=c.level, kind=c.kind) for c in negatives],
                    names=f"{names.get(subject_id, subject_id)} → {names.get(target_id, target_id)}",
                )
            )

            for constraint in group:
                opposing = negatives if constraint.kind.is_positive else positives
                report.explanations[constraint.id] = describe_opposition(opposing)

        logger.debug(f"Found {len(report.overrides)} overrides")
        return report
