"""Effective preference resolution.

Collapses the leveled constraints on each ordered pair into the single
constraint that governs it: admin beats parent beats student.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from ..models import Constraint, EffectiveConstraint, PersonId

logger = logging.getLogger(__name__)

Pair = tuple[PersonId, PersonId]


def group_by_pair(constraints: Iterable[Constraint]) -> dict[Pair, list[Constraint]]:
    """Group raw constraints by ordered pair, keeping first-seen pair order."""
    groups: dict[Pair, list[Constraint]] = {}
    for constraint in constraints:
        groups.setdefault(constraint.pair, []).append(constraint)
    return groups


def resolve_effective_constraints(
    constraints: Iterable[Constraint],
    names: Mapping[PersonId, str] | None = None,
) -> dict[Pair, EffectiveConstraint]:
    """Map every ordered pair with at least one constraint to its governing constraint.

    Pairs without constraints get no entry; absence means neutral.

    Args:
        constraints: Raw constraint snapshot for one trip
        names: Optional id -> display name lookup

    Returns:
        Ordered pair -> EffectiveConstraint, in first-seen pair order
    """
    names = names or {}
    effective: dict[Pair, EffectiveConstraint] = {}

    for pair, group in group_by_pair(constraints).items():
        best = group[0]
        seen_levels = {best.level}
        for candidate in group[1:]:
            if candidate.level in seen_levels:
                logger.warning(
                    f"Pair {pair[0]} -> {pair[1]} has more than one {candidate.level.value} constraint; "
                    f"constraint {candidate.id} replaces the earlier one"
                )
            seen_levels.add(candidate.level)
            # <= so a duplicate level behaves like the store's upsert: last write wins
            if candidate.level.precedence <= best.level.precedence:
                best = candidate

        effective[pair] = EffectiveConstraint(
            subject_id=best.subject_id,
            target_id=best.target_id,
            kind=best.kind,
            level=best.level,
            constraint_id=best.id,
            subject_name=names.get(best.subject_id),
            target_name=names.get(best.target_id),
        )

    logger.debug(f"Resolved {len(effective)} effective constraints")
    return effective
