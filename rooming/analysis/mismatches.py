"""Mismatch detection: one-sided fondness between two people."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from ..models import EffectiveConstraint, Mismatch, PersonId

logger = logging.getLogger(__name__)


def detect_mismatches(effective: Mapping[tuple[PersonId, PersonId], EffectiveConstraint]) -> list[Mismatch]:
    """Flag pairs where A is positive about B but B is negative about A or silent.

    Negative-vs-absent is left alone. Each finding is reported from the
    positive side; since both sides positive never qualifies, an unordered
    pair can appear at most once.
    """
    mismatches: list[Mismatch] = []

    for (subject_id, target_id), forward in effective.items():
        if not forward.kind.is_positive:
            continue
        reverse = effective.get((target_id, subject_id))
        if reverse is not None and reverse.kind.is_positive:
            continue

        mismatches.append(
            Mismatch(
                subject_id=subject_id,
                target_id=target_id,
                subject_kind=forward.kind,
                target_kind=reverse.kind if reverse is not None else None,
                subject_name=forward.subject_name,
                target_name=forward.target_name,
            )
        )

    logger.debug(f"Found {len(mismatches)} mismatches")
    return mismatches
