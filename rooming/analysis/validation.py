"""Reference and authoring checks for raw constraints."""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable

from ..errors import InvalidReferenceError
from ..models import Constraint, ConstraintKind, ConstraintLevel, PersonId

logger = logging.getLogger(__name__)

# Which kinds each level may author. Students voice preferences, parents can
# only forbid, admins can say anything.
LEVEL_KINDS: dict[ConstraintLevel, tuple[ConstraintKind, ...]] = {
    ConstraintLevel.STUDENT: (ConstraintKind.PREFER, ConstraintKind.PREFER_NOT),
    ConstraintLevel.PARENT: (ConstraintKind.MUST_NOT,),
    ConstraintLevel.ADMIN: (
        ConstraintKind.MUST,
        ConstraintKind.PREFER,
        ConstraintKind.PREFER_NOT,
        ConstraintKind.MUST_NOT,
    ),
}


def check_reference(constraint: Constraint, people_ids: Collection[PersonId]) -> InvalidReferenceError | None:
    """Return the reference problem with a constraint, if any."""
    if constraint.subject_id == constraint.target_id:
        return InvalidReferenceError(
            constraint,
            reason=f"constraint {constraint.id} pairs {constraint.subject_id} with themselves",
        )
    missing = [pid for pid in constraint.pair if pid not in people_ids]
    if missing:
        return InvalidReferenceError(constraint, missing)
    return None


def check_authoring(constraint: Constraint) -> str | None:
    """Return why a level may not author this kind, or None when allowed."""
    if constraint.kind not in LEVEL_KINDS[constraint.level]:
        return f"{constraint.level.label} constraints cannot be {constraint.kind.label}"
    return None


def validate_constraint(constraint: Constraint, people_ids: Collection[PersonId]) -> list[str]:
    """List every problem with a constraint: references first, then authoring."""
    problems = []
    reference_error = check_reference(constraint, people_ids)
    if reference_error is not None:
        problems.append(reference_error.reason)
    authoring_problem = check_authoring(constraint)
    if authoring_problem is not None:
        problems.append(authoring_problem)
    return problems


def split_valid_constraints(
    constraints: Iterable[Constraint],
    people_ids: Collection[PersonId],
    strict: bool = False,
) -> tuple[list[Constraint], list[InvalidReferenceError]]:
    """Separate constraints that reference known people from those that don't.

    Args:
        constraints: Raw snapshot
        people_ids: Ids of everyone on the trip
        strict: Raise the first InvalidReferenceError instead of collecting it

    Returns:
        (valid constraints in input order, rejected constraint errors)

    Raises:
        InvalidReferenceError: Only when strict is True
    """
    valid: list[Constraint] = []
    rejected: list[InvalidReferenceError] = []

    for constraint in constraints:
        error = check_reference(constraint, people_ids)
        if error is None:
            valid.append(constraint)
            continue
        if strict:
            raise error
        logger.warning(f"Excluding constraint from analysis: {error.reason}")
        rejected.append(error)

    return valid, rejected
