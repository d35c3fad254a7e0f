"""
Domain models for roommate constraints and room partitions.

Kinds and levels are plain string enums backed by small lookup tables
(polarity, strength, precedence, labels). Findings produced by the analyzers
carry display names so callers can render them without another lookup.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

PersonId = int | str


def id_sort_key(person_id: PersonId) -> tuple[int, int | str]:
    """Total ordering over mixed int/str ids: ints numerically, then strings."""
    if isinstance(person_id, int):
        return (0, person_id)
    return (1, str(person_id))


class ConstraintKind(str, Enum):
    MUST = "must"
    PREFER = "prefer"
    PREFER_NOT = "prefer_not"
    MUST_NOT = "must_not"

    @property
    def is_positive(self) -> bool:
        return self in _POSITIVE_KINDS

    @property
    def is_mandatory(self) -> bool:
        return self in _MANDATORY_KINDS

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]


class ConstraintLevel(str, Enum):
    ADMIN = "admin"
    PARENT = "parent"
    STUDENT = "student"

    @property
    def precedence(self) -> int:
        """Lower rank wins."""
        return _LEVEL_PRECEDENCE[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()


_POSITIVE_KINDS = frozenset({ConstraintKind.MUST, ConstraintKind.PREFER})
_MANDATORY_KINDS = frozenset({ConstraintKind.MUST, ConstraintKind.MUST_NOT})
_KIND_LABELS = {
    ConstraintKind.MUST: "Must",
    ConstraintKind.PREFER: "Prefer",
    ConstraintKind.PREFER_NOT: "Prefer Not",
    ConstraintKind.MUST_NOT: "Must Not",
}
_LEVEL_PRECEDENCE = {
    ConstraintLevel.ADMIN: 0,
    ConstraintLevel.PARENT: 1,
    ConstraintLevel.STUDENT: 2,
}


class Person(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: PersonId
    name: str = ""


class Constraint(BaseModel):
    """One directed constraint: how ``subject_id`` feels about rooming with ``target_id``."""

    model_config = ConfigDict(frozen=True)

    id: int | str
    subject_id: PersonId
    target_id: PersonId
    kind: ConstraintKind
    level: ConstraintLevel

    @property
    def pair(self) -> tuple[PersonId, PersonId]:
        return (self.subject_id, self.target_id)


class ConstraintView(Constraint):
    """A raw constraint as shown to an admin, with names and its override explanation."""

    subject_name: str | None = None
    target_name: str | None = None
    overridden_by: str | None = None


class EffectiveConstraint(BaseModel):
    """The constraint that governs an ordered pair after level precedence."""

    model_config = ConfigDict(frozen=True)

    subject_id: PersonId
    target_id: PersonId
    kind: ConstraintKind
    level: ConstraintLevel
    constraint_id: int | str
    subject_name: str | None = None
    target_name: str | None = None

    @property
    def pair(self) -> tuple[PersonId, PersonId]:
        return (self.subject_id, self.target_id)


class LevelKind(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: ConstraintLevel
    kind: ConstraintKind

    def describe(self) -> str:
        return f"{self.level.label} says {self.kind.label}"


class Override(BaseModel):
    """An ordered pair where levels disagree on polarity."""

    subject_id: PersonId
    target_id: PersonId
    positives: list[LevelKind]
    negatives: list[LevelKind]
    names: str = ""


class Mismatch(BaseModel):
    """``subject_id`` wants to room with ``target_id``; the feeling is not returned."""

    subject_id: PersonId
    target_id: PersonId
    subject_kind: ConstraintKind
    target_kind: ConstraintKind | None = None
    subject_name: str | None = None
    target_name: str | None = None


class ConflictLink(BaseModel):
    from_id: PersonId
    to_id: PersonId
    kind: ConstraintKind
    from_name: str | None = None
    to_name: str | None = None


class HardConflict(BaseModel):
    """A chain of must links closed by a must_not link between two of its members."""

    links: list[ConflictLink]

    @property
    def must_not_link(self) -> ConflictLink:
        return self.links[-1]

    @property
    def member_ids(self) -> list[PersonId]:
        seen: dict[PersonId, None] = {}
        for link in self.links:
            seen.setdefault(link.from_id)
            seen.setdefault(link.to_id)
        return list(seen)


class OversizedGroup(BaseModel):
    member_ids: list[PersonId]
    member_names: list[str] = Field(default_factory=list)
    max_room_size: int

    @property
    def size(self) -> int:
        return len(self.member_ids)


class RoomGroup(BaseModel):
    """``count`` rooms of ``size`` beds."""

    size: int = Field(ge=1)
    count: int = Field(default=1, ge=1)


class RoomCapacity(BaseModel):
    """A trip either has one fixed room size or a set of room-size groups."""

    room_size: int | None = Field(default=None, ge=1)
    room_groups: list[RoomGroup] = Field(default_factory=list)

    @model_validator(mode="after")
    def require_some_room(self) -> RoomCapacity:
        if self.room_size is None and not self.room_groups:
            raise ValueError("room_size or room_groups is required")
        return self

    @property
    def max_room_size(self) -> int:
        sizes = [group.size for group in self.room_groups]
        if self.room_size is not None:
            sizes.append(self.room_size)
        return max(sizes)


class Room(BaseModel):
    """An unordered set of people, stored sorted so equal rooms compare equal."""

    model_config = ConfigDict(frozen=True)

    member_ids: tuple[PersonId, ...]

    @field_validator("member_ids", mode="after")
    @classmethod
    def sort_members(cls, v: tuple[PersonId, ...]) -> tuple[PersonId, ...]:
        return tuple(sorted(v, key=id_sort_key))

    @computed_field  # type: ignore[prop-decorator]
    @property
    def key(self) -> str:
        return ",".join(str(pid) for pid in self.member_ids)

    @property
    def sort_key(self) -> tuple[tuple[int, int | str], ...]:
        return tuple(id_sort_key(pid) for pid in self.member_ids)

    @classmethod
    def of(cls, member_ids: Any) -> Room:
        return cls(member_ids=tuple(member_ids))


class RoomPartition(BaseModel):
    """One candidate assignment returned by the optimizer."""

    rooms: list[list[PersonId]]
    score: float = 0

    def person_ids(self) -> list[PersonId]:
        return [pid for room in self.rooms for pid in room]


class SwapGroup(BaseModel):
    """People whose rooms change together across tied partitions, and their alternatives."""

    member_ids: list[PersonId]
    configurations: list[list[Room]]

    @property
    def option_count(self) -> int:
        return len(self.configurations)


class ReconciliationResult(BaseModel):
    locked_rooms: list[Room] = Field(default_factory=list)
    swap_groups: list[SwapGroup] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def combination_count(self) -> int:
        return math.prod(group.option_count for group in self.swap_groups)

    def options_summary(self) -> str:
        """Human readable count of the arrangements on offer."""
        if not self.swap_groups:
            return ""
        if len(self.swap_groups) == 1:
            return f"{self.combination_count} options"
        counts = " × ".join(str(group.option_count) for group in self.swap_groups)
        return f"{counts} = {self.combination_count} combinations"


class TripSnapshot(BaseModel):
    """Everything analysis needs about one trip, read together."""

    people: list[Person] = Field(default_factory=list)
    constraints: list[Constraint] = Field(default_factory=list)
    capacity: RoomCapacity


class SolveResult(BaseModel):
    score: float | None = None
    partitions: list[RoomPartition] = Field(default_factory=list)
    reconciliation: ReconciliationResult = Field(default_factory=ReconciliationResult)


class AnalysisResult(BaseModel):
    """Everything an admin needs to review a trip's constraints."""

    trip_id: Any = None
    people_count: int = 0
    constraints: list[ConstraintView] = Field(default_factory=list)
    effective: list[EffectiveConstraint] = Field(default_factory=list)
    overrides: list[Override] = Field(default_factory=list)
    mismatches: list[Mismatch] = Field(default_factory=list)
    hard_conflicts: list[HardConflict] = Field(default_factory=list)
    oversized_groups: list[OversizedGroup] = Field(default_factory=list)
    invalid_references: list[dict[str, Any]] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_hard_conflicts(self) -> bool:
        return bool(self.hard_conflicts)
