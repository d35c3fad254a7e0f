"""Tests for domain model helpers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rooming.models import (
    ConstraintKind,
    ConstraintLevel,
    LevelKind,
    ReconciliationResult,
    Room,
    RoomCapacity,
    RoomGroup,
    SwapGroup,
    id_sort_key,
)


class TestKindsAndLevels:
    """Lookup-table properties."""

    def test_polarity(self):
        assert [k for k in ConstraintKind if k.is_positive] == [ConstraintKind.MUST, ConstraintKind.PREFER]

    def test_mandatory(self):
        assert {k for k in ConstraintKind if k.is_mandatory} == {ConstraintKind.MUST, ConstraintKind.MUST_NOT}

    def test_precedence_order(self):
        ranked = sorted(ConstraintLevel, key=lambda level: level.precedence)
        assert ranked == [ConstraintLevel.ADMIN, ConstraintLevel.PARENT, ConstraintLevel.STUDENT]

    def test_level_kind_description(self):
        assert LevelKind(level="parent", kind="must_not").describe() == "Parent says Must Not"


class TestRoomCapacity:
    """Room configuration validation."""

    def test_room_size_only(self):
        assert RoomCapacity(room_size=4).max_room_size == 4

    def test_largest_of_size_and_groups(self):
        capacity = RoomCapacity(room_size=2, room_groups=[RoomGroup(size=3), RoomGroup(size=1, count=4)])
        assert capacity.max_room_size == 3

    def test_requires_some_room(self):
        with pytest.raises(ValidationError):
            RoomCapacity()

    def test_rejects_zero_sizes(self):
        with pytest.raises(ValidationError):
            RoomCapacity(room_size=0)
        with pytest.raises(ValidationError):
            RoomGroup(size=2, count=0)


class TestOptionsSummary:
    """Human readable combination counts."""

    def _group(self, options):
        return SwapGroup(member_ids=[1], configurations=[[Room.of([1])] for _ in range(options)])

    def test_no_groups(self):
        result = ReconciliationResult()
        assert result.combination_count == 1
        assert result.options_summary() == ""

    def test_one_group(self):
        assert ReconciliationResult(swap_groups=[self._group(3)]).options_summary() == "3 options"

    def test_several_groups(self):
        result = ReconciliationResult(swap_groups=[self._group(2), self._group(3), self._group(2)])
        assert result.combination_count == 12
        assert result.options_summary() == "2 × 3 × 2 = 12 combinations"


class TestIdSortKey:
    def test_ints_before_strings(self):
        assert sorted(["b", 10, "a", 2], key=id_sort_key) == [2, 10, "a", "b"]
