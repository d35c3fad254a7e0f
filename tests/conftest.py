"""
Root test configuration and fixtures for the rooming project.

Fixtures here build people, constraints and mock PocketBase clients shared by
the unit tests under tests/unit/.

Note: sys.path manipulation is handled here to ensure imports work correctly.
"""

from __future__ import annotations

import itertools
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add project root to path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rooming.models import Constraint, ConstraintKind, ConstraintLevel, Person, RoomCapacity  # noqa: E402


def create_mock_pocketbase():
    """Create a mock PocketBase instance whose collections are looked up by name."""
    mock_pb = Mock()
    collections: dict[str, Mock] = {}

    def collection(name):
        if name not in collections:
            mock_collection = Mock()
            mock_collection.get_full_list = Mock(return_value=[])
            mock_collection.get_one = Mock()
            mock_collection.auth_with_password = Mock(return_value=True)
            collections[name] = mock_collection
        return collections[name]

    mock_pb.collection = Mock(side_effect=collection)
    return mock_pb


@pytest.fixture
def mock_pocketbase():
    """Create a mock PocketBase instance for tests that need it."""
    return create_mock_pocketbase()


@pytest.fixture
def make_constraint():
    """Factory for constraints with auto-incrementing ids.

    Usage: make_constraint(1, 2, "must", "admin")
    """
    counter = itertools.count(1)

    def _make(subject_id, target_id, kind, level="student", constraint_id=None):
        return Constraint(
            id=constraint_id if constraint_id is not None else next(counter),
            subject_id=subject_id,
            target_id=target_id,
            kind=ConstraintKind(kind),
            level=ConstraintLevel(level),
        )

    return _make


@pytest.fixture
def people():
    """Six students with integer ids."""
    names = ["Ann", "Ben", "Cal", "Dee", "Eve", "Fay"]
    return [Person(id=i, name=name) for i, name in enumerate(names, start=1)]


@pytest.fixture
def doubles():
    """Capacity for a trip of two-bed rooms."""
    return RoomCapacity(room_size=2)
