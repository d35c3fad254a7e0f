"""Trip data sources."""

from __future__ import annotations

from .memory_store import InMemoryTripStore
from .pocketbase_store import PocketBaseTripStore

__all__ = ["InMemoryTripStore", "PocketBaseTripStore"]
