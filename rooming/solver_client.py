"""
HTTP client for the external room-assignment optimizer.

The optimizer answers ``POST {base_url}/api/trips/{trip_id}/solve`` with:

    {"solutions": [{"rooms": [[{"id": 1, "name": "Ann"}, ...], ...], "score": 7}, ...]}

Rooms may also be plain id lists. A 400 response means the optimizer refused
the trip (e.g. unresolved hard conflicts).
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .errors import HardConflictsExistError, SolverUnavailableError, UnknownTripError
from .models import RoomPartition

logger = logging.getLogger(__name__)


def _member_id(member: Any) -> Any:
    return member["id"] if isinstance(member, dict) else member


def parse_solutions(payload: dict[str, Any]) -> list[RoomPartition]:
    """Turn an optimizer response body into partitions."""
    partitions = []
    for solution in payload.get("solutions") or []:
        rooms = [[_member_id(member) for member in room] for room in solution.get("rooms") or []]
        partitions.append(RoomPartition(rooms=rooms, score=solution.get("score", 0)))
    return partitions


class HttpRoomSolver:
    """RoomSolver that delegates to the optimizer service over HTTP."""

    def __init__(self, base_url: str, timeout: float = 60.0, client: httpx.Client | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    def solve(self, trip_id: Any) -> list[RoomPartition]:
        url = f"{self.base_url}/api/trips/{trip_id}/solve"
        try:
            if self._client is not None:
                response = self._client.post(url, timeout=self.timeout)
            else:
                response = httpx.post(url, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise SolverUnavailableError(f"optimizer timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise SolverUnavailableError(f"optimizer request failed: {type(e).__name__}: {e}") from e

        if response.status_code == 404:
            raise UnknownTripError(trip_id)
        if response.status_code == 400:
            logger.warning(f"Optimizer refused trip {trip_id}: {response.text.strip()}")
            raise HardConflictsExistError(trip_id)
        if response.status_code != 200:
            raise SolverUnavailableError(f"optimizer returned status {response.status_code}")

        partitions = parse_solutions(response.json())
        logger.debug(f"Optimizer returned {len(partitions)} partitions for trip {trip_id}")
        return partitions
