"""Tests for the optimizer HTTP client."""

from __future__ import annotations

import httpx
import pytest

from rooming.errors import HardConflictsExistError, SolverUnavailableError, UnknownTripError
from rooming.solver_client import HttpRoomSolver, parse_solutions


def _solver(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpRoomSolver("http://optimizer.local/", timeout=5, client=client)


class TestParseSolutions:
    """Decoding optimizer response bodies."""

    def test_rooms_of_member_objects(self):
        payload = {"solutions": [{"rooms": [[{"id": 1, "name": "Ann"}, {"id": 2, "name": "Ben"}]], "score": 7}]}

        partitions = parse_solutions(payload)

        assert partitions[0].rooms == [[1, 2]]
        assert partitions[0].score == 7

    def test_rooms_of_plain_ids(self):
        partitions = parse_solutions({"solutions": [{"rooms": [["a", "b"], ["c"]]}]})

        assert partitions[0].rooms == [["a", "b"], ["c"]]
        assert partitions[0].score == 0

    def test_missing_solutions(self):
        assert parse_solutions({}) == []
        assert parse_solutions({"solutions": None}) == []


class TestHttpRoomSolver:
    """Status code handling."""

    def test_posts_to_trip_solve_endpoint(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"solutions": [{"rooms": [[1, 2]], "score": 3}]})

        partitions = _solver(handler).solve("t1")

        assert seen == {"method": "POST", "url": "http://optimizer.local/api/trips/t1/solve"}
        assert partitions[0].rooms == [[1, 2]]

    def test_not_found(self):
        with pytest.raises(UnknownTripError):
            _solver(lambda request: httpx.Response(404, text="trip not found")).solve("t1")

    def test_bad_request_means_hard_conflicts(self):
        with pytest.raises(HardConflictsExistError):
            _solver(lambda request: httpx.Response(400, text="resolve hard conflicts first")).solve("t1")

    def test_server_error(self):
        with pytest.raises(SolverUnavailableError, match="status 500"):
            _solver(lambda request: httpx.Response(500)).solve("t1")

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(SolverUnavailableError, match="ConnectError"):
            _solver(handler).solve("t1")

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(SolverUnavailableError, match="timed out"):
            _solver(handler).solve("t1")
