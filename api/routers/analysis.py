"""
Analysis Router - constraint analysis and solution reconciliation endpoints.

Contradictory constraints are returned as findings with status 200; only
unknown trips, unusable room configurations, bad references in strict mode,
and optimizer defects are errors.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from rooming.errors import (
    HardConflictsExistError,
    InvalidCapacityError,
    InvalidReferenceError,
    PartitionMismatchError,
    SolverUnavailableError,
    UnknownTripError,
)
from rooming.models import AnalysisResult, SolveResult
from rooming.service import RoomingService

from ..dependencies import get_rooming_service
from ..schemas import AnalyzeSnapshotRequest, ReconcileRequest, ReconcileResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analysis"])


def _invalid_reference_detail(e: InvalidReferenceError) -> dict[str, Any]:
    return {"error": "invalid_reference", **e.to_dict()}


@router.get("/trips/{trip_id}/analysis", response_model=AnalysisResult)
async def analyze_trip(trip_id: str, service: RoomingService = Depends(get_rooming_service)) -> AnalysisResult:
    """Analyze the stored constraints of a trip."""
    try:
        return await asyncio.to_thread(service.analyze_constraints, trip_id)
    except UnknownTripError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidCapacityError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except InvalidReferenceError as e:
        raise HTTPException(status_code=422, detail=_invalid_reference_detail(e))


@router.post("/constraints/analyze", response_model=AnalysisResult)
async def analyze_snapshot(
    request: AnalyzeSnapshotRequest, service: RoomingService = Depends(get_rooming_service)
) -> AnalysisResult:
    """Analyze a snapshot posted by the caller."""
    try:
        return await asyncio.to_thread(
            service.analyzer.analyze, request.people, request.constraints, request.room_capacity
        )
    except InvalidReferenceError as e:
        raise HTTPException(status_code=422, detail=_invalid_reference_detail(e))


@router.post("/solutions/reconcile", response_model=ReconcileResponse)
async def reconcile_solutions(
    request: ReconcileRequest, service: RoomingService = Depends(get_rooming_service)
) -> ReconcileResponse:
    """Split tied partitions into locked rooms and swap groups."""
    try:
        result = await asyncio.to_thread(service.reconcile_solutions, request.partitions)
    except PartitionMismatchError as e:
        logger.error(f"Optimizer returned inconsistent partitions: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    return ReconcileResponse(
        locked_rooms=result.locked_rooms,
        swap_groups=result.swap_groups,
        summary=result.options_summary(),
    )


@router.post("/trips/{trip_id}/solve", response_model=SolveResult)
async def solve_trip(trip_id: str, service: RoomingService = Depends(get_rooming_service)) -> SolveResult:
    """Run the optimizer for a trip and reconcile its best partitions."""
    if service.solver is None:
        raise HTTPException(status_code=503, detail="No optimizer configured (set SOLVER_URL)")
    try:
        return await asyncio.to_thread(service.solve_and_reconcile, trip_id)
    except UnknownTripError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except HardConflictsExistError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidCapacityError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except InvalidReferenceError as e:
        raise HTTPException(status_code=422, detail=_invalid_reference_detail(e))
    except (PartitionMismatchError, SolverUnavailableError) as e:
        logger.error(f"Optimizer failure for trip {trip_id}: {e}")
        raise HTTPException(status_code=502, detail=str(e))
