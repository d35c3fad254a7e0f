"""
Shared dependencies for the Rooming API.

This module provides:
- The trip data source (in-memory store or PocketBase)
- The optional optimizer client
- The RoomingService instance handed to routers via FastAPI Depends
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pocketbase import PocketBase

from rooming.data import InMemoryTripStore, PocketBaseTripStore
from rooming.interfaces import RoomSolver, TripDataSource
from rooming.service import RoomingService
from rooming.solver_client import HttpRoomSolver

from .settings import get_settings

logger = logging.getLogger(__name__)

# Trips registered in-process; used when DATA_SOURCE=memory
memory_store = InMemoryTripStore()


def create_pb_client() -> PocketBase:
    """Create a PocketBase client authenticated as admin."""
    settings = get_settings()
    pb = PocketBase(settings.pocketbase_url)
    try:
        pb.collection("_superusers").auth_with_password(
            settings.pocketbase_admin_email,
            settings.pocketbase_admin_password,
        )
        logger.info("Successfully authenticated with PocketBase")
    except Exception as e:
        logger.error(f"Failed to authenticate with PocketBase: {e}")
        raise
    return pb


@lru_cache
def get_data_source() -> TripDataSource:
    settings = get_settings()
    if settings.data_source == "pocketbase":
        return PocketBaseTripStore(create_pb_client())
    return memory_store


@lru_cache
def get_solver() -> RoomSolver | None:
    settings = get_settings()
    if not settings.solver_url:
        return None
    return HttpRoomSolver(settings.solver_url, timeout=settings.solver_timeout_seconds)


def get_rooming_service() -> RoomingService:
    """FastAPI dependency returning a service over the configured data source."""
    return RoomingService(
        get_data_source(),
        solver=get_solver(),
        strict_references=get_settings().strict_references,
    )
