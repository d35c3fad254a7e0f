#!/usr/bin/env python3
"""
Rooming API - HTTP layer over the constraint analysis core.

Exposes constraint analysis for trips, reconciliation of tied optimizer
partitions, and a solve endpoint that chains the two.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rooming.logging_config import configure_logging, get_logger

from .settings import get_settings

# Format: 2026-01-06T14:05:52Z [api] LEVEL message
configure_logging(source="api", level=get_settings().log_level)
logger = get_logger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Rooming API", description="Roommate constraint analysis API")

    settings = get_settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    from .routers import analysis

    app.include_router(analysis.router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "service": "rooming-api"}

    logger.info(f"Rooming API ready (data source: {settings.data_source})")
    return app


# Create app instance for uvicorn
app = create_app()
