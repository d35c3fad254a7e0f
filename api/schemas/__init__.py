"""
Pydantic schemas for the Rooming API.

Re-exports all schemas for convenient importing.
"""

from __future__ import annotations

from .analysis import AnalyzeSnapshotRequest, ReconcileRequest, ReconcileResponse

__all__ = [
    "AnalyzeSnapshotRequest",
    "ReconcileRequest",
    "ReconcileResponse",
]
