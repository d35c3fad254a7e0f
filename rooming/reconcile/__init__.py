"""Reconciliation of tied optimizer partitions into locked rooms and swap groups."""

from __future__ import annotations

from .solution_reconciler import SolutionReconciler, validate_partitions

__all__ = ["SolutionReconciler", "validate_partitions"]
