"""
Constraint analysis: effective preferences, overrides, mismatches and
mandatory-group conflicts.
"""

from __future__ import annotations

from .analyzer import ConstraintAnalyzer
from .effective import group_by_pair, resolve_effective_constraints
from .mandatory_groups import MandatoryGroupAnalyzer, MandatoryGroupReport, build_must_graph
from .mismatches import detect_mismatches
from .overrides import OverrideDetector, OverrideReport
from .validation import LEVEL_KINDS, check_authoring, check_reference, split_valid_constraints, validate_constraint

__all__ = [
    "ConstraintAnalyzer",
    "LEVEL_KINDS",
    "MandatoryGroupAnalyzer",
    "MandatoryGroupReport",
    "OverrideDetector",
    "OverrideReport",
    "build_must_graph",
    "check_authoring",
    "check_reference",
    "detect_mismatches",
    "group_by_pair",
    "resolve_effective_constraints",
    "split_valid_constraints",
    "validate_constraint",
]
