"""Duplicate collection detection and reconciliation."""

from __future__ import annotations

from .grouping import DuplicateGroup, exact_duplicate_candidates, find_duplicate_groups, newest_first
from .og_matcher import OgMatch, OgProjectMatcher, is_early_entry
from .policies import BroadSuspiciousPolicy, LegacyBulkPattern, StrictSuspiciousPolicy, SuspiciousPolicy
from .reconciler import CleanMode, CleanupResult, CollectionStore, DuplicateReconciler, DuplicateReport
from .results import BatchResult

__all__ = [
    "BatchResult",
    "BroadSuspiciousPolicy",
    "CleanMode",
    "CleanupResult",
    "CollectionStore",
    "DuplicateGroup",
    "DuplicateReconciler",
    "DuplicateReport",
    "LegacyBulkPattern",
    "OgMatch",
    "OgProjectMatcher",
    "StrictSuspiciousPolicy",
    "SuspiciousPolicy",
    "exact_duplicate_candidates",
    "find_duplicate_groups",
    "is_early_entry",
    "newest_first",
]
