"""Duplicate analysis and cleanup over a full collection snapshot.

Every call reads a fresh snapshot from the store, classifies it, and (for
cleanup calls) deletes candidates one at a time. Nothing is kept between
calls, so a cleanup interrupted halfway is finished by running it again.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from ..models import SandwichCollection
from .grouping import DuplicateGroup, exact_duplicate_candidates, find_duplicate_groups
from .og_matcher import OgMatch, OgProjectMatcher
from .policies import BroadSuspiciousPolicy, LegacyBulkPattern, StrictSuspiciousPolicy, SuspiciousPolicy
from .results import DEFAULT_ERROR_LIMIT, BatchResult

logger = logging.getLogger(__name__)


class CollectionStore(Protocol):
    """Store operations the reconciler needs."""

    def get_all(self) -> list[SandwichCollection]: ...

    def delete(self, record_id: int) -> bool: ...

    def update(self, record_id: int, fields: dict[str, Any]) -> SandwichCollection | None: ...


class CleanMode(Enum):
    """Candidate selection for duplicate cleanup"""

    EXACT = "exact"
    SUSPICIOUS = "suspicious"


@dataclass
class DuplicateReport:
    """Read-only classification of one snapshot."""

    total_collections: int
    duplicate_groups: list[DuplicateGroup]
    suspicious_entries: list[SandwichCollection]
    og_matches: list[OgMatch]

    @property
    def total_duplicate_entries(self) -> int:
        return sum(len(group.to_delete) for group in self.duplicate_groups)


@dataclass
class CleanupResult:
    mode: CleanMode
    total_found: int
    outcome: BatchResult

    @property
    def deleted_count(self) -> int:
        return self.outcome.success_count


def _error_text(error: Exception) -> str:
    return str(error) or "Unknown error"


class DuplicateReconciler:
    """Detects and removes duplicate sandwich collections.

    Args:
        store: Record store (normally a CollectionRepository)
        strict_policy: Suspicious-name rules for the analysis report
        broad_policy: Suspicious-name rules for suspicious-mode cleanup
        og_matcher: OG Project cross-matcher
        max_errors: How many failure messages a result surfaces
    """

    def __init__(
        self,
        store: CollectionStore,
        strict_policy: SuspiciousPolicy | None = None,
        broad_policy: SuspiciousPolicy | None = None,
        og_matcher: OgProjectMatcher | None = None,
        max_errors: int = DEFAULT_ERROR_LIMIT,
    ) -> None:
        self.store = store
        self.strict_policy = strict_policy or StrictSuspiciousPolicy()
        self.broad_policy = broad_policy or BroadSuspiciousPolicy()
        self.og_matcher = og_matcher or OgProjectMatcher()
        self.bulk_pattern = LegacyBulkPattern()
        self.max_errors = max_errors

    def analyze(self) -> DuplicateReport:
        """Classify the current snapshot without changing anything."""
        records = self.store.get_all()
        report = DuplicateReport(
            total_collections=len(records),
            duplicate_groups=find_duplicate_groups(records),
            suspicious_entries=self.strict_policy.flag(records),
            og_matches=self.og_matcher.match(records),
        )
        logger.info(
            f"Duplicate analysis: {report.total_collections} collections, "
            f"{len(report.duplicate_groups)} duplicate groups, "
            f"{len(report.suspicious_entries)} suspicious, {len(report.og_matches)} OG matches"
        )
        return report

    def candidates(self, records: Sequence[SandwichCollection], mode: CleanMode) -> list[SandwichCollection]:
        """Records the given cleanup mode would delete."""
        if mode is CleanMode.EXACT:
            return exact_duplicate_candidates(records)
        return self.broad_policy.flag(records)

    def clean(self, mode: CleanMode = CleanMode.EXACT) -> CleanupResult:
        """Delete the candidates selected by mode.

        A delete the store reports as "not found" is skipped silently;
        exceptions are recorded and the remaining candidates still run.
        """
        records = self.store.get_all()
        to_delete = self.candidates(records, mode)
        outcome = self._delete_records(to_delete, report_missing=False)

        logger.info(
            f"Cleaned {outcome.success_count} of {len(to_delete)} duplicate candidates "
            f"using {mode.value} mode ({len(outcome.failed)} failures)"
        )
        return CleanupResult(mode=mode, total_found=len(to_delete), outcome=outcome)

    def bulk_delete(self) -> BatchResult:
        """Delete rows left behind by the early spreadsheet import."""
        records = self.store.get_all()
        outcome = self._delete_records(self.bulk_pattern.flag(records), report_missing=False)
        logger.info(f"Bulk delete removed {outcome.success_count} legacy import entries")
        return outcome

    def batch_delete(self, ids: Iterable[int]) -> BatchResult:
        """Delete caller-supplied ids, highest id first."""
        outcome = BatchResult()
        for record_id in sorted(ids, reverse=True):
            self._delete_one(record_id, outcome, report_missing=True)
        return outcome

    def batch_edit(self, ids: Iterable[int], updates: dict[str, Any]) -> BatchResult:
        """Apply the same field updates to each id, in the given order."""
        outcome = BatchResult()
        for record_id in ids:
            try:
                updated = self.store.update(record_id, updates)
            except Exception as e:
                logger.warning(f"Failed to update collection {record_id}: {e}")
                outcome.record_failure(record_id, f"Failed to update collection {record_id}: {_error_text(e)}")
                continue

            if updated is not None:
                outcome.record_success(record_id)
            else:
                outcome.record_failure(record_id, f"Collection with ID {record_id} not found")
        return outcome

    def _delete_records(self, records: Iterable[SandwichCollection], report_missing: bool) -> BatchResult:
        outcome = BatchResult()
        for record in sorted(records, key=lambda r: r.id, reverse=True):
            self._delete_one(record.id, outcome, report_missing)
        return outcome

    def _delete_one(self, record_id: int, outcome: BatchResult, report_missing: bool) -> None:
        try:
            deleted = self.store.delete(record_id)
        except Exception as e:
            logger.warning(f"Failed to delete collection {record_id}: {e}")
            outcome.record_failure(record_id, f"Failed to delete collection {record_id}: {_error_text(e)}")
            return

        if deleted:
            outcome.record_success(record_id)
        elif report_missing:
            outcome.record_failure(record_id, f"Collection with ID {record_id} not found")
        else:
            outcome.record_skip(record_id)
