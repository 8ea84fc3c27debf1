"""Exact-duplicate grouping for sandwich collections.

Two records are exact duplicates when their collection date, host name,
individual sandwich count and group_collections string are all equal.
Within a group the newest submission is kept and every other record is a
deletion candidate.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..models import SandwichCollection


@dataclass
class DuplicateGroup:
    """Records sharing one grouping key, ordered newest first."""

    entries: list[SandwichCollection]

    @property
    def count(self) -> int:
        return len(self.entries)

    @property
    def keep_newest(self) -> SandwichCollection:
        return self.entries[0]

    @property
    def to_delete(self) -> list[SandwichCollection]:
        return self.entries[1:]


def newest_first(records: Iterable[SandwichCollection]) -> list[SandwichCollection]:
    """Sort records by submission time, newest first.

    Python's sort is stable under reverse=True, so records with equal (or
    equally unparsable) timestamps keep their scan order.
    """
    return sorted(records, key=lambda record: record.submitted_instant, reverse=True)


def group_by_key(records: Iterable[SandwichCollection]) -> dict[tuple, list[SandwichCollection]]:
    """Map each grouping key to the records sharing it, in scan order."""
    groups: dict[tuple, list[SandwichCollection]] = {}
    for record in records:
        groups.setdefault(record.duplicate_key, []).append(record)
    return groups


def find_duplicate_groups(records: Iterable[SandwichCollection]) -> list[DuplicateGroup]:
    """Return every group with more than one record.

    Groups come back in the order their key was first seen.
    """
    return [DuplicateGroup(newest_first(group)) for group in group_by_key(records).values() if len(group) > 1]


def exact_duplicate_candidates(records: Iterable[SandwichCollection]) -> list[SandwichCollection]:
    """All records that exact-mode cleanup would delete."""
    candidates: list[SandwichCollection] = []
    for group in find_duplicate_groups(records):
        candidates.extend(group.to_delete)
    return candidates
