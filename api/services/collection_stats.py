"""Aggregate statistics over sandwich collection records.

Pure functions over already-loaded records; the routers handle loading
and caching.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from sandwich.group_collections import group_sandwich_total
from sandwich.models import SandwichCollection


@dataclass(frozen=True)
class SandwichTotals:
    total_entries: int
    individual_sandwiches: int
    group_sandwiches: int

    @property
    def complete_total_sandwiches(self) -> int:
        return self.individual_sandwiches + self.group_sandwiches


@dataclass(frozen=True)
class MappingSummary:
    total_records: int
    processed_records: int
    mapped_records: int
    unmapped_records: int


@dataclass(frozen=True)
class HostCount:
    host_name: str | None
    count: int
    mapped: bool


def calculate_totals(records: Sequence[SandwichCollection]) -> SandwichTotals:
    """Sum individual and group sandwiches across all records."""
    return SandwichTotals(
        total_entries=len(records),
        individual_sandwiches=sum(record.individual_sandwiches or 0 for record in records),
        group_sandwiches=sum(group_sandwich_total(record.group_collections) for record in records),
    )


def is_mapped_host(host_name: str | None, known_hosts: Iterable[str]) -> bool:
    """A host name is mapped when it is a known host or a group collection.

    Args:
        host_name: Host name on the collection record
        known_hosts: Names from the host directory

    Returns:
        True if the record can be attributed to a host
    """
    if not host_name:
        return False
    if "group" in host_name.lower():
        return True
    return host_name in set(known_hosts)


def summarize_mapping(records: Sequence[SandwichCollection], known_hosts: Iterable[str]) -> MappingSummary:
    hosts = set(known_hosts)
    mapped = sum(1 for record in records if is_mapped_host(record.host_name, hosts))
    return MappingSummary(
        total_records=len(records),
        processed_records=len(records),
        mapped_records=mapped,
        unmapped_records=len(records) - mapped,
    )


def host_mapping_counts(records: Sequence[SandwichCollection], known_hosts: Iterable[str]) -> list[HostCount]:
    """Record count per host name, most frequent first."""
    hosts = set(known_hosts)
    counts = Counter(record.host_name for record in records)
    return [
        HostCount(host_name=host_name, count=count, mapped=is_mapped_host(host_name, hosts))
        for host_name, count in counts.most_common()
    ]
