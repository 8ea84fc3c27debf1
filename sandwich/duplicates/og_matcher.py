"""Cross-matching between OG Sandwich Project entries and unattributed entries.

Early collections were often logged twice: once under the canonical
"OG Sandwich Project" host and once with no usable host name. Entries
that share a collection date and individual count with an OG entry are
reported as likely duplicates, as are repeated OG entries themselves.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..models import OG_HOST_NAME, SandwichCollection
from .grouping import newest_first

EARLY_MATCH_REASON = "Same date and sandwich count as OG Project entry"
DUPLICATE_OG_REASON = "Duplicate OG Project entry"


@dataclass
class OgMatch:
    """A likely duplicate pairing against an OG Project entry.

    Exactly one of early_entry / duplicate_og_entry is set.
    """

    og_entry: SandwichCollection
    reason: str
    early_entry: SandwichCollection | None = None
    duplicate_og_entry: SandwichCollection | None = None


def is_early_entry(record: SandwichCollection, og_host_name: str = OG_HOST_NAME) -> bool:
    """True for records with a missing or placeholder host name."""
    host_name = record.host_name
    if host_name == og_host_name:
        return False
    if host_name is None or host_name.strip() == "":
        return True
    lowered = host_name.lower()
    return "unknown" in lowered or "no location" in lowered


class OgProjectMatcher:
    """Finds OG/early and OG/OG duplicate pairings in a snapshot."""

    def __init__(self, og_host_name: str = OG_HOST_NAME) -> None:
        self.og_host_name = og_host_name

    def match(self, records: Iterable[SandwichCollection]) -> list[OgMatch]:
        snapshot = list(records)
        og_records = [record for record in snapshot if record.host_name == self.og_host_name]
        early_records = [record for record in snapshot if is_early_entry(record, self.og_host_name)]

        og_by_key: dict[tuple[str, int], list[SandwichCollection]] = {}
        for og in og_records:
            og_by_key.setdefault(og.og_key, []).append(og)

        matches: list[OgMatch] = []

        # Only the first OG entry seen at a key is referenced
        for early in early_records:
            og_group = og_by_key.get(early.og_key)
            if og_group:
                matches.append(OgMatch(og_entry=og_group[0], early_entry=early, reason=EARLY_MATCH_REASON))

        for og_group in og_by_key.values():
            if len(og_group) < 2:
                continue
            ordered = newest_first(og_group)
            for duplicate in ordered[1:]:
                matches.append(OgMatch(og_entry=ordered[0], duplicate_og_entry=duplicate, reason=DUPLICATE_OG_REASON))

        return matches
