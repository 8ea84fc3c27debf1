"""Host-name policies that flag placeholder, test or bulk-loaded entries.

The analyze report and the "suspicious" cleanup mode use different rules:
the broad policy also flags single-number group names such as "Group 8".
They are kept as separate policies and are not meant to be unified.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from ..models import SandwichCollection


class SuspiciousPolicy:
    """Base predicate over a record's lower-cased host name."""

    name = "base"
    prefixes: tuple[str, ...] = ("loc ",)
    patterns: tuple[re.Pattern[str], ...] = ()
    substrings: tuple[str, ...] = ("test", "duplicate")

    def matches(self, host_name: str | None) -> bool:
        if host_name is None:
            return False
        lowered = host_name.lower()
        return (
            lowered.startswith(self.prefixes)
            or any(pattern.fullmatch(lowered) for pattern in self.patterns)
            or any(substring in lowered for substring in self.substrings)
        )

    def is_suspicious(self, record: SandwichCollection) -> bool:
        return self.matches(record.host_name)

    def flag(self, records: Iterable[SandwichCollection]) -> list[SandwichCollection]:
        """Records this policy flags, in scan order."""
        return [record for record in records if self.is_suspicious(record)]


class StrictSuspiciousPolicy(SuspiciousPolicy):
    """Rules used by the duplicate analysis report.

    Flags "loc ..." prefixes, hyphenated group ranges ("group 3-4") and
    names containing "test" or "duplicate".
    """

    name = "strict"
    patterns = (re.compile(r"group \d-\d", re.ASCII),)


class BroadSuspiciousPolicy(SuspiciousPolicy):
    """Rules used by suspicious-mode cleanup.

    Everything the strict policy flags, plus bare group numbers ("group 8").
    """

    name = "broad"
    patterns = (re.compile(r"group \d-\d", re.ASCII), re.compile(r"group \d+", re.ASCII))


class LegacyBulkPattern:
    """Case-sensitive match used by the bulk delete endpoint.

    Targets rows created by an early spreadsheet import: "Loc ..." hosts and
    hosts starting with "Group 1" through "Group 8".
    """

    labels = ["Loc *", "Group 1-8"]
    _group_pattern = re.compile(r"Group [1-8]")

    def matches(self, host_name: str | None) -> bool:
        if not host_name:
            return False
        return host_name.startswith("Loc ") or bool(self._group_pattern.match(host_name))

    def flag(self, records: Iterable[SandwichCollection]) -> list[SandwichCollection]:
        return [record for record in records if self.matches(record.host_name)]
