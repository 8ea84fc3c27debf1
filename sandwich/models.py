"""Core domain models for the sandwich tracker.

These models describe the records the volunteer app keeps and are
independent of PocketBase and of the HTTP layer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

OG_HOST_NAME = "OG Sandwich Project"

# Sorts below every real submission time
OLDEST_INSTANT = datetime.min.replace(tzinfo=UTC)


def parse_timestamp(value: Any) -> datetime:
    """Parse a submission timestamp into an aware datetime.

    Accepts datetimes, ISO-8601 strings (including PocketBase's
    "2024-01-05 10:00:00.000Z" form) and epoch milliseconds. Anything
    that cannot be parsed maps to OLDEST_INSTANT so that sorting stays
    deterministic.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, bool) or value is None:
        return OLDEST_INSTANT
    elif isinstance(value, int | float):
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return OLDEST_INSTANT
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return OLDEST_INSTANT
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return OLDEST_INSTANT
    else:
        return OLDEST_INSTANT

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


@dataclass
class SandwichCollection:
    """A logged sandwich collection.

    group_collections is kept exactly as stored: either a JSON array of
    {"sandwichCount", "description"} objects or free text such as
    "Marketing Team: 8, Development: 6".
    """

    id: int
    host_name: str | None
    collection_date: str
    individual_sandwiches: int = 0
    group_collections: str = "[]"
    submitted_at: str | datetime | None = None

    @property
    def submitted_instant(self) -> datetime:
        return parse_timestamp(self.submitted_at)

    @property
    def duplicate_key(self) -> tuple[str, str | None, int, str]:
        """Exact-duplicate grouping key (date, host, individual count, group string)."""
        return (self.collection_date, self.host_name, self.individual_sandwiches, self.group_collections)

    @property
    def og_key(self) -> tuple[str, int]:
        """Key used to pair OG Project entries with unattributed entries."""
        return (self.collection_date, self.individual_sandwiches)


@dataclass
class Host:
    """A collection site host"""

    id: int
    name: str
    address: str | None = None
    email: str | None = None
    phone: str | None = None
    status: str = "active"
    notes: str | None = None


@dataclass
class Contact:
    """A person in the contact directory"""

    id: int
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None


@dataclass
class Recipient:
    """An organization receiving sandwiches"""

    id: int
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None


@dataclass
class Project:
    """A volunteer project that can be claimed and tracked"""

    id: int
    title: str
    description: str | None = None
    status: str = "available"
    priority: str = "medium"
    category: str | None = None
    assignee_name: str | None = None
    due_date: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


@dataclass
class Message:
    """A team chat message"""

    id: int
    content: str
    sender: str | None = None
    user_id: str | None = None
    committee: str = "general"
    conversation_id: int | None = None
    timestamp: str | None = None


@dataclass
class WeeklyReport:
    """A weekly sandwich total submitted by a volunteer"""

    id: int
    week_ending: str
    sandwich_count: int = 0
    notes: str | None = None
    submitted_by: str | None = None
    submitted_at: str | None = None
