"""Parsing for the group_collections field.

The field holds either a JSON array such as
    [{"sandwichCount": 8, "description": "Marketing Team"}]
or the older free-text form
    "Marketing Team: 8, Development: 6"
"""

from __future__ import annotations

import json
import re
from typing import Any

_NUMBER_PATTERN = re.compile(r"\d+")


def _entry_count(entry: Any) -> int:
    if not isinstance(entry, dict):
        return 0
    # Rows written by older CSV imports used "count"
    value = entry.get("sandwichCount", entry.get("count", 0))
    if isinstance(value, bool):
        return 0
    if isinstance(value, int | float):
        return int(value)
    return 0


def group_sandwich_total(group_collections: str | None) -> int:
    """Total sandwiches recorded in a group_collections value.

    JSON arrays sum their entries' sandwichCount. A value that is valid
    JSON but not an array contributes nothing. Text that is not JSON at
    all falls back to summing every integer found in it.
    """
    raw = group_collections or "[]"
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, RecursionError):
        # RecursionError: nesting too deep for the decoder
        if raw == "[]":
            return 0
        return sum(int(match) for match in _NUMBER_PATTERN.findall(raw))

    if isinstance(data, list):
        return sum(_entry_count(entry) for entry in data)
    return 0


def single_group_entry(count: int, description: str = "Group Collection") -> str:
    """Serialize one group entry in the JSON array form."""
    return json.dumps([{"sandwichCount": count, "description": description}])
