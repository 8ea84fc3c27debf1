"""
Pydantic schemas for sandwich collection endpoints.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from .base import CamelModel, Pagination


def _serialize_group_collections(v: Any) -> Any:
    """Accept group collections as a list and store them as a JSON string."""
    if isinstance(v, list):
        return json.dumps(v)
    return v


class SandwichCollectionResponse(CamelModel):
    """Response model for a sandwich collection."""

    id: int
    host_name: str | None = None
    collection_date: str
    individual_sandwiches: int
    group_collections: str
    submitted_at: datetime | str | None = None


class SandwichCollectionCreate(CamelModel):
    """Request model for logging a sandwich collection."""

    host_name: str = Field(..., min_length=1)
    collection_date: str = Field(..., min_length=1)
    individual_sandwiches: int = Field(default=0, ge=0)
    group_collections: str = "[]"
    submitted_at: datetime | None = None

    _group_collections = field_validator("group_collections", mode="before")(_serialize_group_collections)


class SandwichCollectionUpdate(CamelModel):
    """Request model for updating a sandwich collection.

    Only fields present in the request are applied.
    """

    host_name: str | None = None
    collection_date: str | None = None
    individual_sandwiches: int | None = Field(default=None, ge=0)
    group_collections: str | None = None

    _group_collections = field_validator("group_collections", mode="before")(_serialize_group_collections)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class CollectionListResponse(CamelModel):
    collections: list[SandwichCollectionResponse]
    pagination: Pagination


class CollectionStatsResponse(CamelModel):
    """Complete sandwich totals (individual plus group collections)."""

    total_entries: int
    individual_sandwiches: int
    group_sandwiches: int
    complete_total_sandwiches: int


class CollectionMappingStatsResponse(CamelModel):
    """How many collections are attributed to a known host."""

    total_records: int
    processed_records: int
    mapped_records: int
    unmapped_records: int


class HostMappingStat(CamelModel):
    host_name: str | None
    count: int
    mapped: bool
