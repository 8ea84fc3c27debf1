"""
Pydantic schemas for duplicate analysis and cleanup endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, SerializerFunctionWrapHandler, field_validator, model_serializer

from sandwich.duplicates import CleanMode, DuplicateGroup, DuplicateReport, OgMatch

from .base import CamelModel
from .collections import SandwichCollectionResponse, SandwichCollectionUpdate

_VALID_MODES = [mode.value for mode in CleanMode]


class DuplicateGroupResponse(CamelModel):
    """One exact-duplicate group, newest entry first."""

    entries: list[SandwichCollectionResponse]
    count: int
    keep_newest: SandwichCollectionResponse
    to_delete: list[SandwichCollectionResponse]

    @classmethod
    def from_group(cls, group: DuplicateGroup) -> DuplicateGroupResponse:
        return cls(
            entries=[SandwichCollectionResponse.from_domain(entry) for entry in group.entries],
            count=group.count,
            keep_newest=SandwichCollectionResponse.from_domain(group.keep_newest),
            to_delete=[SandwichCollectionResponse.from_domain(entry) for entry in group.to_delete],
        )


class OgMatchResponse(CamelModel):
    """An OG Project pairing; carries either earlyEntry or duplicateOgEntry."""

    og_entry: SandwichCollectionResponse
    early_entry: SandwichCollectionResponse | None = None
    duplicate_og_entry: SandwichCollectionResponse | None = None
    reason: str

    @model_serializer(mode="wrap")
    def _omit_other_side(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data: dict[str, Any] = handler(self)
        for key in ("earlyEntry", "early_entry", "duplicateOgEntry", "duplicate_og_entry"):
            if key in data and data[key] is None:
                del data[key]
        return data

    @classmethod
    def from_match(cls, match: OgMatch) -> OgMatchResponse:
        return cls(
            og_entry=SandwichCollectionResponse.from_domain(match.og_entry),
            early_entry=SandwichCollectionResponse.from_domain(match.early_entry) if match.early_entry else None,
            duplicate_og_entry=(
                SandwichCollectionResponse.from_domain(match.duplicate_og_entry) if match.duplicate_og_entry else None
            ),
            reason=match.reason,
        )


class DuplicateAnalysisResponse(CamelModel):
    """Read-only duplicate report for the whole collection log."""

    total_collections: int
    duplicate_groups: int
    total_duplicate_entries: int
    suspicious_patterns: int
    og_duplicates: int
    duplicates: list[DuplicateGroupResponse]
    suspicious_entries: list[SandwichCollectionResponse]
    og_duplicate_entries: list[OgMatchResponse]

    @classmethod
    def from_report(cls, report: DuplicateReport) -> DuplicateAnalysisResponse:
        return cls(
            total_collections=report.total_collections,
            duplicate_groups=len(report.duplicate_groups),
            total_duplicate_entries=report.total_duplicate_entries,
            suspicious_patterns=len(report.suspicious_entries),
            og_duplicates=len(report.og_matches),
            duplicates=[DuplicateGroupResponse.from_group(group) for group in report.duplicate_groups],
            suspicious_entries=[SandwichCollectionResponse.from_domain(entry) for entry in report.suspicious_entries],
            og_duplicate_entries=[OgMatchResponse.from_match(match) for match in report.og_matches],
        )


class CleanDuplicatesRequest(CamelModel):
    """Request body for duplicate cleanup."""

    mode: str = CleanMode.EXACT.value

    @field_validator("mode")
    @classmethod
    def validate_mode(cls, v: str) -> str:
        if v not in _VALID_MODES:
            raise ValueError(f"Invalid cleanup mode: {v}. Must be one of {_VALID_MODES}")
        return v


class CleanDuplicatesResponse(CamelModel):
    message: str
    deleted_count: int
    total_found: int
    errors: list[str] | None = None
    mode: str


class BulkDeleteResponse(CamelModel):
    message: str
    deleted_count: int
    patterns: list[str]


def _require_ids(v: Any) -> Any:
    if not isinstance(v, list) or len(v) == 0:
        raise ValueError("Invalid or empty IDs array")
    return v


class BatchDeleteRequest(CamelModel):
    """Request body for deleting a list of collections."""

    ids: list[int] = Field(default_factory=list, validate_default=True)

    _ids = field_validator("ids", mode="before")(_require_ids)


class BatchDeleteResponse(CamelModel):
    message: str
    deleted_count: int
    total_requested: int
    errors: list[str] | None = None


class BatchEditRequest(CamelModel):
    """Request body for applying the same update to a list of collections."""

    ids: list[int] = Field(default_factory=list, validate_default=True)
    updates: SandwichCollectionUpdate = Field(default_factory=dict, validate_default=True)  # type: ignore[arg-type]

    _ids = field_validator("ids", mode="before")(_require_ids)

    @field_validator("updates", mode="before")
    @classmethod
    def require_raw_updates(cls, v: Any) -> Any:
        if not isinstance(v, dict) or len(v) == 0:
            raise ValueError("No updates provided")
        return v

    @field_validator("updates")
    @classmethod
    def require_known_updates(cls, v: SandwichCollectionUpdate) -> SandwichCollectionUpdate:
        if not v.changes():
            raise ValueError("No updates provided")
        return v


class BatchEditResponse(CamelModel):
    message: str
    updated_count: int
    total_requested: int
    errors: list[str] | None = None
