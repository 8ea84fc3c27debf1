"""
Pydantic schemas for the sandwich tracker API.

Re-exports all schemas for convenient importing.
"""

from __future__ import annotations

from .base import CamelModel, Pagination
from .collections import (
    CollectionListResponse,
    CollectionMappingStatsResponse,
    CollectionStatsResponse,
    HostMappingStat,
    SandwichCollectionCreate,
    SandwichCollectionResponse,
    SandwichCollectionUpdate,
)
from .directory import (
    ContactListResponse,
    DirectoryEntryCreate,
    DirectoryEntryResponse,
    DirectoryEntryUpdate,
    HostCreate,
    HostListResponse,
    HostResponse,
    HostUpdate,
    RecipientListResponse,
)
from .duplicates import (
    BatchDeleteRequest,
    BatchDeleteResponse,
    BatchEditRequest,
    BatchEditResponse,
    BulkDeleteResponse,
    CleanDuplicatesRequest,
    CleanDuplicatesResponse,
    DuplicateAnalysisResponse,
    DuplicateGroupResponse,
    OgMatchResponse,
)
from .imports import CsvUploadRequest, ImportResultResponse
from .messages import MessageCreate, MessageResponse, WeeklyReportCreate, WeeklyReportResponse
from .projects import DEFAULT_ASSIGNEE, ProjectClaim, ProjectCreate, ProjectResponse, ProjectUpdate

__all__ = [
    # Base
    "CamelModel",
    "Pagination",
    # Collections
    "CollectionListResponse",
    "CollectionMappingStatsResponse",
    "CollectionStatsResponse",
    "HostMappingStat",
    "SandwichCollectionCreate",
    "SandwichCollectionResponse",
    "SandwichCollectionUpdate",
    # Directory
    "ContactListResponse",
    "DirectoryEntryCreate",
    "DirectoryEntryResponse",
    "DirectoryEntryUpdate",
    "HostCreate",
    "HostListResponse",
    "HostResponse",
    "HostUpdate",
    "RecipientListResponse",
    # Duplicates
    "BatchDeleteRequest",
    "BatchDeleteResponse",
    "BatchEditRequest",
    "BatchEditResponse",
    "BulkDeleteResponse",
    "CleanDuplicatesRequest",
    "CleanDuplicatesResponse",
    "DuplicateAnalysisResponse",
    "DuplicateGroupResponse",
    "OgMatchResponse",
    # Imports
    "CsvUploadRequest",
    "ImportResultResponse",
    # Messages
    "MessageCreate",
    "MessageResponse",
    "WeeklyReportCreate",
    "WeeklyReportResponse",
    # Projects
    "DEFAULT_ASSIGNEE",
    "ProjectClaim",
    "ProjectCreate",
    "ProjectResponse",
    "ProjectUpdate",
]
