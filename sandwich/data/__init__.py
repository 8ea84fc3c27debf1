"""PocketBase data repositories.

Provides the database access layer for all entities."""

from __future__ import annotations

from .base_repository import PocketBaseRepository
from .collection_repository import CollectionRepository
from .directory_repository import ContactRepository, HostRepository, RecipientRepository
from .message_repository import MessageRepository, WeeklyReportRepository
from .project_repository import ProjectRepository

__all__ = [
    "CollectionRepository",
    "ContactRepository",
    "HostRepository",
    "MessageRepository",
    "PocketBaseRepository",
    "ProjectRepository",
    "RecipientRepository",
    "WeeklyReportRepository",
]
