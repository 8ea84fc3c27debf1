"""Project repository for data access."""

from __future__ import annotations

from typing import Any

from ..models import Project
from .base_repository import PocketBaseRepository, utc_now_iso

# Managed by the repository, never by callers
_TIMESTAMP_FIELDS = ("created_at", "updated_at")


class ProjectRepository(PocketBaseRepository[Project]):
    """Repository for volunteer projects"""

    collection_name = "projects"
    model = Project

    def create(self, data: dict[str, Any]) -> Project:
        now = utc_now_iso()
        payload = {key: value for key, value in data.items() if key not in _TIMESTAMP_FIELDS}
        payload.update(created_at=now, updated_at=now)
        return super().create(payload)

    def update(self, record_id: int, data: dict[str, Any]) -> Project | None:
        payload = {key: value for key, value in data.items() if key not in _TIMESTAMP_FIELDS}
        payload["updated_at"] = utc_now_iso()
        return super().update(record_id, payload)

    def claim(self, record_id: int, assignee_name: str) -> Project | None:
        """Mark a project in progress for the given assignee."""
        return self.update(record_id, {"status": "in_progress", "assignee_name": assignee_name})
