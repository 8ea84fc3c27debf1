"""Collection repository for data access.

Handles all PocketBase operations on SandwichCollection records."""

from __future__ import annotations

import logging
from typing import Any

from ..models import SandwichCollection
from .base_repository import PocketBaseRepository, utc_now_iso

logger = logging.getLogger(__name__)


class CollectionRepository(PocketBaseRepository[SandwichCollection]):
    """Repository for sandwich collection records"""

    collection_name = "sandwich_collections"
    model = SandwichCollection

    def create(self, data: dict[str, Any]) -> SandwichCollection:
        payload = dict(data)
        submitted_at = payload.get("submitted_at")
        if not submitted_at:
            payload["submitted_at"] = utc_now_iso()
        elif not isinstance(submitted_at, str):
            payload["submitted_at"] = submitted_at.isoformat()
        if not payload.get("group_collections"):
            payload["group_collections"] = "[]"
        return super().create(payload)

    def get_by_host(self, host_name: str) -> list[SandwichCollection]:
        """Collections whose host name matches, ignoring case."""
        wanted = host_name.lower()
        return [record for record in self.get_all() if (record.host_name or "").lower() == wanted]
