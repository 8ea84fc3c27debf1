"""Repositories for team chat messages and weekly reports."""

from __future__ import annotations

from typing import Any

from ..models import Message, WeeklyReport
from .base_repository import ID_FIELD, PocketBaseRepository, quote_filter_value, utc_now_iso


class MessageRepository(PocketBaseRepository[Message]):
    """Repository for chat messages"""

    collection_name = "messages"
    model = Message

    def create(self, data: dict[str, Any]) -> Message:
        payload = dict(data)
        payload.setdefault("timestamp", utc_now_iso())
        return super().create(payload)

    def get_by_committee(self, committee: str, limit: int | None = None) -> list[Message]:
        """Messages for one chat type, oldest first.

        With a limit, only the most recent `limit` messages are returned.
        """
        query_params = {"filter": f"committee = {quote_filter_value(committee)}", "sort": f"-{ID_FIELD}"}
        if limit:
            result = self._collection().get_list(1, limit, query_params=query_params)
            records = result.items
        else:
            records = self._collection().get_full_list(query_params=query_params)
        return list(reversed([self._from_record(record) for record in records]))

    def get_recent(self, limit: int) -> list[Message]:
        """The most recent `limit` messages across all chats, oldest first."""
        result = self._collection().get_list(1, limit, query_params={"sort": f"-{ID_FIELD}"})
        return list(reversed([self._from_record(record) for record in result.items]))


class WeeklyReportRepository(PocketBaseRepository[WeeklyReport]):
    """Repository for weekly sandwich reports"""

    collection_name = "weekly_reports"
    model = WeeklyReport

    def create(self, data: dict[str, Any]) -> WeeklyReport:
        payload = dict(data)
        payload.setdefault("submitted_at", utc_now_iso())
        return super().create(payload)
