"""Record builders and an in-memory store shared by the test suite."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sandwich.models import SandwichCollection

BASE_TIME = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


def make_collection(
    record_id: int,
    host_name: str | None = "Alpha",
    collection_date: str = "2025-03-01",
    individual_sandwiches: int = 100,
    group_collections: str = "[]",
    submitted_at: Any = None,
) -> SandwichCollection:
    """Build a collection record; submitted_at defaults to BASE_TIME."""
    return SandwichCollection(
        id=record_id,
        host_name=host_name,
        collection_date=collection_date,
        individual_sandwiches=individual_sandwiches,
        group_collections=group_collections,
        submitted_at=BASE_TIME if submitted_at is None else submitted_at,
    )


class FakeCollectionStore:
    """In-memory collection store.

    Ids listed in fail_on_delete / fail_on_update raise on that operation.
    Every delete attempt is recorded in delete_calls, in call order.
    """

    def __init__(self, records: list[SandwichCollection] | None = None) -> None:
        self.records: dict[int, SandwichCollection] = {}
        for record in records or []:
            self.records[record.id] = record
        self.fail_on_delete: set[int] = set()
        self.fail_on_update: set[int] = set()
        self.delete_calls: list[int] = []
        self.update_calls: list[int] = []

    def get_all(self) -> list[SandwichCollection]:
        return list(self.records.values())

    def delete(self, record_id: int) -> bool:
        self.delete_calls.append(record_id)
        if record_id in self.fail_on_delete:
            raise RuntimeError("store unavailable")
        return self.records.pop(record_id, None) is not None

    def update(self, record_id: int, fields: dict[str, Any]) -> SandwichCollection | None:
        self.update_calls.append(record_id)
        if record_id in self.fail_on_update:
            raise RuntimeError("store unavailable")
        record = self.records.get(record_id)
        if record is None:
            return None
        for key, value in fields.items():
            setattr(record, key, value)
        return record
