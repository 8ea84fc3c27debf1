"""Shared PocketBase data access for the tracker's record types.

Each PocketBase collection carries a numeric legacy_id field holding the
integer id the API exposes; the PocketBase record id stays internal."""

from __future__ import annotations

import logging
import threading
from dataclasses import MISSING, fields
from datetime import UTC, datetime
from typing import Any, ClassVar, Generic, TypeVar

from pocketbase import PocketBase
from pocketbase.client import ClientResponseError  # type: ignore[attr-defined]

from ..logging_config import TRACE

logger = logging.getLogger(__name__)

T = TypeVar("T")

ID_FIELD = "legacy_id"

# Inserts tried before a rejected legacy_id is reported to the caller
CREATE_ATTEMPTS = 3

_create_locks: dict[str, threading.Lock] = {}
_create_locks_guard = threading.Lock()


def utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


def _create_lock(collection_name: str) -> threading.Lock:
    with _create_locks_guard:
        return _create_locks.setdefault(collection_name, threading.Lock())


def quote_filter_value(value: str) -> str:
    """Quote a string for use inside a PocketBase filter expression."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class PocketBaseRepository(Generic[T]):
    """Repository mapping one PocketBase collection onto a dataclass.

    Lookups that find nothing return None/False. Every other store error
    propagates so callers can decide whether to isolate or surface it.
    """

    collection_name: ClassVar[str]
    model: ClassVar[type]

    def __init__(self, pb_client: PocketBase) -> None:
        """Initialize repository with PocketBase client.

        Args:
            pb_client: PocketBase client instance
        """
        self.pb = pb_client

    def _collection(self) -> Any:
        return self.pb.collection(self.collection_name)

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def _from_record(self, record: Any) -> T:
        values: dict[str, Any] = {"id": int(getattr(record, ID_FIELD, 0) or 0)}
        for model_field in fields(self.model):
            if model_field.name == "id":
                continue
            if model_field.default is not MISSING:
                default = model_field.default
            else:
                default = None
            value = getattr(record, model_field.name, default)
            values[model_field.name] = default if value is None else value
        return self.model(**values)  # type: ignore[no-any-return]

    def _to_record(self, data: dict[str, Any]) -> dict[str, Any]:
        """Keep only the writable model fields."""
        writable = {model_field.name for model_field in fields(self.model)} - {"id"}
        return {key: value for key, value in data.items() if key in writable}

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_all(self) -> list[T]:
        """Load every record in the collection, ordered by id."""
        records = self._collection().get_full_list(query_params={"sort": ID_FIELD})
        return [self._from_record(record) for record in records]

    def get_page(self, page: int, limit: int) -> list[T]:
        result = self._collection().get_list(page, limit, query_params={"sort": ID_FIELD})
        return [self._from_record(record) for record in result.items]

    def count(self) -> int:
        result = self._collection().get_list(1, 1)
        return int(result.total_items)

    def get_by_id(self, record_id: int) -> T | None:
        record = self._find(record_id)
        return self._from_record(record) if record is not None else None

    def _find(self, record_id: int) -> Any | None:
        try:
            return self._collection().get_first_list_item(f"{ID_FIELD} = {int(record_id)}")
        except ClientResponseError as e:
            if e.status == 404:
                return None
            raise

    def _next_id(self) -> int:
        result = self._collection().get_list(1, 1, query_params={"sort": f"-{ID_FIELD}"})
        if not result.items:
            return 1
        return int(getattr(result.items[0], ID_FIELD, 0) or 0) + 1

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, data: dict[str, Any]) -> T:
        """Insert a record under the next free legacy_id.

        Id allocation and insert run under a per-collection lock. A 400 from
        PocketBase (the unique index on legacy_id rejecting an id another
        process took first) is retried with a fresh id.
        """
        payload = self._to_record(data)
        with _create_lock(self.collection_name):
            attempt = 1
            while True:
                payload[ID_FIELD] = self._next_id()
                logger.log(TRACE, f"Creating {self.collection_name} record: {payload}")
                try:
                    record = self._collection().create(payload)
                except ClientResponseError as e:
                    if e.status != 400 or attempt == CREATE_ATTEMPTS:
                        raise
                    logger.warning(
                        f"{self.collection_name} insert with {ID_FIELD}={payload[ID_FIELD]} rejected "
                        f"(attempt {attempt}/{CREATE_ATTEMPTS}), retrying with a fresh id"
                    )
                    attempt += 1
                    continue
                return self._from_record(record)

    def update(self, record_id: int, data: dict[str, Any]) -> T | None:
        """Update a record; returns None when no record has this id."""
        record = self._find(record_id)
        if record is None:
            return None

        payload = self._to_record(data)
        logger.log(TRACE, f"Updating {self.collection_name} {record_id}: {payload}")
        updated = self._collection().update(record.id, payload)
        return self._from_record(updated)

    def delete(self, record_id: int) -> bool:
        """Delete a record; returns False when no record has this id."""
        record = self._find(record_id)
        if record is None:
            return False

        try:
            self._collection().delete(record.id)
        except ClientResponseError as e:
            if e.status == 404:
                return False
            raise
        return True
