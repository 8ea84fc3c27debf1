"""Result collector for sequential per-record store operations."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_ERROR_LIMIT = 5


@dataclass
class BatchResult:
    """Outcome of a batch where every record is processed independently.

    succeeded holds ids the store confirmed, skipped holds ids the store
    reported as missing when that is not an error for the caller, and
    failed holds (id, message) pairs.
    """

    succeeded: list[int] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)
    failed: list[tuple[int, str]] = field(default_factory=list)

    def record_success(self, record_id: int) -> None:
        self.succeeded.append(record_id)

    def record_skip(self, record_id: int) -> None:
        self.skipped.append(record_id)

    def record_failure(self, record_id: int, message: str) -> None:
        self.failed.append((record_id, message))

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    def error_messages(self, limit: int = DEFAULT_ERROR_LIMIT) -> list[str] | None:
        """First `limit` failure messages, or None when nothing failed."""
        if not self.failed:
            return None
        return [message for _, message in self.failed[:limit]]
