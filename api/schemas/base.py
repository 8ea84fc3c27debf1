"""
Shared schema base for the sandwich tracker API.

The web client speaks camelCase JSON; Python code uses snake_case field
names. Requests accept either spelling, responses are written in camelCase.
"""

from __future__ import annotations

import math
from dataclasses import asdict, is_dataclass
from typing import Any, Self

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_domain(cls, obj: Any) -> Self:
        """Build a schema from a domain dataclass."""
        data = asdict(obj) if is_dataclass(obj) and not isinstance(obj, type) else obj
        return cls.model_validate(data)


class Pagination(CamelModel):
    """Page metadata for list endpoints."""

    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> Pagination:
        total_pages = math.ceil(total / limit) if limit else 0
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )
