"""
Pydantic schemas for volunteer project endpoints.
"""

from __future__ import annotations

from pydantic import Field

from .base import CamelModel

DEFAULT_ASSIGNEE = "You"


class ProjectCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: str | None = None
    status: str = "available"
    priority: str = "medium"
    category: str | None = None
    assignee_name: str | None = None
    due_date: str | None = None


class ProjectUpdate(CamelModel):
    """Partial project update.

    Timestamps are managed server side; createdAt/updatedAt in a request
    body are not fields here and are dropped.
    """

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    category: str | None = None
    assignee_name: str | None = None
    due_date: str | None = None


class ProjectClaim(CamelModel):
    assignee_name: str | None = None


class ProjectResponse(CamelModel):
    id: int
    title: str
    description: str | None = None
    status: str
    priority: str
    category: str | None = None
    assignee_name: str | None = None
    due_date: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
