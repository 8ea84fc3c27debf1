"""
Pydantic schemas for team chat and weekly report endpoints.
"""

from __future__ import annotations

from pydantic import Field, field_validator

from .base import CamelModel


class MessageCreate(CamelModel):
    """Request model for posting a chat message."""

    content: str
    sender: str | None = None
    user_id: str | None = None
    committee: str = "general"
    conversation_id: int | None = None

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message content is required")
        return v


class MessageResponse(CamelModel):
    id: int
    content: str
    sender: str | None = None
    user_id: str | None = None
    committee: str
    conversation_id: int | None = None
    timestamp: str | None = None


class WeeklyReportCreate(CamelModel):
    week_ending: str = Field(..., min_length=1)
    sandwich_count: int = Field(default=0, ge=0)
    notes: str | None = None
    submitted_by: str | None = None


class WeeklyReportResponse(CamelModel):
    id: int
    week_ending: str
    sandwich_count: int
    notes: str | None = None
    submitted_by: str | None = None
    submitted_at: str | None = None
