"""
Pydantic schemas for the host, contact and recipient directories.
"""

from __future__ import annotations

from pydantic import Field

from .base import CamelModel, Pagination


class HostCreate(CamelModel):
    name: str = Field(..., min_length=1)
    address: str | None = None
    email: str | None = None
    phone: str | None = None
    status: str = "active"
    notes: str | None = None


class HostUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1)
    address: str | None = None
    email: str | None = None
    phone: str | None = None
    status: str | None = None
    notes: str | None = None


class HostResponse(CamelModel):
    id: int
    name: str
    address: str | None = None
    email: str | None = None
    phone: str | None = None
    status: str
    notes: str | None = None


class HostListResponse(CamelModel):
    hosts: list[HostResponse]
    pagination: Pagination


class DirectoryEntryCreate(CamelModel):
    """Request model for a contact or recipient."""

    name: str = Field(..., min_length=1)
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None


class DirectoryEntryUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1)
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None


class DirectoryEntryResponse(CamelModel):
    id: int
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None


class ContactListResponse(CamelModel):
    contacts: list[DirectoryEntryResponse]
    pagination: Pagination


class RecipientListResponse(CamelModel):
    recipients: list[DirectoryEntryResponse]
    pagination: Pagination
