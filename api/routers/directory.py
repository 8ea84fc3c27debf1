"""
Directory Router - Hosts, contacts and recipients.

The three directories share the same list/create/update/delete shape;
contacts and recipients can also be bulk-loaded from CSV.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response

from sandwich.csv_import import decode_upload, directory_entry_from_row, import_rows, read_rows
from sandwich.data import ContactRepository, HostRepository, RecipientRepository
from sandwich.data.base_repository import PocketBaseRepository

from ..dependencies import get_contact_repository, get_host_repository, get_recipient_repository
from ..schemas import (
    ContactListResponse,
    CsvUploadRequest,
    DirectoryEntryCreate,
    DirectoryEntryResponse,
    DirectoryEntryUpdate,
    HostCreate,
    HostListResponse,
    HostResponse,
    HostUpdate,
    ImportResultResponse,
    Pagination,
    RecipientListResponse,
)
from ..settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["directory"])

DEFAULT_PAGE_SIZE = 20


async def _fetch_page(
    repository: PocketBaseRepository[Any], page: int, limit: int, label: str
) -> tuple[list[Any], int]:
    try:
        records = await asyncio.to_thread(repository.get_page, page, limit)
        total = await asyncio.to_thread(repository.count)
    except Exception as e:
        logger.error(f"Error fetching {label}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to fetch {label}")
    return records, total


async def _create(repository: PocketBaseRepository[Any], data: dict[str, Any], label: str) -> Any:
    try:
        return await asyncio.to_thread(repository.create, data)
    except Exception as e:
        logger.error(f"Failed to create {label}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to create {label}")


async def _update(repository: PocketBaseRepository[Any], record_id: int, data: dict[str, Any], label: str) -> Any:
    try:
        record = await asyncio.to_thread(repository.update, record_id, data)
    except Exception as e:
        logger.error(f"Failed to update {label} {record_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to update {label}")
    if record is None:
        raise HTTPException(status_code=404, detail=f"{label.capitalize()} not found")
    return record


async def _delete(repository: PocketBaseRepository[Any], record_id: int, label: str) -> Response:
    try:
        deleted = await asyncio.to_thread(repository.delete, record_id)
    except Exception as e:
        logger.error(f"Failed to delete {label} {record_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to delete {label}")
    if not deleted:
        raise HTTPException(status_code=404, detail=f"{label.capitalize()} not found")
    return Response(status_code=204)


async def _import_entries(
    repository: PocketBaseRepository[Any], upload: CsvUploadRequest, max_errors: int, label: str
) -> ImportResultResponse:
    try:
        content = decode_upload(upload.csv_data_base64)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Importing {label} from {upload.filename}")
    try:
        result = await asyncio.to_thread(
            import_rows, read_rows(content), directory_entry_from_row, repository.create, max_errors
        )
    except Exception as e:
        logger.error(f"{label.capitalize()} CSV import failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to import CSV file")
    return ImportResultResponse.from_result(result)


# ============================================================================
# Hosts
# ============================================================================


@router.get("/hosts", response_model=HostListResponse)
async def list_hosts(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=1000),
    repository: HostRepository = Depends(get_host_repository),
) -> HostListResponse:
    records, total = await _fetch_page(repository, page, limit, "hosts")
    return HostListResponse(
        hosts=[HostResponse.from_domain(record) for record in records],
        pagination=Pagination.build(page, limit, total),
    )


@router.post("/hosts", response_model=HostResponse, status_code=201)
async def create_host(body: HostCreate, repository: HostRepository = Depends(get_host_repository)) -> HostResponse:
    record = await _create(repository, body.model_dump(), "host")
    return HostResponse.from_domain(record)


@router.api_route("/hosts/{host_id}", methods=["PUT", "PATCH"], response_model=HostResponse)
async def update_host(
    host_id: Annotated[int, Path(description="Host ID")],
    body: HostUpdate,
    repository: HostRepository = Depends(get_host_repository),
) -> HostResponse:
    record = await _update(repository, host_id, body.model_dump(exclude_unset=True), "host")
    return HostResponse.from_domain(record)


@router.delete("/hosts/{host_id}", status_code=204)
async def delete_host(
    host_id: Annotated[int, Path(description="Host ID")],
    repository: HostRepository = Depends(get_host_repository),
) -> Response:
    return await _delete(repository, host_id, "host")


# ============================================================================
# Contacts
# ============================================================================


@router.get("/contacts", response_model=ContactListResponse)
async def list_contacts(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=1000),
    repository: ContactRepository = Depends(get_contact_repository),
) -> ContactListResponse:
    records, total = await _fetch_page(repository, page, limit, "contacts")
    return ContactListResponse(
        contacts=[DirectoryEntryResponse.from_domain(record) for record in records],
        pagination=Pagination.build(page, limit, total),
    )


@router.post("/contacts", response_model=DirectoryEntryResponse, status_code=201)
async def create_contact(
    body: DirectoryEntryCreate, repository: ContactRepository = Depends(get_contact_repository)
) -> DirectoryEntryResponse:
    record = await _create(repository, body.model_dump(), "contact")
    return DirectoryEntryResponse.from_domain(record)


@router.api_route("/contacts/{contact_id}", methods=["PUT", "PATCH"], response_model=DirectoryEntryResponse)
async def update_contact(
    contact_id: Annotated[int, Path(description="Contact ID")],
    body: DirectoryEntryUpdate,
    repository: ContactRepository = Depends(get_contact_repository),
) -> DirectoryEntryResponse:
    record = await _update(repository, contact_id, body.model_dump(exclude_unset=True), "contact")
    return DirectoryEntryResponse.from_domain(record)


@router.delete("/contacts/{contact_id}", status_code=204)
async def delete_contact(
    contact_id: Annotated[int, Path(description="Contact ID")],
    repository: ContactRepository = Depends(get_contact_repository),
) -> Response:
    return await _delete(repository, contact_id, "contact")


@router.post("/import-contacts", response_model=ImportResultResponse)
async def import_contacts(
    upload: CsvUploadRequest,
    repository: ContactRepository = Depends(get_contact_repository),
    settings: Settings = Depends(get_settings),
) -> ImportResultResponse:
    """Import contacts from a CSV upload; name and email are required per row."""
    return await _import_entries(repository, upload, settings.max_import_errors, "contacts")


# ============================================================================
# Recipients
# ============================================================================


@router.get("/recipients", response_model=RecipientListResponse)
async def list_recipients(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=1000),
    repository: RecipientRepository = Depends(get_recipient_repository),
) -> RecipientListResponse:
    records, total = await _fetch_page(repository, page, limit, "recipients")
    return RecipientListResponse(
        recipients=[DirectoryEntryResponse.from_domain(record) for record in records],
        pagination=Pagination.build(page, limit, total),
    )


@router.post("/recipients", response_model=DirectoryEntryResponse, status_code=201)
async def create_recipient(
    body: DirectoryEntryCreate, repository: RecipientRepository = Depends(get_recipient_repository)
) -> DirectoryEntryResponse:
    record = await _create(repository, body.model_dump(), "recipient")
    return DirectoryEntryResponse.from_domain(record)


@router.api_route("/recipients/{recipient_id}", methods=["PUT", "PATCH"], response_model=DirectoryEntryResponse)
async def update_recipient(
    recipient_id: Annotated[int, Path(description="Recipient ID")],
    body: DirectoryEntryUpdate,
    repository: RecipientRepository = Depends(get_recipient_repository),
) -> DirectoryEntryResponse:
    record = await _update(repository, recipient_id, body.model_dump(exclude_unset=True), "recipient")
    return DirectoryEntryResponse.from_domain(record)


@router.delete("/recipients/{recipient_id}", status_code=204)
async def delete_recipient(
    recipient_id: Annotated[int, Path(description="Recipient ID")],
    repository: RecipientRepository = Depends(get_recipient_repository),
) -> Response:
    return await _delete(repository, recipient_id, "recipient")


@router.post("/import-recipients", response_model=ImportResultResponse)
async def import_recipients(
    upload: CsvUploadRequest,
    repository: RecipientRepository = Depends(get_recipient_repository),
    settings: Settings = Depends(get_settings),
) -> ImportResultResponse:
    """Import recipients from a CSV upload; name and email are required per row."""
    return await _import_entries(repository, upload, settings.max_import_errors, "recipients")
