"""
Collections Router - Sandwich collection records, statistics and CSV import.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response

from sandwich.csv_import import collection_from_row, decode_upload, import_rows, parse_collection_rows
from sandwich.data import CollectionRepository, HostRepository
from sandwich.query_cache import QueryCache

from ..dependencies import (
    COLLECTIONS_CACHE_PREFIX,
    get_collection_repository,
    get_host_repository,
    get_query_cache,
    invalidate_collection_queries,
)
from ..schemas import (
    CollectionListResponse,
    CollectionMappingStatsResponse,
    CollectionStatsResponse,
    CsvUploadRequest,
    HostMappingStat,
    ImportResultResponse,
    Pagination,
    SandwichCollectionCreate,
    SandwichCollectionResponse,
    SandwichCollectionUpdate,
)
from ..services.collection_stats import calculate_totals, host_mapping_counts, summarize_mapping
from ..settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["collections"])

STATS_CACHE_KEY = f"{COLLECTIONS_CACHE_PREFIX}-stats"


# ============================================================================
# Collection listing and statistics
# ============================================================================


@router.get("/sandwich-collections", response_model=CollectionListResponse)
async def list_collections(
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    limit: int = Query(50, ge=1, le=1000, description="Records per page"),
    repository: CollectionRepository = Depends(get_collection_repository),
) -> CollectionListResponse:
    """List collections one page at a time, ordered by id."""
    try:
        records = await asyncio.to_thread(repository.get_page, page, limit)
        total = await asyncio.to_thread(repository.count)
    except Exception as e:
        logger.error(f"Error fetching sandwich collections: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch sandwich collections")

    return CollectionListResponse(
        collections=[SandwichCollectionResponse.from_domain(record) for record in records],
        pagination=Pagination.build(page, limit, total),
    )


@router.get("/sandwich-collections/stats", response_model=CollectionStatsResponse)
async def get_collection_stats(
    repository: CollectionRepository = Depends(get_collection_repository),
    cache: QueryCache = Depends(get_query_cache),
) -> CollectionStatsResponse:
    """Complete totals including individual and group collections.

    Cached; every collection write invalidates the cached value.
    """

    def load() -> CollectionStatsResponse:
        totals = calculate_totals(repository.get_all())
        return CollectionStatsResponse(
            total_entries=totals.total_entries,
            individual_sandwiches=totals.individual_sandwiches,
            group_sandwiches=totals.group_sandwiches,
            complete_total_sandwiches=totals.complete_total_sandwiches,
        )

    try:
        return await asyncio.to_thread(cache.get_or_compute, STATS_CACHE_KEY, load)
    except Exception as e:
        logger.error(f"Error fetching sandwich collection stats: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch sandwich collection stats")


@router.get("/collections-by-host/{host_name}", response_model=list[SandwichCollectionResponse])
async def get_collections_by_host(
    host_name: Annotated[str, Path(description="Host name (case-insensitive)")],
    repository: CollectionRepository = Depends(get_collection_repository),
) -> list[SandwichCollectionResponse]:
    try:
        records = await asyncio.to_thread(repository.get_by_host, host_name)
    except Exception as e:
        logger.error(f"Error fetching collections for host {host_name}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch collections for host")

    return [SandwichCollectionResponse.from_domain(record) for record in records]


@router.get("/collection-stats", response_model=CollectionMappingStatsResponse)
async def get_mapping_stats(
    repository: CollectionRepository = Depends(get_collection_repository),
    hosts: HostRepository = Depends(get_host_repository),
) -> CollectionMappingStatsResponse:
    """How many collections can be attributed to a known host."""
    try:
        records = await asyncio.to_thread(repository.get_all)
        known_hosts = await asyncio.to_thread(hosts.get_names)
    except Exception as e:
        logger.error(f"Error fetching collection mapping stats: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch collection statistics")

    summary = summarize_mapping(records, known_hosts)
    return CollectionMappingStatsResponse(
        total_records=summary.total_records,
        processed_records=summary.processed_records,
        mapped_records=summary.mapped_records,
        unmapped_records=summary.unmapped_records,
    )


@router.get("/host-mapping-stats", response_model=list[HostMappingStat])
async def get_host_mapping_stats(
    repository: CollectionRepository = Depends(get_collection_repository),
    hosts: HostRepository = Depends(get_host_repository),
) -> list[HostMappingStat]:
    """Collection count per host name, most frequent first."""
    try:
        records = await asyncio.to_thread(repository.get_all)
        known_hosts = await asyncio.to_thread(hosts.get_names)
    except Exception as e:
        logger.error(f"Error fetching host mapping stats: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch host mapping statistics")

    return [
        HostMappingStat(host_name=item.host_name, count=item.count, mapped=item.mapped)
        for item in host_mapping_counts(records, known_hosts)
    ]


# ============================================================================
# Single-record writes
# ============================================================================


@router.post("/sandwich-collections", response_model=SandwichCollectionResponse, status_code=201)
async def create_collection(
    body: SandwichCollectionCreate,
    repository: CollectionRepository = Depends(get_collection_repository),
    cache: QueryCache = Depends(get_query_cache),
) -> SandwichCollectionResponse:
    try:
        record = await asyncio.to_thread(repository.create, body.model_dump())
    except Exception as e:
        logger.error(f"Failed to create sandwich collection: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create collection")

    invalidate_collection_queries(cache)
    logger.info(f"Created collection {record.id} for {record.host_name}")
    return SandwichCollectionResponse.from_domain(record)


@router.api_route(
    "/sandwich-collections/{collection_id}",
    methods=["PUT", "PATCH"],
    response_model=SandwichCollectionResponse,
)
async def update_collection(
    collection_id: Annotated[int, Path(description="Collection ID")],
    body: SandwichCollectionUpdate,
    repository: CollectionRepository = Depends(get_collection_repository),
    cache: QueryCache = Depends(get_query_cache),
) -> SandwichCollectionResponse:
    """Apply the fields present in the body to one collection."""
    try:
        record = await asyncio.to_thread(repository.update, collection_id, body.changes())
    except Exception as e:
        logger.error(f"Failed to update sandwich collection {collection_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update collection")

    if record is None:
        raise HTTPException(status_code=404, detail="Collection not found")

    invalidate_collection_queries(cache)
    return SandwichCollectionResponse.from_domain(record)


@router.delete("/sandwich-collections/{collection_id}", status_code=204)
async def delete_collection(
    collection_id: Annotated[int, Path(description="Collection ID")],
    repository: CollectionRepository = Depends(get_collection_repository),
    cache: QueryCache = Depends(get_query_cache),
) -> Response:
    try:
        deleted = await asyncio.to_thread(repository.delete, collection_id)
    except Exception as e:
        logger.error(f"Failed to delete sandwich collection {collection_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete collection")

    if not deleted:
        raise HTTPException(status_code=404, detail="Collection not found")

    invalidate_collection_queries(cache)
    return Response(status_code=204)


# ============================================================================
# CSV import
# ============================================================================


@router.post("/import-collections", response_model=ImportResultResponse)
async def import_collections(
    upload: CsvUploadRequest,
    repository: CollectionRepository = Depends(get_collection_repository),
    cache: QueryCache = Depends(get_query_cache),
    settings: Settings = Depends(get_settings),
) -> ImportResultResponse:
    """Import collections from a CSV upload.

    Complex weekly-total sheets, structured weekly sheets and plain
    per-host sheets are all accepted; each row is imported independently.
    """
    try:
        content = decode_upload(upload.csv_data_base64)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Importing collections from {upload.filename}")
    now = datetime.now(UTC)
    try:
        _, rows = parse_collection_rows(content, now)
        result = await asyncio.to_thread(
            import_rows,
            rows,
            lambda row, row_number: collection_from_row(row, row_number, now),
            repository.create,
            settings.max_import_errors,
        )
    except Exception as e:
        logger.error(f"CSV import failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to import CSV file")
    finally:
        invalidate_collection_queries(cache)

    return ImportResultResponse.from_result(result)
