"""
Duplicates Router - Duplicate analysis and cleanup for sandwich collections.

These routes share the /api/sandwich-collections prefix with the collection
CRUD routes, so this router must be included before the collections router
for the fixed paths to win over /{collection_id}.
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException

from sandwich.duplicates import CleanMode, DuplicateReconciler
from sandwich.query_cache import QueryCache

from ..dependencies import get_query_cache, get_reconciler, invalidate_collection_queries
from ..schemas import (
    BatchDeleteRequest,
    BatchDeleteResponse,
    BatchEditRequest,
    BatchEditResponse,
    BulkDeleteResponse,
    CleanDuplicatesRequest,
    CleanDuplicatesResponse,
    DuplicateAnalysisResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sandwich-collections", tags=["duplicates"])


@router.get("/analyze-duplicates", response_model=DuplicateAnalysisResponse)
async def analyze_duplicates(
    reconciler: DuplicateReconciler = Depends(get_reconciler),
) -> DuplicateAnalysisResponse:
    """Report exact duplicates, suspicious host names and OG Project matches.

    Read-only; nothing is deleted.
    """
    try:
        report = await asyncio.to_thread(reconciler.analyze)
    except Exception as e:
        logger.error(f"Error analyzing duplicates: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to analyze duplicates")

    return DuplicateAnalysisResponse.from_report(report)


@router.delete("/clean-duplicates", response_model=CleanDuplicatesResponse, response_model_exclude_none=True)
async def clean_duplicates(
    request: CleanDuplicatesRequest | None = None,
    reconciler: DuplicateReconciler = Depends(get_reconciler),
    cache: QueryCache = Depends(get_query_cache),
) -> CleanDuplicatesResponse:
    """Delete duplicate collections.

    "exact" keeps the newest entry of every duplicate group; "suspicious"
    removes entries whose host name looks like a placeholder or test row.
    """
    mode = CleanMode((request or CleanDuplicatesRequest()).mode)
    try:
        result = await asyncio.to_thread(reconciler.clean, mode)
    except Exception as e:
        logger.error(f"Error cleaning duplicates: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to clean duplicate entries")
    finally:
        invalidate_collection_queries(cache)

    return CleanDuplicatesResponse(
        message=f"Successfully cleaned {result.deleted_count} duplicate entries using {mode.value} mode",
        deleted_count=result.deleted_count,
        total_found=result.total_found,
        errors=result.outcome.error_messages(reconciler.max_errors),
        mode=mode.value,
    )


@router.delete("/bulk", response_model=BulkDeleteResponse)
async def bulk_delete(
    reconciler: DuplicateReconciler = Depends(get_reconciler),
    cache: QueryCache = Depends(get_query_cache),
) -> BulkDeleteResponse:
    """Delete leftover rows from the early spreadsheet import."""
    try:
        outcome = await asyncio.to_thread(reconciler.bulk_delete)
    except Exception as e:
        logger.error(f"Error bulk deleting collections: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete duplicate entries")
    finally:
        invalidate_collection_queries(cache)

    return BulkDeleteResponse(
        message=f"Successfully deleted {outcome.success_count} duplicate entries",
        deleted_count=outcome.success_count,
        patterns=list(reconciler.bulk_pattern.labels),
    )


@router.delete("/batch-delete", response_model=BatchDeleteResponse, response_model_exclude_none=True)
async def batch_delete(
    request: BatchDeleteRequest,
    reconciler: DuplicateReconciler = Depends(get_reconciler),
    cache: QueryCache = Depends(get_query_cache),
) -> BatchDeleteResponse:
    """Delete the given collection ids; a missing id is reported as an error."""
    total = len(request.ids)
    try:
        outcome = await asyncio.to_thread(reconciler.batch_delete, request.ids)
    except Exception as e:
        logger.error(f"Error batch deleting collections: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to batch delete collections")
    finally:
        invalidate_collection_queries(cache)

    return BatchDeleteResponse(
        message=f"Successfully deleted {outcome.success_count} of {total} collections",
        deleted_count=outcome.success_count,
        total_requested=total,
        errors=outcome.error_messages(reconciler.max_errors),
    )


@router.patch("/batch-edit", response_model=BatchEditResponse, response_model_exclude_none=True)
async def batch_edit(
    request: BatchEditRequest,
    reconciler: DuplicateReconciler = Depends(get_reconciler),
    cache: QueryCache = Depends(get_query_cache),
) -> BatchEditResponse:
    """Apply the same field updates to every given collection id."""
    total = len(request.ids)
    try:
        outcome = await asyncio.to_thread(reconciler.batch_edit, request.ids, request.updates.changes())
    except Exception as e:
        logger.error(f"Error batch editing collections: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to batch edit collections")
    finally:
        invalidate_collection_queries(cache)

    return BatchEditResponse(
        message=f"Successfully updated {outcome.success_count} of {total} collections",
        updated_count=outcome.success_count,
        total_requested=total,
        errors=outcome.error_messages(reconciler.max_errors),
    )
