"""
Shared dependencies for the sandwich tracker API.

This module provides:
- PocketBase client management (one admin-authenticated client per process)
- Repository factories used as FastAPI dependencies (overridable in tests)
- The stats query cache and the chat message bus
"""

from __future__ import annotations

import asyncio
import logging
from functools import lru_cache

from fastapi import Depends, Request

from pocketbase import PocketBase
from sandwich.data import (
    CollectionRepository,
    ContactRepository,
    HostRepository,
    MessageRepository,
    ProjectRepository,
    RecipientRepository,
    WeeklyReportRepository,
)
from sandwich.duplicates import DuplicateReconciler, OgProjectMatcher
from sandwich.messaging import InMemoryMessageBus, MessageBus
from sandwich.query_cache import QueryCache

from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

# ========================================
# PocketBase Client
# ========================================

_settings = get_settings()
pb = PocketBase(_settings.pocketbase_url)


async def authenticate_pb() -> None:
    """Authenticate with PocketBase as admin."""
    settings = get_settings()
    try:
        await asyncio.to_thread(
            pb.collection("_superusers").auth_with_password,
            settings.pocketbase_admin_email,
            settings.pocketbase_admin_password,
        )
        logger.info("Successfully authenticated with PocketBase")
    except Exception as e:
        logger.error(f"Failed to authenticate with PocketBase: {e}")
        raise


def get_pb_client() -> PocketBase:
    """FastAPI dependency to get the authenticated PocketBase client."""
    return pb


# ========================================
# Repositories
# ========================================


def get_collection_repository(client: PocketBase = Depends(get_pb_client)) -> CollectionRepository:
    return CollectionRepository(client)


def get_host_repository(client: PocketBase = Depends(get_pb_client)) -> HostRepository:
    return HostRepository(client)


def get_contact_repository(client: PocketBase = Depends(get_pb_client)) -> ContactRepository:
    return ContactRepository(client)


def get_recipient_repository(client: PocketBase = Depends(get_pb_client)) -> RecipientRepository:
    return RecipientRepository(client)


def get_project_repository(client: PocketBase = Depends(get_pb_client)) -> ProjectRepository:
    return ProjectRepository(client)


def get_message_repository(client: PocketBase = Depends(get_pb_client)) -> MessageRepository:
    return MessageRepository(client)


def get_weekly_report_repository(client: PocketBase = Depends(get_pb_client)) -> WeeklyReportRepository:
    return WeeklyReportRepository(client)


def get_reconciler(
    repository: CollectionRepository = Depends(get_collection_repository),
    settings: Settings = Depends(get_settings),
) -> DuplicateReconciler:
    """Build a reconciler over the collection store for one request."""
    return DuplicateReconciler(
        repository,
        og_matcher=OgProjectMatcher(settings.og_host_name),
        max_errors=settings.max_reported_errors,
    )


# ========================================
# Caching and messaging
# ========================================


# Every cached collection query key starts with this prefix
COLLECTIONS_CACHE_PREFIX = "sandwich-collections"


@lru_cache
def get_query_cache() -> QueryCache:
    """Process-wide cache for aggregate collection queries."""
    return QueryCache(default_ttl_seconds=get_settings().stats_cache_ttl_seconds)


def invalidate_collection_queries(cache: QueryCache) -> None:
    """Drop cached collection aggregates after any collection write."""
    removed = cache.invalidate(COLLECTIONS_CACHE_PREFIX)
    if removed:
        logger.debug(f"Invalidated {removed} cached collection queries")


def get_message_bus(request: Request) -> MessageBus:
    """Message bus installed on the application at startup.

    Apps built without one (router-only test apps) get a bus with no
    subscribers, so publishing is a no-op.
    """
    bus = getattr(request.app.state, "message_bus", None)
    if bus is None:
        bus = InMemoryMessageBus()
        request.app.state.message_bus = bus
    return bus  # type: ignore[no-any-return]
