#!/usr/bin/env python3
"""
Sandwich API - backend for the volunteer sandwich collection tracker.

Serves collection records and totals, duplicate analysis and cleanup, the
host/contact/recipient directories, volunteer projects, team chat and
weekly reports.

Run locally with:
    uvicorn api.main:app --reload
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sandwich.logging_config import configure_logging, get_logger
from sandwich.messaging import InMemoryMessageBus

from .dependencies import authenticate_pb
from .errors import register_exception_handlers
from .settings import get_settings

# 2026-01-06T14:05:52Z [api] LEVEL message
configure_logging(source="api")
logger = get_logger(__name__)

SERVICE_NAME = "sandwich-api"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log in to PocketBase and install the chat message bus."""
    if get_settings().skip_pb_auth:
        logger.warning("SKIP_PB_AUTH is set; PocketBase requests will be unauthenticated")
    else:
        await authenticate_pb()

    bus = InMemoryMessageBus()
    app.state.message_bus = bus
    logger.info("Sandwich API started")

    yield

    logger.info(f"Sandwich API stopping ({bus.subscriber_count} chat subscribers attached)")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Sandwich API",
        description="Sandwich collection tracking and duplicate cleanup",
        lifespan=lifespan,
    )
    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    from .routers import collections, directory, duplicates, messages, projects

    # duplicates owns fixed paths under /api/sandwich-collections; it must
    # be matched before the /{collection_id} routes in collections
    for module in (duplicates, collections, directory, projects, messages):
        app.include_router(module.router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "service": SERVICE_NAME}

    return app


app = create_app()
