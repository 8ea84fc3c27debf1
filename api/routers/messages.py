"""
Messages Router - Team chat messages and weekly sandwich reports.

New chat messages are published on the application's message bus so that
connected clients can be notified without polling.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response

from sandwich.data import MessageRepository, WeeklyReportRepository
from sandwich.messaging import MessageBus

from ..dependencies import get_message_bus, get_message_repository, get_weekly_report_repository
from ..schemas import MessageCreate, MessageResponse, WeeklyReportCreate, WeeklyReportResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["messages"])

NEW_MESSAGE_EVENT = "new_message"


@router.get("/messages", response_model=list[MessageResponse])
async def list_messages(
    limit: int | None = Query(None, ge=1, description="Only the most recent messages"),
    chat_type: str | None = Query(None, alias="chatType", description="Chat to read"),
    committee: str | None = Query(None, description="Committee chat (used when chatType is absent)"),
    repository: MessageRepository = Depends(get_message_repository),
) -> list[MessageResponse]:
    """Messages for one chat, the most recent `limit`, or everything.

    Messages with blank content are never returned.
    """
    chat = chat_type or committee
    try:
        if chat:
            messages = await asyncio.to_thread(repository.get_by_committee, chat, limit)
        elif limit:
            messages = await asyncio.to_thread(repository.get_recent, limit)
        else:
            messages = await asyncio.to_thread(repository.get_all)
    except Exception as e:
        logger.error(f"Error fetching messages: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch messages")

    return [MessageResponse.from_domain(message) for message in messages if message.content and message.content.strip()]


@router.post("/messages", response_model=MessageResponse, status_code=201)
async def create_message(
    body: MessageCreate,
    repository: MessageRepository = Depends(get_message_repository),
    bus: MessageBus = Depends(get_message_bus),
) -> MessageResponse:
    try:
        message = await asyncio.to_thread(repository.create, body.model_dump())
    except Exception as e:
        logger.error(f"Failed to create message: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create message")

    response = MessageResponse.from_domain(message)
    try:
        await bus.publish({"type": NEW_MESSAGE_EVENT, "message": response.model_dump(by_alias=True)})
    except Exception as e:
        logger.warning(f"Failed to broadcast message {message.id}: {e}")
    return response


@router.delete("/messages/{message_id}", status_code=204)
async def delete_message(
    message_id: Annotated[int, Path(description="Message ID")],
    repository: MessageRepository = Depends(get_message_repository),
) -> Response:
    try:
        deleted = await asyncio.to_thread(repository.delete, message_id)
    except Exception as e:
        logger.error(f"Failed to delete message {message_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete message")

    if not deleted:
        raise HTTPException(status_code=404, detail="Message not found")
    return Response(status_code=204)


# ============================================================================
# Weekly reports
# ============================================================================


@router.get("/weekly-reports", response_model=list[WeeklyReportResponse])
async def list_weekly_reports(
    repository: WeeklyReportRepository = Depends(get_weekly_report_repository),
) -> list[WeeklyReportResponse]:
    try:
        reports = await asyncio.to_thread(repository.get_all)
    except Exception as e:
        logger.error(f"Error fetching weekly reports: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch weekly reports")

    return [WeeklyReportResponse.from_domain(report) for report in reports]


@router.post("/weekly-reports", response_model=WeeklyReportResponse, status_code=201)
async def create_weekly_report(
    body: WeeklyReportCreate,
    repository: WeeklyReportRepository = Depends(get_weekly_report_repository),
) -> WeeklyReportResponse:
    try:
        report = await asyncio.to_thread(repository.create, body.model_dump())
    except Exception as e:
        logger.error(f"Failed to create weekly report: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create weekly report")

    return WeeklyReportResponse.from_domain(report)
