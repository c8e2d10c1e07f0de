"""Trace event routes.

Every conversation-scoped trace (turn_processed, intent_recognized,
dialog_started, conversation_resumed, conversation_continued,
correlation_dropped) carries a conversation_id in its data.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query

from ...app import Application


class TraceEventResponse(BaseModel):
    """One tracked bot event, newest first in listings."""

    id: str
    event_type: str
    actor: str
    data: dict[str, Any]
    timestamp: datetime


def _parse_after(after: str | None) -> datetime | None:
    if not after:
        return None
    try:
        return datetime.fromisoformat(after)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid after timestamp format")


def create_observability_router(app: Application) -> APIRouter:
    """Create trace event router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    async def _list(
        after: str | None,
        limit: int,
        event_type: list[str] | None,
        actor: str | None,
        conversation_id: str | None,
    ) -> list[TraceEventResponse]:
        events = await app.storage.get_trace_events(
            after=_parse_after(after),
            event_types=event_type,
            actor=actor,
            conversation_id=conversation_id,
            limit=limit,
        )
        return [
            TraceEventResponse(
                id=e.id,
                event_type=e.event_type,
                actor=e.actor,
                data=e.data,
                timestamp=e.timestamp,
            )
            for e in events
        ]

    @router.get("/trace-events", response_model=list[TraceEventResponse])
    async def get_trace_events(
        after: str | None = Query(None, description="ISO timestamp filter"),
        limit: int = Query(100, ge=1, le=1000),
        event_type: list[str] | None = Query(None, description="e.g. intent_recognized"),
        actor: str | None = Query(
            None, description="adapter, agent_bot, conversation_resumer, event_bus, sim"
        ),
        conversation_id: str | None = Query(None),
    ) -> list[TraceEventResponse]:
        return await _list(after, limit, event_type, actor, conversation_id)

    @router.get(
        "/conversations/{conversation_id}/trace-events",
        response_model=list[TraceEventResponse],
    )
    async def get_conversation_trace(
        conversation_id: str,
        after: str | None = Query(None),
        limit: int = Query(100, ge=1, le=1000),
        event_type: list[str] | None = Query(None),
    ) -> list[TraceEventResponse]:
        """What the bot did in one conversation: turns, intents, dialogs, resumptions."""
        return await _list(after, limit, event_type, None, conversation_id)

    return router
