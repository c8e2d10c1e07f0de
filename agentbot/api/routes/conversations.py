"""Conversation transcript routes."""

from datetime import datetime

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query

from ...app import Application
from .schemas import ActivityModel


class TranscriptEntryResponse(BaseModel):
    """One recorded activity and whether it came in or went out."""

    direction: str
    activity: ActivityModel


def create_conversations_router(app: Application) -> APIRouter:
    """Create conversations router."""
    router = APIRouter(prefix="/api/conversations", tags=["conversations"])

    @router.get(
        "/{conversation_id}/activities",
        response_model=list[TranscriptEntryResponse],
    )
    async def get_activities(
        conversation_id: str,
        after: str | None = Query(None, description="ISO timestamp filter"),
    ) -> list[dict]:
        """Transcript of a conversation, proactive messages included."""
        after_dt = None
        if after:
            try:
                after_dt = datetime.fromisoformat(after)
            except ValueError:
                raise HTTPException(
                    status_code=400, detail="Invalid after timestamp format"
                )

        try:
            entries = await app.storage.get_activities(conversation_id, after=after_dt)
            return [
                {"direction": e.direction, "activity": e.activity.to_dict()}
                for e in entries
            ]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
