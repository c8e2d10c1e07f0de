"""Messaging API routes."""

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import Application
from .schemas import ActivityModel


class MessageResponse(BaseModel):
    """Replies produced by one turn."""

    activities: list[ActivityModel]


def create_messaging_router(app: Application) -> APIRouter:
    """Create messaging router."""
    router = APIRouter(prefix="/api", tags=["messaging"])

    @router.post("/messages", response_model=MessageResponse)
    async def post_activity(request: ActivityModel) -> dict:
        """Run an inbound activity through the bot and return its replies."""
        try:
            sent = await app.process_activity(request.to_activity())
            return {"activities": [a.to_dict() for a in sent]}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
