"""Service event ingestion routes."""

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import Application
from ...errors import MalformedPayloadError
from ...models import ServiceEvent


class EventRequest(BaseModel):
    """A service event observed outside the bot."""

    kind: str
    correlation_id: str


class EventResponse(BaseModel):
    status: str
    pending_subscriptions: int


def create_events_router(app: Application) -> APIRouter:
    """Create events router."""
    router = APIRouter(prefix="/api", tags=["events"])

    @router.post("/events", response_model=EventResponse)
    async def publish_event(request: EventRequest) -> dict:
        """Publish an event onto the bus."""
        try:
            event = ServiceEvent.from_dict(
                {"kind": request.kind, "correlationId": request.correlation_id}
            )
        except MalformedPayloadError as e:
            raise HTTPException(status_code=400, detail=str(e))

        try:
            await app.event_bus.publish(event)
            return {
                "status": "ok",
                "pending_subscriptions": app.event_bus.pending_subscriptions(),
            }
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
