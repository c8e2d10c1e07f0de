"""Agent-side routes: the remote party finishing a connection."""

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import Application
from ...errors import ExternalServiceError
from ...models import ConnectionRecord


class CompleteConnectionRequest(BaseModel):
    their_label: str | None = None


class ConnectionResponse(BaseModel):
    """Connection record after completion."""

    id: str
    status: str
    alias: str | None = None
    their_label: str | None = None


def _record_to_dict(record: ConnectionRecord) -> dict:
    return {
        "id": record.id,
        "status": record.status.value,
        "alias": record.alias,
        "their_label": record.their_label,
    }


def create_agents_router(app: Application) -> APIRouter:
    """Create agents router."""
    router = APIRouter(prefix="/api/agents", tags=["agents"])

    @router.get("/{agent_id}/connections", response_model=list[ConnectionResponse])
    async def list_connections(agent_id: str) -> list[dict]:
        """Connection records held by an agent."""
        try:
            context = await app.context_provider.get_context(agent_id)
            records = await app.connections.list_connections(context)
        except ExternalServiceError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        return [_record_to_dict(r) for r in records]

    @router.post(
        "/{agent_id}/connections/{connection_id}/complete",
        response_model=ConnectionResponse,
    )
    async def complete_connection(
        agent_id: str,
        connection_id: str,
        request: CompleteConnectionRequest | None = None,
    ) -> dict:
        """Mark a connection as connected and publish the matching event."""
        their_label = request.their_label if request else None
        try:
            record = await app.connections.complete_connection(
                agent_id, connection_id, their_label=their_label
            )
        except ExternalServiceError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        return _record_to_dict(record)

    return router
