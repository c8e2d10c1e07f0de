"""In-process stand-ins for the agent collaborators.

No cryptography or wire protocol is involved: agents, connections and
sent messages live in memory. complete_connection() plays the part of the
remote party answering, and publishes the matching service event.
"""

import uuid
from dataclasses import dataclass, field

from ..errors import AgentNotFoundError, ExternalServiceError
from ..event_bus import IEventBus
from ..logging_config import get_logger
from ..models import (
    AgentContext,
    ConnectionInvitation,
    ConnectionRecord,
    ConnectionRequest,
    ConnectionStatus,
    EventKind,
    ProvisioningConfiguration,
    ProvisioningRecord,
    ServiceEvent,
)

logger = get_logger(__name__)


@dataclass
class _AgentEntry:
    provisioning: ProvisioningRecord
    wallet_key: str
    verkey: str
    connections: dict[str, ConnectionRecord] = field(default_factory=dict)
    outbox: list[tuple[str, ConnectionRequest]] = field(default_factory=list)


class AgentRegistry:
    """Shared in-memory store behind the local services."""

    def __init__(self) -> None:
        self._agents: dict[str, _AgentEntry] = {}

    def add(self, entry: _AgentEntry) -> None:
        self._agents[entry.provisioning.agent_id] = entry

    def find(self, agent_id: str) -> _AgentEntry | None:
        return self._agents.get(agent_id)

    def require(self, agent_id: str) -> _AgentEntry:
        entry = self._agents.get(agent_id)
        if entry is None:
            raise AgentNotFoundError(agent_id)
        return entry

    def remove(self, agent_id: str) -> None:
        self._agents.pop(agent_id, None)

    def clear(self) -> None:
        self._agents.clear()


class LocalAgentContextProvider:
    """Opens agents from the registry with the configured wallet key."""

    def __init__(self, registry: AgentRegistry, wallet_key: str = "DefaultKey"):
        self._registry = registry
        self._wallet_key = wallet_key

    async def get_context(self, agent_id: str | None) -> AgentContext:
        if not agent_id:
            raise AgentNotFoundError(agent_id)
        entry = self._registry.require(agent_id)
        if entry.wallet_key != self._wallet_key:
            raise ExternalServiceError(f"Invalid wallet credentials for '{agent_id}'")
        return AgentContext(agent_id=agent_id, wallet_key=entry.wallet_key)


class LocalProvisioningService:
    """Provisions agents into the registry."""

    def __init__(self, registry: AgentRegistry):
        self._registry = registry

    async def provision_agent(
        self, configuration: ProvisioningConfiguration
    ) -> ProvisioningRecord:
        if self._registry.find(configuration.agent_id) is not None:
            raise ExternalServiceError(
                f"Agent '{configuration.agent_id}' is already provisioned"
            )
        record = ProvisioningRecord(
            agent_id=configuration.agent_id,
            endpoint_uri=configuration.endpoint_uri,
            owner_name=configuration.owner_name,
        )
        self._registry.add(
            _AgentEntry(
                provisioning=record,
                wallet_key=configuration.wallet_key,
                verkey=uuid.uuid4().hex,
            )
        )
        logger.info("Provisioned agent %s", configuration.agent_id)
        return record

    async def get_provisioning(self, context: AgentContext) -> ProvisioningRecord:
        return self._registry.require(context.agent_id).provisioning


class LocalConnectionService:
    """Keeps connection records and simulates the remote side finishing a handshake."""

    def __init__(self, registry: AgentRegistry, event_bus: IEventBus):
        self._registry = registry
        self._event_bus = event_bus

    async def create_invitation(
        self, context: AgentContext, auto_accept: bool = True
    ) -> tuple[ConnectionInvitation, ConnectionRecord]:
        entry = self._registry.require(context.agent_id)
        record = ConnectionRecord(
            status=ConnectionStatus.INVITED, auto_accept=auto_accept
        )
        entry.connections[record.id] = record

        invitation = ConnectionInvitation(
            label=entry.provisioning.owner_name,
            recipient_keys=[entry.verkey],
            service_endpoint=entry.provisioning.endpoint_uri,
        )
        return invitation, record

    async def create_request(
        self, context: AgentContext, invitation: ConnectionInvitation
    ) -> tuple[ConnectionRequest, ConnectionRecord]:
        entry = self._registry.require(context.agent_id)
        if not invitation.recipient_keys:
            raise ExternalServiceError("Invitation has no recipient keys")

        record = ConnectionRecord(
            status=ConnectionStatus.NEGOTIATING,
            alias=invitation.label,
            their_label=invitation.label,
        )
        entry.connections[record.id] = record

        request = ConnectionRequest(
            label=entry.provisioning.owner_name,
            connection_id=record.id,
            invitation_id=invitation.id,
        )
        return request, record

    async def get(self, context: AgentContext, connection_id: str) -> ConnectionRecord:
        entry = self._registry.require(context.agent_id)
        record = entry.connections.get(connection_id)
        if record is None:
            raise ExternalServiceError(f"Connection '{connection_id}' not found")
        return record

    async def list_connections(self, context: AgentContext) -> list[ConnectionRecord]:
        return list(self._registry.require(context.agent_id).connections.values())

    async def complete_connection(
        self, agent_id: str, connection_id: str, their_label: str | None = None
    ) -> ConnectionRecord:
        """Mark a connection as connected and publish the observed message type.

        An invited record completes on the other party's request, a
        negotiating one on their response.
        """
        entry = self._registry.require(agent_id)
        record = entry.connections.get(connection_id)
        if record is None:
            raise ExternalServiceError(f"Connection '{connection_id}' not found")

        kind = (
            EventKind.CONNECTION_REQUEST
            if record.status == ConnectionStatus.INVITED
            else EventKind.CONNECTION_RESPONSE
        )
        if their_label:
            record.their_label = their_label
            record.alias = record.alias or their_label
        record.status = ConnectionStatus.CONNECTED

        await self._event_bus.publish(ServiceEvent(kind=kind, correlation_id=record.id))
        return record


class LocalMessageService:
    """Queues outbound agent messages per agent."""

    def __init__(self, registry: AgentRegistry):
        self._registry = registry

    async def send_to_connection(
        self,
        context: AgentContext,
        message: ConnectionRequest,
        record: ConnectionRecord,
        recipient_key: str,
    ) -> None:
        if not recipient_key:
            raise ExternalServiceError("No recipient key for connection")
        entry = self._registry.require(context.agent_id)
        entry.outbox.append((recipient_key, message))
        logger.debug(
            "Queued %s for connection %s", message.type, record.id
        )

    def sent_messages(self, agent_id: str) -> list[tuple[str, ConnectionRequest]]:
        return list(self._registry.require(agent_id).outbox)
