"""Narrow interfaces to the identity/agent collaborators."""

from typing import Protocol

from ..models import (
    AgentContext,
    ConnectionInvitation,
    ConnectionRecord,
    ConnectionRequest,
    ProvisioningConfiguration,
    ProvisioningRecord,
)


class IAgentContextProvider(Protocol):
    """Resolves a provisioned agent by id."""

    async def get_context(self, agent_id: str | None) -> AgentContext:
        """Raises AgentNotFoundError when the agent cannot be resolved."""
        ...


class IProvisioningService(Protocol):
    """Creates agents and reports their provisioning records."""

    async def provision_agent(
        self, configuration: ProvisioningConfiguration
    ) -> ProvisioningRecord:
        ...

    async def get_provisioning(self, context: AgentContext) -> ProvisioningRecord:
        ...


class IConnectionService(Protocol):
    """Connection protocol operations."""

    async def create_invitation(
        self, context: AgentContext, auto_accept: bool = True
    ) -> tuple[ConnectionInvitation, ConnectionRecord]:
        ...

    async def create_request(
        self, context: AgentContext, invitation: ConnectionInvitation
    ) -> tuple[ConnectionRequest, ConnectionRecord]:
        ...

    async def get(self, context: AgentContext, connection_id: str) -> ConnectionRecord:
        ...

    async def list_connections(self, context: AgentContext) -> list[ConnectionRecord]:
        ...


class IMessageService(Protocol):
    """Delivers agent messages to the other side of a connection."""

    async def send_to_connection(
        self,
        context: AgentContext,
        message: ConnectionRequest,
        record: ConnectionRecord,
        recipient_key: str,
    ) -> None:
        ...
