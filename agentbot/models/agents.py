"""Agent, provisioning and connection data models."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

CONNECTION_INVITATION_TYPE = (
    "did:sov:BzCbsNYhMrjHiqZDTUASHg;spec/connections/1.0/invitation"
)
CONNECTION_REQUEST_TYPE = "did:sov:BzCbsNYhMrjHiqZDTUASHg;spec/connections/1.0/request"


class ConnectionStatus(str, Enum):
    """Lifecycle of a connection record."""

    INVITED = "invited"
    NEGOTIATING = "negotiating"
    CONNECTED = "connected"


@dataclass
class AgentContext:
    """Resolved handle to a provisioned agent."""

    agent_id: str
    wallet_key: str


@dataclass
class ProvisioningConfiguration:
    """Parameters for provisioning a new agent."""

    agent_id: str
    wallet_key: str
    endpoint_uri: str
    owner_name: str


@dataclass
class ProvisioningRecord:
    """What the provisioning service knows about an agent."""

    agent_id: str
    endpoint_uri: str
    owner_name: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class ConnectionRecord:
    """A pairwise connection between our agent and another party."""

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    status: ConnectionStatus = ConnectionStatus.INVITED
    alias: str | None = None
    their_label: str | None = None
    auto_accept: bool = False


@dataclass
class ConnectionInvitation:
    """Connection invitation message carried in the c_i parameter."""

    label: str | None = None
    recipient_keys: list[str] = field(default_factory=list)
    service_endpoint: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    type: str = CONNECTION_INVITATION_TYPE

    def to_dict(self) -> dict[str, Any]:
        return {
            "@type": self.type,
            "@id": self.id,
            "label": self.label,
            "recipientKeys": list(self.recipient_keys),
            "serviceEndpoint": self.service_endpoint,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConnectionInvitation":
        return cls(
            type=data.get("@type", CONNECTION_INVITATION_TYPE),
            id=data.get("@id") or str(uuid.uuid4()),
            label=data.get("label"),
            recipient_keys=list(data.get("recipientKeys") or []),
            service_endpoint=data.get("serviceEndpoint"),
        )


@dataclass
class ConnectionRequest:
    """Outbound request answering a connection invitation."""

    label: str
    connection_id: str
    invitation_id: str
    type: str = CONNECTION_REQUEST_TYPE
