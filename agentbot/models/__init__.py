"""Core data models for AgentBot."""

from .activities import (
    Activity,
    ActivityType,
    ChannelAccount,
    ConversationReference,
)
from .agents import (
    CONNECTION_INVITATION_TYPE,
    CONNECTION_REQUEST_TYPE,
    AgentContext,
    ConnectionInvitation,
    ConnectionRecord,
    ConnectionRequest,
    ConnectionStatus,
    ProvisioningConfiguration,
    ProvisioningRecord,
)
from .events import EventKind, ServiceEvent
from .state import AgentState, ConversationState, DialogInstance, UserState
from .tracing import TraceEvent

__all__ = [
    # Activities
    "Activity",
    "ActivityType",
    "ChannelAccount",
    "ConversationReference",
    # Agents
    "CONNECTION_INVITATION_TYPE",
    "CONNECTION_REQUEST_TYPE",
    "AgentContext",
    "ConnectionInvitation",
    "ConnectionRecord",
    "ConnectionRequest",
    "ConnectionStatus",
    "ProvisioningConfiguration",
    "ProvisioningRecord",
    # Events
    "EventKind",
    "ServiceEvent",
    # State
    "AgentState",
    "ConversationState",
    "DialogInstance",
    "UserState",
    # Tracing
    "TraceEvent",
]
