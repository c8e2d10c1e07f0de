"""Agent collaborator services and the invitation codec."""

from .interfaces import (
    IAgentContextProvider,
    IConnectionService,
    IMessageService,
    IProvisioningService,
)
from .invitations import (
    INVITATION_PARAMETER,
    UNSPECIFIED_LABEL,
    decode_connection_invitation,
    decode_invitation,
    encode_invitation,
    is_absolute_uri,
    parse_label,
)
from .local import (
    AgentRegistry,
    LocalAgentContextProvider,
    LocalConnectionService,
    LocalMessageService,
    LocalProvisioningService,
)

__all__ = [
    "IAgentContextProvider",
    "IConnectionService",
    "IMessageService",
    "IProvisioningService",
    "INVITATION_PARAMETER",
    "UNSPECIFIED_LABEL",
    "decode_connection_invitation",
    "decode_invitation",
    "encode_invitation",
    "is_absolute_uri",
    "parse_label",
    "AgentRegistry",
    "LocalAgentContextProvider",
    "LocalConnectionService",
    "LocalMessageService",
    "LocalProvisioningService",
]
