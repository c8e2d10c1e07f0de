"""Collaborators shared by the domain dialogs."""

from dataclasses import dataclass

from ..resumption import ConversationResumer
from ..services import (
    IAgentContextProvider,
    IConnectionService,
    IMessageService,
    IProvisioningService,
)
from ..state import BotStateSet


@dataclass
class DialogDependencies:
    """Everything a domain dialog may call, wired once by the Application."""

    states: BotStateSet
    context_provider: IAgentContextProvider
    provisioning: IProvisioningService
    connections: IConnectionService
    messages: IMessageService
    resumer: ConversationResumer
    endpoint_host: str = "http://localhost:8000/agents/"
    wallet_key: str = "DefaultKey"
