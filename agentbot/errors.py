"""Error taxonomy for AgentBot.

Prompt validation failures and missing preconditions are handled as
dialog behaviour (retry loops and setup sub-dialogs) and have no exception
type here.
"""


class AgentBotError(Exception):
    """Base class for all AgentBot errors."""


class UnknownDialogError(AgentBotError, LookupError):
    """A dialog name was not found in the DialogSet. Configuration error."""

    def __init__(self, dialog_id: str):
        super().__init__(f"Dialog '{dialog_id}' is not registered")
        self.dialog_id = dialog_id


class DialogStateError(AgentBotError):
    """The persisted dialog stack is inconsistent with the registered dialogs."""


class ExternalServiceError(AgentBotError):
    """A collaborator (provisioning, connections, messaging) call failed."""


class AgentNotFoundError(ExternalServiceError):
    """No agent context can be resolved for the given agent id."""

    def __init__(self, agent_id: str | None):
        super().__init__(f"Agent '{agent_id}' not found")
        self.agent_id = agent_id


class MalformedPayloadError(AgentBotError, ValueError):
    """An invitation or event payload could not be decoded."""


class ConversationUnreachableError(AgentBotError):
    """A conversation reference no longer leads to a reachable conversation."""

    def __init__(self, conversation_id: str):
        super().__init__(f"Conversation '{conversation_id}' is unreachable")
        self.conversation_id = conversation_id
