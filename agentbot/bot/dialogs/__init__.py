"""Domain dialogs."""

from .accept_invitation import AcceptInvitationDialog
from .common import (
    ACCEPT_INVITATION,
    CREATE_INVITATION,
    CREDENTIAL_TYPE_PROMPT,
    ISSUE_CREDENTIAL,
    NOTIFY_CONNECTED,
    PROVISION_AGENT,
    TEXT_PROMPT,
    YES_NO_PROMPT,
    EnsureAgentSteps,
)
from .create_invitation import CreateInvitationDialog
from .issue_credential import CREDENTIAL_TYPES, IssueCredentialDialog
from .notify_connected import NotifyConnectedDialog
from .provision_agent import DEFAULT_AGENT_NAME, ProvisionAgentDialog

__all__ = [
    "ACCEPT_INVITATION",
    "CREATE_INVITATION",
    "CREDENTIAL_TYPE_PROMPT",
    "ISSUE_CREDENTIAL",
    "NOTIFY_CONNECTED",
    "PROVISION_AGENT",
    "TEXT_PROMPT",
    "YES_NO_PROMPT",
    "CREDENTIAL_TYPES",
    "DEFAULT_AGENT_NAME",
    "EnsureAgentSteps",
    "AcceptInvitationDialog",
    "CreateInvitationDialog",
    "IssueCredentialDialog",
    "NotifyConnectedDialog",
    "ProvisionAgentDialog",
]
