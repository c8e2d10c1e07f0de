"""Persisted conversation and user state records."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class DialogInstance:
    """Runtime record of one active dialog on the stack."""

    dialog_id: str
    state: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"dialogId": self.dialog_id, "state": self.state}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DialogInstance":
        return cls(dialog_id=data["dialogId"], state=dict(data.get("state") or {}))


@dataclass
class AgentState:
    """Application fields kept alongside the dialog stack."""

    turn_count: int = 0
    provisioning_key: str | None = None
    provisioning_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "turnCount": self.turn_count,
            "provisioningKey": self.provisioning_key,
            "provisioningId": self.provisioning_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AgentState":
        return cls(
            turn_count=int(data.get("turnCount", 0)),
            provisioning_key=data.get("provisioningKey"),
            provisioning_id=data.get("provisioningId"),
        )


@dataclass
class ConversationState:
    """Per-conversation persisted record."""

    dialog_stack: list[DialogInstance] = field(default_factory=list)
    application_state: AgentState = field(default_factory=AgentState)

    def to_dict(self) -> dict[str, Any]:
        return {
            "dialogStack": [instance.to_dict() for instance in self.dialog_stack],
            "applicationState": self.application_state.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConversationState":
        return cls(
            dialog_stack=[
                DialogInstance.from_dict(item) for item in data.get("dialogStack", [])
            ],
            application_state=AgentState.from_dict(data.get("applicationState", {})),
        )


@dataclass
class UserState:
    """Per-user persisted flag bag, shared across conversations."""

    agent_name: str | None = None
    flags: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"agentName": self.agent_name, "flags": self.flags}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserState":
        return cls(
            agent_name=data.get("agentName"),
            flags=dict(data.get("flags") or {}),
        )
