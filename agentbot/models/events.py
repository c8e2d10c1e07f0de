"""Out-of-band service event models."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..errors import MalformedPayloadError


class EventKind(str, Enum):
    """Message/operation types observed by the agent services."""

    CONNECTION_INVITATION = "connection_invitation"
    CONNECTION_REQUEST = "connection_request"
    CONNECTION_RESPONSE = "connection_response"
    CREDENTIAL_OFFER = "credential_offer"
    CREDENTIAL_REQUEST = "credential_request"


@dataclass(frozen=True)
class ServiceEvent:
    """An external event correlated with an operation a dialog started."""

    kind: EventKind
    correlation_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "correlationId": self.correlation_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceEvent":
        try:
            return cls(
                kind=EventKind(data["kind"]),
                correlation_id=str(data["correlationId"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedPayloadError(f"Invalid event payload: {e}") from e
