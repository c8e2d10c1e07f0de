"""Channel activity data models."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ActivityType(str, Enum):
    """Activity types exchanged with the channel."""

    MESSAGE = "message"
    CONVERSATION_UPDATE = "conversationUpdate"
    TYPING = "typing"
    EVENT = "event"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> "ActivityType":
        """Map a raw channel value onto the closed set, unknown values become OTHER."""
        for member in cls:
            if member.value == value:
                return member
        return cls.OTHER


@dataclass
class ChannelAccount:
    """An identity on the channel (user or bot)."""

    id: str
    name: str | None = None

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict) -> "ChannelAccount":
        return cls(id=data["id"], name=data.get("name"))


@dataclass
class Activity:
    """A single inbound or outbound unit exchanged with the channel."""

    type: ActivityType
    channel_id: str
    conversation_id: str
    from_account: ChannelAccount
    recipient: ChannelAccount
    text: str | None = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    service_url: str | None = None
    reply_to_id: str | None = None
    members_added: list[ChannelAccount] = field(default_factory=list)
    suggested_actions: list[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def create_reply(self, text: str | None = None) -> "Activity":
        """Create an outbound message addressed back to the sender."""
        return Activity(
            type=ActivityType.MESSAGE,
            channel_id=self.channel_id,
            conversation_id=self.conversation_id,
            from_account=self.recipient,
            recipient=self.from_account,
            text=text,
            service_url=self.service_url,
            reply_to_id=self.id,
        )

    def get_conversation_reference(self) -> "ConversationReference":
        """Capture enough of this activity to re-enter the conversation later."""
        return ConversationReference(
            channel_id=self.channel_id,
            conversation_id=self.conversation_id,
            user=self.from_account,
            bot=self.recipient,
            service_url=self.service_url,
            activity_id=self.id,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "channel_id": self.channel_id,
            "conversation_id": self.conversation_id,
            "from": self.from_account.to_dict(),
            "recipient": self.recipient.to_dict(),
            "text": self.text,
            "service_url": self.service_url,
            "reply_to_id": self.reply_to_id,
            "members_added": [m.to_dict() for m in self.members_added],
            "suggested_actions": list(self.suggested_actions),
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Activity":
        timestamp = data.get("timestamp")
        return cls(
            id=data.get("id") or str(uuid.uuid4()),
            type=ActivityType.parse(data.get("type")),
            channel_id=data["channel_id"],
            conversation_id=data["conversation_id"],
            from_account=ChannelAccount.from_dict(data["from"]),
            recipient=ChannelAccount.from_dict(data["recipient"]),
            text=data.get("text"),
            service_url=data.get("service_url"),
            reply_to_id=data.get("reply_to_id"),
            members_added=[
                ChannelAccount.from_dict(m) for m in data.get("members_added", [])
            ],
            suggested_actions=list(data.get("suggested_actions", [])),
            timestamp=(
                datetime.fromisoformat(timestamp)
                if timestamp
                else datetime.now(timezone.utc)
            ),
        )


@dataclass
class ConversationReference:
    """Durable handle for re-entering a conversation without an inbound request."""

    channel_id: str
    conversation_id: str
    user: ChannelAccount
    bot: ChannelAccount
    service_url: str | None = None
    activity_id: str | None = None

    def create_continuation_activity(self) -> Activity:
        """Build the synthetic inbound activity for a proactive turn."""
        return Activity(
            type=ActivityType.EVENT,
            channel_id=self.channel_id,
            conversation_id=self.conversation_id,
            from_account=self.user,
            recipient=self.bot,
            service_url=self.service_url,
            reply_to_id=self.activity_id,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "channel_id": self.channel_id,
            "conversation_id": self.conversation_id,
            "user": self.user.to_dict(),
            "bot": self.bot.to_dict(),
            "service_url": self.service_url,
            "activity_id": self.activity_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConversationReference":
        return cls(
            channel_id=data["channel_id"],
            conversation_id=data["conversation_id"],
            user=ChannelAccount.from_dict(data["user"]),
            bot=ChannelAccount.from_dict(data["bot"]),
            service_url=data.get("service_url"),
            activity_id=data.get("activity_id"),
        )
