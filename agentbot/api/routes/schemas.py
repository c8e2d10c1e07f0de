"""Shared request/response models for the HTTP API."""

from datetime import datetime

from pydantic import BaseModel, Field

from ...models import Activity, ActivityType, ChannelAccount


class AccountModel(BaseModel):
    """A channel identity."""

    id: str
    name: str | None = None


class ActivityModel(BaseModel):
    """Activity as exchanged over HTTP."""

    id: str | None = None
    type: str = ActivityType.MESSAGE.value
    channel_id: str = "api"
    conversation_id: str
    from_account: AccountModel = Field(alias="from")
    recipient: AccountModel = AccountModel(id="agentbot", name="AgentBot")
    text: str | None = None
    service_url: str | None = None
    reply_to_id: str | None = None
    members_added: list[AccountModel] = []
    suggested_actions: list[str] = []
    timestamp: datetime | None = None

    model_config = {"populate_by_name": True}

    def to_activity(self) -> Activity:
        activity = Activity(
            type=ActivityType.parse(self.type),
            channel_id=self.channel_id,
            conversation_id=self.conversation_id,
            from_account=ChannelAccount(self.from_account.id, self.from_account.name),
            recipient=ChannelAccount(self.recipient.id, self.recipient.name),
            text=self.text,
            service_url=self.service_url,
            reply_to_id=self.reply_to_id,
            members_added=[ChannelAccount(m.id, m.name) for m in self.members_added],
            suggested_actions=list(self.suggested_actions),
        )
        if self.id:
            activity.id = self.id
        if self.timestamp:
            activity.timestamp = self.timestamp
        return activity

    @classmethod
    def from_activity(cls, activity: Activity) -> "ActivityModel":
        return cls.model_validate(activity.to_dict())
