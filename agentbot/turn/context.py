"""TurnContext: everything a single turn needs, passed explicitly."""

from typing import TYPE_CHECKING, Any

from ..models import Activity, ActivityType, ConversationReference

if TYPE_CHECKING:
    from .adapter import BotAdapter


class TurnContext:
    """Per-turn context bound to one inbound (or synthetic) activity."""

    def __init__(
        self, adapter: "BotAdapter", activity: Activity, proactive: bool = False
    ):
        self._adapter = adapter
        self._activity = activity
        self.proactive = proactive
        self.turn_state: dict[str, Any] = {}
        self.sent_activities: list[Activity] = []

    @property
    def adapter(self) -> "BotAdapter":
        return self._adapter

    @property
    def activity(self) -> Activity:
        return self._activity

    @property
    def conversation_id(self) -> str:
        return self._activity.conversation_id

    @property
    def responded(self) -> bool:
        return bool(self.sent_activities)

    def get_conversation_reference(self) -> ConversationReference:
        return self._activity.get_conversation_reference()

    async def send_activity(
        self,
        activity_or_text: Activity | str,
        suggested_actions: list[str] | None = None,
    ) -> Activity:
        """Send a reply (plain text or a prepared activity) to the conversation."""
        if isinstance(activity_or_text, str):
            activity = self._activity.create_reply(activity_or_text)
        else:
            activity = activity_or_text
        if suggested_actions:
            activity.suggested_actions = list(suggested_actions)

        await self._adapter.send_activities(self, [activity])
        return activity

    async def send_typing(self) -> Activity:
        """Send a typing indicator."""
        typing = self._activity.create_reply()
        typing.type = ActivityType.TYPING
        await self._adapter.send_activities(self, [typing])
        return typing
