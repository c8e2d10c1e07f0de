"""Channel connectors: where outbound activities go."""

from typing import Protocol

from ..errors import ConversationUnreachableError
from ..logging_config import get_logger
from ..models import Activity
from ..storage import IStorage

logger = get_logger(__name__)


class IChannelConnector(Protocol):
    """Transport for outbound activities."""

    async def record_inbound(self, activity: Activity) -> None:
        """Note an inbound activity (makes the conversation reachable)."""
        ...

    async def send(self, activities: list[Activity], proactive: bool = False) -> None:
        """Deliver outbound activities. Raises ConversationUnreachableError."""
        ...


class TranscriptConnector:
    """Delivers activities into the stored conversation transcript.

    Clients read replies from the HTTP response of their own turn, and
    proactive messages by polling the transcript.
    """

    def __init__(self, storage: IStorage):
        self._storage = storage

    async def record_inbound(self, activity: Activity) -> None:
        await self._storage.save_activity(activity, "inbound")

    async def send(self, activities: list[Activity], proactive: bool = False) -> None:
        for activity in activities:
            if proactive and not await self._storage.has_conversation(
                activity.conversation_id
            ):
                raise ConversationUnreachableError(activity.conversation_id)
            await self._storage.save_activity(activity, "outbound")
            logger.debug(
                "Delivered %s to %s",
                activity.type.value,
                activity.conversation_id,
            )
