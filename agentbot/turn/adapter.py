"""BotAdapter: runs turns and proactive continuations."""

import asyncio
import weakref
from typing import Awaitable, Callable, Protocol

from ..logging_config import get_logger
from ..models import Activity, ConversationReference
from ..tracker import ITracker, NullTracker
from .connector import IChannelConnector
from .context import TurnContext

logger = get_logger(__name__)


BotCallback = Callable[[TurnContext], Awaitable[None]]


class IBotAdapter(Protocol):
    """Entry point into the turn pipeline."""

    async def process_activity(
        self, activity: Activity, logic: BotCallback
    ) -> list[Activity]:
        """Run one inbound turn. Returns the activities sent during it."""
        ...

    async def continue_conversation(
        self, reference: ConversationReference, logic: BotCallback
    ) -> list[Activity]:
        """Run a proactive turn for a captured conversation."""
        ...


class BotAdapter:
    """Runs turns against a channel connector.

    With serialize_turns enabled, turns and continuations for the same
    conversation are executed one at a time.
    """

    def __init__(
        self,
        connector: IChannelConnector,
        tracker: ITracker | None = None,
        serialize_turns: bool = True,
    ):
        self._connector = connector
        self._tracker = tracker or NullTracker()
        self._serialize_turns = serialize_turns
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, conversation_id: str) -> asyncio.Lock:
        lock = self._locks.get(conversation_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[conversation_id] = lock
        return lock

    async def _run(self, turn: TurnContext, logic: BotCallback) -> list[Activity]:
        if not self._serialize_turns:
            await logic(turn)
            return turn.sent_activities

        lock = self._lock_for(turn.conversation_id)
        async with lock:
            await logic(turn)
        return turn.sent_activities

    async def process_activity(
        self, activity: Activity, logic: BotCallback
    ) -> list[Activity]:
        """Run one inbound turn. Returns the activities sent during it."""
        logger.info(
            "Turn started: %s in %s",
            activity.type.value,
            activity.conversation_id,
            extra={"context": {"conversation_id": activity.conversation_id}},
        )
        await self._connector.record_inbound(activity)

        turn = TurnContext(self, activity)
        sent = await self._run(turn, logic)

        await self._tracker.track(
            event_type="turn_processed",
            actor="adapter",
            data={
                "conversation_id": activity.conversation_id,
                "activity_type": activity.type.value,
                "reply_count": len(sent),
            },
        )
        return sent

    async def continue_conversation(
        self, reference: ConversationReference, logic: BotCallback
    ) -> list[Activity]:
        """Run a proactive turn for a captured conversation.

        Transport failures propagate to the caller.
        """
        activity = reference.create_continuation_activity()
        logger.info(
            "Continuing conversation %s",
            reference.conversation_id,
            extra={"context": {"conversation_id": reference.conversation_id}},
        )

        turn = TurnContext(self, activity, proactive=True)
        sent = await self._run(turn, logic)

        await self._tracker.track(
            event_type="conversation_continued",
            actor="adapter",
            data={
                "conversation_id": reference.conversation_id,
                "reply_count": len(sent),
            },
        )
        return sent

    async def send_activities(
        self, turn: TurnContext, activities: list[Activity]
    ) -> None:
        """Deliver activities through the connector and record them on the turn."""
        await self._connector.send(activities, proactive=turn.proactive)
        turn.sent_activities.extend(activities)
