"""ConversationResumer: wakes dormant conversations on service events."""

from typing import Awaitable, Callable

from ..errors import AgentNotFoundError, ExternalServiceError
from ..event_bus import IEventBus, Subscription
from ..logging_config import get_logger
from ..models import ConnectionRecord, ConversationReference, EventKind, ServiceEvent
from ..services import IAgentContextProvider, IConnectionService
from ..state import BotStateSet
from ..tracker import ITracker, NullTracker
from ..turn import IBotAdapter, TurnContext

logger = get_logger(__name__)


ResumeHandler = Callable[[TurnContext, ConnectionRecord], Awaitable[None]]


class ConversationResumer:
    """Bridges EventBus notifications to captured conversations.

    Each watch() carries its own reference and correlation id, so callbacks
    for different conversations share no mutable state.
    """

    def __init__(
        self,
        event_bus: IEventBus,
        adapter: IBotAdapter,
        context_provider: IAgentContextProvider,
        connection_service: IConnectionService,
        states: BotStateSet,
        tracker: ITracker | None = None,
    ):
        self._event_bus = event_bus
        self._adapter = adapter
        self._context_provider = context_provider
        self._connection_service = connection_service
        self._states = states
        self._tracker = tracker or NullTracker()

    async def watch(
        self,
        kind: EventKind,
        correlation_id: str,
        reference: ConversationReference,
        agent_id: str,
        handler: ResumeHandler,
    ) -> Subscription | None:
        """Run handler in the referenced conversation once the event fires.

        Returns None, without subscribing, when agent_id cannot be resolved.
        """
        log_context = {
            "conversation_id": reference.conversation_id,
            "correlation_id": correlation_id,
        }
        try:
            await self._context_provider.get_context(agent_id)
        except AgentNotFoundError as e:
            logger.warning(
                "Not watching %s: %s", kind.value, e, extra={"context": log_context}
            )
            return None

        async def on_event(event: ServiceEvent) -> None:
            await self._resume(event, reference, agent_id, handler)

        subscription = self._event_bus.subscribe(
            lambda e: e.kind == kind and e.correlation_id == correlation_id,
            on_event,
        )
        logger.info(
            "Watching %s for %s", kind.value, correlation_id, extra={"context": log_context}
        )
        return subscription

    async def _resume(
        self,
        event: ServiceEvent,
        reference: ConversationReference,
        agent_id: str,
        handler: ResumeHandler,
    ) -> None:
        log_context = {
            "conversation_id": reference.conversation_id,
            "correlation_id": event.correlation_id,
        }
        try:
            agent_context = await self._context_provider.get_context(agent_id)
            connection = await self._connection_service.get(
                agent_context, event.correlation_id
            )
        except ExternalServiceError as e:
            # No turn is active, so there is nobody to tell
            logger.warning(
                "Dropped %s: %s", event.kind.value, e, extra={"context": log_context}
            )
            await self._tracker.track(
                event_type="correlation_dropped",
                actor="conversation_resumer",
                data={**log_context, "kind": event.kind.value, "reason": str(e)},
            )
            return

        async def logic(turn: TurnContext) -> None:
            await handler(turn, connection)
            await self._states.save_all_changes(turn)

        await self._adapter.continue_conversation(reference, logic)

        await self._tracker.track(
            event_type="conversation_resumed",
            actor="conversation_resumer",
            data={**log_context, "kind": event.kind.value},
        )
