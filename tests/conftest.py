"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from agentbot.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def tracker(storage):
    """Create Tracker with storage."""
    from agentbot.tracker import Tracker

    return Tracker(storage)


@pytest.fixture
def clock():
    return FakeClock()


@pytest_asyncio.fixture
async def event_bus(clock, tracker):
    """EventBus with a 60 second replay window on the fake clock."""
    from agentbot.event_bus import EventBus

    eb = EventBus(replay_window=60.0, clock=clock, tracker=tracker)
    yield eb
    await eb.close()


@pytest.fixture
def registry():
    from agentbot.services import AgentRegistry

    return AgentRegistry()


@pytest.fixture
def context_provider(registry):
    from agentbot.services import LocalAgentContextProvider

    return LocalAgentContextProvider(registry, "DefaultKey")


@pytest.fixture
def provisioning(registry):
    from agentbot.services import LocalProvisioningService

    return LocalProvisioningService(registry)


@pytest.fixture
def connection_service(registry, event_bus):
    from agentbot.services import LocalConnectionService

    return LocalConnectionService(registry, event_bus)


@pytest.fixture
def message_service(registry):
    from agentbot.services import LocalMessageService

    return LocalMessageService(registry)


@pytest.fixture
def states(storage):
    from agentbot.state import BotStateSet, ConversationStateStore, UserStateStore

    return BotStateSet(ConversationStateStore(storage), UserStateStore(storage))


@pytest.fixture
def adapter(storage, tracker):
    from agentbot.turn import BotAdapter, TranscriptConnector

    return BotAdapter(TranscriptConnector(storage), tracker=tracker)


@pytest.fixture
def resumer(event_bus, adapter, context_provider, connection_service, states, tracker):
    from agentbot.resumption import ConversationResumer

    return ConversationResumer(
        event_bus,
        adapter,
        context_provider,
        connection_service,
        states,
        tracker=tracker,
    )


@pytest.fixture
def deps(states, context_provider, provisioning, connection_service, message_service, resumer):
    from agentbot.bot import DialogDependencies

    return DialogDependencies(
        states=states,
        context_provider=context_provider,
        provisioning=provisioning,
        connections=connection_service,
        messages=message_service,
        resumer=resumer,
        endpoint_host="http://agents.test/agents/",
        wallet_key="DefaultKey",
    )


@pytest.fixture
def recognizer():
    from agentbot.recognizers import KeywordIntentRecognizer

    return KeywordIntentRecognizer()


@pytest.fixture
def bot(deps, states, recognizer, tracker):
    from agentbot.bot import AgentBot, build_dialog_set

    return AgentBot(build_dialog_set(deps), states, recognizer, tracker=tracker)


@pytest.fixture
def make_activity():
    """Build an inbound activity from user to bot."""
    from agentbot.models import Activity, ActivityType, ChannelAccount

    def _make(
        text: str | None = None,
        conversation_id: str = "conv-1",
        user_id: str = "user-1",
        type: ActivityType = ActivityType.MESSAGE,
        **fields,
    ) -> Activity:
        return Activity(
            type=type,
            channel_id="test",
            conversation_id=conversation_id,
            from_account=ChannelAccount(user_id, "User"),
            recipient=ChannelAccount("bot", "AgentBot"),
            text=text,
            **fields,
        )

    return _make


@pytest.fixture
def say(adapter, bot, make_activity):
    """Send a message through the full turn pipeline and return reply texts."""

    async def _say(text: str, conversation_id: str = "conv-1", user_id: str = "user-1"):
        sent = await adapter.process_activity(
            make_activity(text, conversation_id=conversation_id, user_id=user_id),
            bot.on_turn,
        )
        return [a.text for a in sent if a.text]

    return _say


@pytest.fixture
def make_turn(adapter, make_activity):
    """TurnContext for driving dialogs without the bot."""
    from agentbot.turn import TurnContext

    def _make(text: str | None = None, **kwargs) -> TurnContext:
        return TurnContext(adapter, make_activity(text, **kwargs))

    return _make


@pytest.fixture
def mock_llm():
    """Create mock LLM provider."""
    llm = Mock()
    llm.complete = AsyncMock(return_value="Test response")
    return llm
