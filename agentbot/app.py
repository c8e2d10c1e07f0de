"""Application bootstrap and lifecycle management."""

from typing import Protocol

from .bot import AgentBot, DialogDependencies, build_dialog_set
from .config import Settings, resolve_db_path
from .event_bus import EventBus
from .llm import LLMProvider
from .logging_config import get_logger
from .models import Activity
from .recognizers import IIntentRecognizer, KeywordIntentRecognizer, LLMIntentRecognizer
from .resumption import ConversationResumer
from .services import (
    AgentRegistry,
    LocalAgentContextProvider,
    LocalConnectionService,
    LocalMessageService,
    LocalProvisioningService,
)
from .state import BotStateSet, ConversationStateStore, UserStateStore
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker
from .turn import BotAdapter, TranscriptConnector

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Reset data between test runs."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        db_path: str | None = None,
        settings: Settings | None = None,
        recognizer: IIntentRecognizer | None = None,
    ):
        self._settings = settings or Settings.from_env()
        env_db_path = self._settings.database_url if db_path is None else db_path
        self._db_path = resolve_db_path(env_db_path)
        self._recognizer_override = recognizer

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._tracker: ITracker | None = None
        self._event_bus: EventBus | None = None
        self._registry: AgentRegistry | None = None
        self._context_provider: LocalAgentContextProvider | None = None
        self._connections: LocalConnectionService | None = None
        self._messages: LocalMessageService | None = None
        self._states: BotStateSet | None = None
        self._adapter: BotAdapter | None = None
        self._resumer: ConversationResumer | None = None
        self._bot: AgentBot | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")
        settings = self._settings

        # 1. Storage (no dependencies)
        self._storage = Storage(self._db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. Tracker (depends on Storage)
        self._tracker = Tracker(self._storage)

        # 3. EventBus (depends on Tracker)
        self._event_bus = EventBus(
            replay_window=settings.event_replay_window, tracker=self._tracker
        )
        logger.info(
            "EventBus initialized (replay window %ss)", settings.event_replay_window
        )

        # 4. Agent services (depend on EventBus)
        self._registry = AgentRegistry()
        self._context_provider = context_provider = LocalAgentContextProvider(
            self._registry, settings.agent_wallet_key
        )
        provisioning = LocalProvisioningService(self._registry)
        self._connections = LocalConnectionService(self._registry, self._event_bus)
        self._messages = LocalMessageService(self._registry)

        # 5. State and turn pipeline (depend on Storage)
        self._states = BotStateSet(
            ConversationStateStore(self._storage), UserStateStore(self._storage)
        )
        self._adapter = BotAdapter(
            TranscriptConnector(self._storage),
            tracker=self._tracker,
            serialize_turns=settings.serialize_turns,
        )

        # 6. Resumer (depends on EventBus, adapter, services, state)
        self._resumer = ConversationResumer(
            self._event_bus,
            self._adapter,
            context_provider,
            self._connections,
            self._states,
            tracker=self._tracker,
        )

        # 7. Bot
        deps = DialogDependencies(
            states=self._states,
            context_provider=context_provider,
            provisioning=provisioning,
            connections=self._connections,
            messages=self._messages,
            resumer=self._resumer,
            endpoint_host=settings.agent_endpoint_host,
            wallet_key=settings.agent_wallet_key,
        )
        self._bot = AgentBot(
            build_dialog_set(deps),
            self._states,
            self._build_recognizer(),
            score_threshold=settings.intent_score_threshold,
            tracker=self._tracker,
        )
        logger.info("All components initialized successfully")

    def _build_recognizer(self) -> IIntentRecognizer:
        if self._recognizer_override is not None:
            return self._recognizer_override
        if self._settings.anthropic_api_key:
            logger.info("Using LLM intent recognizer")
            return LLMIntentRecognizer(
                LLMProvider(
                    api_key=self._settings.anthropic_api_key,
                    model=self._settings.anthropic_model,
                )
            )
        logger.info("ANTHROPIC_API_KEY not set, using keyword intent recognizer")
        return KeywordIntentRecognizer()

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._event_bus:
            await self._event_bus.close()
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Reset data between test runs."""
        # 1. Drop pending callbacks and buffered events
        if self._event_bus:
            await self._event_bus.close()

        # 2. Forget provisioned agents
        if self._registry:
            self._registry.clear()

        # 3. Clear storage
        if self._storage:
            await self._storage.clear()
            logger.info("Reset complete")

    async def process_activity(self, activity: Activity) -> list[Activity]:
        """Run one inbound activity through the bot."""
        return await self.adapter.process_activity(activity, self.bot.on_turn)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def tracker(self) -> ITracker:
        if not self._tracker:
            raise RuntimeError("Application not started")
        return self._tracker

    @property
    def event_bus(self) -> EventBus:
        if not self._event_bus:
            raise RuntimeError("Application not started")
        return self._event_bus

    @property
    def adapter(self) -> BotAdapter:
        if not self._adapter:
            raise RuntimeError("Application not started")
        return self._adapter

    @property
    def bot(self) -> AgentBot:
        if not self._bot:
            raise RuntimeError("Application not started")
        return self._bot

    @property
    def states(self) -> BotStateSet:
        if not self._states:
            raise RuntimeError("Application not started")
        return self._states

    @property
    def context_provider(self) -> LocalAgentContextProvider:
        if not self._context_provider:
            raise RuntimeError("Application not started")
        return self._context_provider

    @property
    def connections(self) -> LocalConnectionService:
        """Get the connection service (exposes complete_connection)."""
        if not self._connections:
            raise RuntimeError("Application not started")
        return self._connections

    @property
    def messages(self) -> LocalMessageService:
        if not self._messages:
            raise RuntimeError("Application not started")
        return self._messages
