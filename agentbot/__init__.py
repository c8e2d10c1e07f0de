"""Core module."""

from .app import Application, IApplication
from .bot import AgentBot, DialogDependencies, build_dialog_set
from .dialogs import (
    BeginChild,
    ChoicePrompt,
    ConfirmPrompt,
    Dialog,
    DialogContext,
    DialogSet,
    DialogTurnResult,
    DialogTurnStatus,
    End,
    Next,
    PromptOptions,
    TextPrompt,
    WaterfallDialog,
)
from .event_bus import EventBus, IEventBus, Subscription
from .llm import ILLMProvider, LLMProvider
from .models import (
    Activity,
    ActivityType,
    ChannelAccount,
    ConversationReference,
    EventKind,
    ServiceEvent,
    TraceEvent,
)
from .resumption import ConversationResumer
from .storage import IStorage, Storage
from .tracker import ITracker, Tracker
from .turn import BotAdapter, TurnContext

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "Activity",
    "ActivityType",
    "ChannelAccount",
    "ConversationReference",
    "EventKind",
    "ServiceEvent",
    "TraceEvent",
    # Dialog engine
    "Dialog",
    "DialogContext",
    "DialogSet",
    "DialogTurnResult",
    "DialogTurnStatus",
    "WaterfallDialog",
    "Next",
    "BeginChild",
    "End",
    "PromptOptions",
    "TextPrompt",
    "ConfirmPrompt",
    "ChoicePrompt",
    # Components
    "IStorage",
    "Storage",
    "IEventBus",
    "EventBus",
    "Subscription",
    "ITracker",
    "Tracker",
    "ILLMProvider",
    "LLMProvider",
    "BotAdapter",
    "TurnContext",
    "ConversationResumer",
    "AgentBot",
    "DialogDependencies",
    "build_dialog_set",
]
