"""Turn pipeline module."""

from .adapter import BotAdapter, BotCallback, IBotAdapter
from .connector import IChannelConnector, TranscriptConnector
from .context import TurnContext

__all__ = [
    "BotAdapter",
    "BotCallback",
    "IBotAdapter",
    "IChannelConnector",
    "TranscriptConnector",
    "TurnContext",
]
