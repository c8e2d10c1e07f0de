"""Bot state module."""

from .bot_state import BotState, BotStateSet, ConversationStateStore, UserStateStore

__all__ = ["BotState", "BotStateSet", "ConversationStateStore", "UserStateStore"]
