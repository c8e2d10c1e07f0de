"""Per-turn load/save of conversation and user state."""

from typing import Generic, TypeVar

from ..logging_config import get_logger
from ..models import AgentState, ConversationState, UserState
from ..storage import IStorage
from ..turn import TurnContext

logger = get_logger(__name__)


T = TypeVar("T", ConversationState, UserState)


class BotState(Generic[T]):
    """Loads a state record once per turn and writes it back once.

    The loaded record is cached in turn.turn_state, so every component in
    the turn sees the same object. Writes are last-write-wins.
    """

    scope: str = ""
    record_type: type

    def __init__(self, storage: IStorage):
        self._storage = storage
        self._cache_key = f"{type(self).__name__}.record"

    def get_storage_key(self, turn: TurnContext) -> str:
        raise NotImplementedError

    async def load(self, turn: TurnContext, force: bool = False) -> T:
        """Load the record for this turn (from cache unless force)."""
        if force or self._cache_key not in turn.turn_state:
            key = self.get_storage_key(turn)
            item = await self._storage.read(self.scope, key)
            record = (
                self.record_type.from_dict(item.data) if item else self.record_type()
            )
            turn.turn_state[self._cache_key] = record
        return turn.turn_state[self._cache_key]

    def get(self, turn: TurnContext) -> T | None:
        """Return the record loaded in this turn, if any."""
        return turn.turn_state.get(self._cache_key)

    async def save_changes(self, turn: TurnContext) -> None:
        """Write the loaded record back. Does nothing if it was never loaded."""
        record = self.get(turn)
        if record is None:
            return
        key = self.get_storage_key(turn)
        version = await self._storage.write(self.scope, key, record.to_dict())
        logger.debug("Saved %s state %s (v%s)", self.scope, key, version)


class ConversationStateStore(BotState[ConversationState]):
    """State scoped to a conversation."""

    scope = "conversation"
    record_type = ConversationState

    def get_storage_key(self, turn: TurnContext) -> str:
        activity = turn.activity
        return f"{activity.channel_id}/conversations/{activity.conversation_id}"


class UserStateStore(BotState[UserState]):
    """State scoped to a user, shared across that user's conversations."""

    scope = "user"
    record_type = UserState

    def get_storage_key(self, turn: TurnContext) -> str:
        activity = turn.activity
        return f"{activity.channel_id}/users/{activity.from_account.id}"


class BotStateSet:
    """The conversation and user state stores used by one bot."""

    def __init__(
        self,
        conversation_state: ConversationStateStore,
        user_state: UserStateStore,
    ):
        self.conversation_state = conversation_state
        self.user_state = user_state

    async def agent_state(self, turn: TurnContext) -> AgentState:
        """Application fields of the conversation record."""
        record = await self.conversation_state.load(turn)
        return record.application_state

    async def save_all_changes(self, turn: TurnContext) -> None:
        """Write every record loaded during this turn, once."""
        await self.user_state.save_changes(turn)
        await self.conversation_state.save_changes(turn)
