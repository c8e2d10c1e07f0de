"""AgentBot: per-turn routing between the dialog stack and intents."""

from ..dialogs import (
    ChoicePrompt,
    ConfirmPrompt,
    DialogContext,
    DialogSet,
    DialogTurnStatus,
    TextPrompt,
)
from ..logging_config import get_logger
from ..models import ActivityType
from ..recognizers import (
    AGENT_PROVISION,
    CONNECTION_CREATE_INVITATION,
    CREDENTIAL_ISSUE,
    CREDENTIAL_TYPE_ENTITY,
    IIntentRecognizer,
)
from ..services import is_absolute_uri
from ..state import BotStateSet
from ..tracker import ITracker, NullTracker
from ..turn import TurnContext
from .dependencies import DialogDependencies
from .dialogs import (
    ACCEPT_INVITATION,
    CREATE_INVITATION,
    CREDENTIAL_TYPE_PROMPT,
    ISSUE_CREDENTIAL,
    PROVISION_AGENT,
    TEXT_PROMPT,
    YES_NO_PROMPT,
    AcceptInvitationDialog,
    CreateInvitationDialog,
    IssueCredentialDialog,
    NotifyConnectedDialog,
    ProvisionAgentDialog,
)

logger = get_logger(__name__)


INTENT_DIALOGS = {
    AGENT_PROVISION: PROVISION_AGENT,
    CONNECTION_CREATE_INVITATION: CREATE_INVITATION,
    CREDENTIAL_ISSUE: ISSUE_CREDENTIAL,
}


def build_dialog_set(deps: DialogDependencies) -> DialogSet:
    """Register every dialog the bot can run and freeze the set."""
    dialogs = DialogSet(
        [
            ProvisionAgentDialog(deps),
            CreateInvitationDialog(deps),
            AcceptInvitationDialog(deps),
            NotifyConnectedDialog(deps),
            IssueCredentialDialog(),
            TextPrompt(TEXT_PROMPT),
            ConfirmPrompt(YES_NO_PROMPT),
            ChoicePrompt(CREDENTIAL_TYPE_PROMPT),
        ]
    )
    dialogs.freeze()
    return dialogs


class AgentBot:
    """Turn handler passed to the adapter.

    Message turns continue the active dialog; with an empty stack they start
    accept-invitation for a pasted URI, or route on the recognized intent.
    State is written once at the end of every message turn.
    """

    def __init__(
        self,
        dialogs: DialogSet,
        states: BotStateSet,
        recognizer: IIntentRecognizer,
        score_threshold: float = 0.7,
        tracker: ITracker | None = None,
    ):
        self._dialogs = dialogs
        self._states = states
        self._recognizer = recognizer
        self._score_threshold = score_threshold
        self._tracker = tracker or NullTracker()

    async def on_turn(self, turn: TurnContext) -> None:
        activity_type = turn.activity.type
        if activity_type == ActivityType.MESSAGE:
            await self._on_message(turn)
        elif activity_type == ActivityType.CONVERSATION_UPDATE:
            await self._on_conversation_update(turn)
        else:
            await turn.send_activity(f"{activity_type.value} event detected")

    async def _on_message(self, turn: TurnContext) -> None:
        conversation = await self._states.conversation_state.load(turn)
        dc = self._dialogs.create_context(turn, conversation.dialog_stack)

        result = await dc.continue_dialog()
        if result.status == DialogTurnStatus.EMPTY:
            text = (turn.activity.text or "").strip()
            if is_absolute_uri(text):
                await self._begin(dc, ACCEPT_INVITATION, text)
            else:
                await self._route_intent(turn, dc, text)
        elif result.status == DialogTurnStatus.COMPLETE:
            logger.debug(
                "Dialog stack completed with %r",
                result.result,
                extra={"context": {"conversation_id": turn.conversation_id}},
            )

        await self._states.save_all_changes(turn)

    async def _begin(self, dc: DialogContext, dialog_id: str, options=None) -> None:
        await self._tracker.track(
            event_type="dialog_started",
            actor="agent_bot",
            data={"conversation_id": dc.context.conversation_id, "dialog_id": dialog_id},
        )
        await dc.begin_dialog(dialog_id, options)

    async def _route_intent(
        self, turn: TurnContext, dc: DialogContext, text: str
    ) -> None:
        recognized = await self._recognizer.recognize(text)
        await self._tracker.track(
            event_type="intent_recognized",
            actor="agent_bot",
            data={
                "conversation_id": turn.conversation_id,
                "intent": recognized.intent,
                "score": recognized.score,
            },
        )

        if recognized.score > self._score_threshold:
            dialog_id = INTENT_DIALOGS.get(recognized.intent)
            if dialog_id is None:
                await turn.send_activity(
                    f"I can't process this intent yet ({recognized.intent})"
                )
            elif dialog_id == ISSUE_CREDENTIAL:
                await self._begin(
                    dc, dialog_id, recognized.entities.get(CREDENTIAL_TYPE_ENTITY)
                )
            else:
                await self._begin(dc, dialog_id)
            return

        state = await self._states.agent_state(turn)
        state.turn_count += 1
        await turn.send_activity(
            f"Turn {state.turn_count}: You sent '{turn.activity.text}'"
        )

    async def _on_conversation_update(self, turn: TurnContext) -> None:
        activity = turn.activity
        recipient_id = activity.recipient.id if activity.recipient else None
        for member in activity.members_added or []:
            if member.id == recipient_id:
                await turn.send_activity("Hi there!")
