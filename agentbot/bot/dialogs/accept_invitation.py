"""accept-invitation: answer an invitation link pasted into the chat."""

from ...dialogs import BeginChild, End, Next, PromptOptions, WaterfallDialog, WaterfallStepContext
from ...errors import ExternalServiceError, MalformedPayloadError
from ...logging_config import get_logger
from ...models import EventKind, ServiceEvent
from ...services import decode_connection_invitation, is_absolute_uri, parse_label
from ..dependencies import DialogDependencies
from .common import ACCEPT_INVITATION, NOTIFY_CONNECTED, YES_NO_PROMPT, EnsureAgentSteps

logger = get_logger(__name__)


class AcceptInvitationDialog(WaterfallDialog):
    """Begin options are the invitation URI. Ends False whenever nothing was accepted."""

    def __init__(self, deps: DialogDependencies, dialog_id: str = ACCEPT_INVITATION):
        super().__init__(dialog_id)
        self._deps = deps
        ensure = EnsureAgentSteps(deps, "accepting invitations")
        self.add_step(self.parse_invitation)
        self.add_step(self.parse_follow_up)
        self.add_step(ensure.check_agent)
        self.add_step(ensure.provision_agent)
        self.add_step(self.accept_invitation)
        self.add_step(self.register_notify)

    async def parse_invitation(self, step: WaterfallStepContext):
        uri = step.options
        label = None
        if isinstance(uri, str) and is_absolute_uri(uri):
            try:
                label = parse_label(uri)
            except MalformedPayloadError as e:
                logger.info("Not an invitation: %s", e)

        if label is None:
            await step.context.send_activity("I couldn't find an invitation in that URL")
            return End(False)

        await step.context.send_activity(
            f"It appears you received an invitation to connect from {label}."
        )
        return BeginChild(
            YES_NO_PROMPT, PromptOptions(prompt="Would you like to accept it?")
        )

    async def parse_follow_up(self, step: WaterfallStepContext):
        if step.result is True:
            return Next()
        await step.context.send_activity("Ok")
        return End(False)

    async def accept_invitation(self, step: WaterfallStepContext):
        turn = step.context
        state = await self._deps.states.agent_state(turn)
        if state.provisioning_id is None:
            return End(False)

        try:
            invitation = decode_connection_invitation(step.options)
        except MalformedPayloadError as e:
            await turn.send_activity(f"I can't accept this invitation: {e}")
            return End(False)

        await turn.send_typing()
        try:
            agent = await self._deps.context_provider.get_context(state.provisioning_id)
            request, record = await self._deps.connections.create_request(
                agent, invitation
            )
            await self._deps.messages.send_to_connection(
                agent, request, record, invitation.recipient_keys[0]
            )
        except ExternalServiceError as e:
            logger.error(
                "Accepting invitation %s failed: %s",
                invitation.id,
                e,
                extra={"context": {"conversation_id": turn.conversation_id}},
            )
            await turn.send_activity("Sorry, I couldn't accept the invitation.")
            await turn.send_activity(f"Error: {e}")
            return End(False)

        await turn.send_activity("I accepted the invitation and initiated connection")
        return Next(record.id)

    async def register_notify(self, step: WaterfallStepContext):
        event = ServiceEvent(
            kind=EventKind.CONNECTION_RESPONSE, correlation_id=step.result
        )
        return BeginChild(NOTIFY_CONNECTED, event.to_dict())
