"""create-invitation: hand out an invitation link and wait for the other side."""

from ...dialogs import BeginChild, End, Next, WaterfallDialog, WaterfallStepContext
from ...errors import ExternalServiceError
from ...logging_config import get_logger
from ...models import EventKind, ServiceEvent
from ...services import encode_invitation
from ..dependencies import DialogDependencies
from .common import CREATE_INVITATION, NOTIFY_CONNECTED, EnsureAgentSteps

logger = get_logger(__name__)


class CreateInvitationDialog(WaterfallDialog):
    def __init__(self, deps: DialogDependencies, dialog_id: str = CREATE_INVITATION):
        super().__init__(dialog_id)
        self._deps = deps
        ensure = EnsureAgentSteps(deps, "creating invitations")
        self.add_step(ensure.check_agent)
        self.add_step(ensure.provision_agent)
        self.add_step(self.create_invitation)
        self.add_step(self.register_notify)

    async def create_invitation(self, step: WaterfallStepContext):
        turn = step.context
        state = await self._deps.states.agent_state(turn)
        if state.provisioning_id is None:
            await turn.send_activity("Sorry, I couldn't find information about your agent")
            return End(False)

        await turn.send_typing()
        try:
            agent = await self._deps.context_provider.get_context(state.provisioning_id)
            provisioning = await self._deps.provisioning.get_provisioning(agent)
            invitation, record = await self._deps.connections.create_invitation(
                agent, auto_accept=True
            )
        except ExternalServiceError as e:
            logger.error(
                "Creating invitation for %s failed: %s",
                state.provisioning_id,
                e,
                extra={"context": {"conversation_id": turn.conversation_id}},
            )
            await turn.send_activity("Sorry, I couldn't create an invitation.")
            await turn.send_activity(f"Error: {e}")
            return End(False)

        details = encode_invitation(provisioning.endpoint_uri, invitation.to_dict())
        await turn.send_activity("Here are the invitation details")
        await turn.send_activity(details)
        return Next(record.id)

    async def register_notify(self, step: WaterfallStepContext):
        event = ServiceEvent(kind=EventKind.CONNECTION_REQUEST, correlation_id=step.result)
        return BeginChild(NOTIFY_CONNECTED, event.to_dict())
