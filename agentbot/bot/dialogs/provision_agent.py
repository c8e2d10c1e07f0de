"""provision-agent: name and create the user's agent."""

import uuid
from urllib.parse import urljoin

from ...dialogs import BeginChild, End, Next, PromptOptions, WaterfallDialog, WaterfallStepContext
from ...errors import ExternalServiceError
from ...logging_config import get_logger
from ...models import ProvisioningConfiguration
from ..dependencies import DialogDependencies
from .common import PROVISION_AGENT, TEXT_PROMPT

logger = get_logger(__name__)

DEFAULT_AGENT_NAME = "Agent Chat Bot"


class ProvisionAgentDialog(WaterfallDialog):
    """Ends with True when the conversation has an agent afterwards."""

    def __init__(self, deps: DialogDependencies, dialog_id: str = PROVISION_AGENT):
        super().__init__(dialog_id)
        self._deps = deps
        self.add_step(self.check_agent)
        self.add_step(self.prompt_agent_name)
        self.add_step(self.provision)

    async def check_agent(self, step: WaterfallStepContext):
        state = await self._deps.states.agent_state(step.context)
        if state.provisioning_id is not None:
            await step.context.send_activity("You already have an agent provisioned.")
            return End(True)
        return Next()

    async def prompt_agent_name(self, step: WaterfallStepContext):
        return BeginChild(
            TEXT_PROMPT,
            PromptOptions(prompt="What name would you like your agent to use?"),
        )

    async def provision(self, step: WaterfallStepContext):
        turn = step.context
        await turn.send_typing()

        agent_name = step.result or DEFAULT_AGENT_NAME
        agent_id = uuid.uuid4().hex
        configuration = ProvisioningConfiguration(
            agent_id=agent_id,
            wallet_key=self._deps.wallet_key,
            endpoint_uri=urljoin(self._deps.endpoint_host, agent_id),
            owner_name=agent_name,
        )
        try:
            await self._deps.provisioning.provision_agent(configuration)
        except ExternalServiceError as e:
            logger.error(
                "Provisioning failed: %s",
                e,
                extra={"context": {"conversation_id": turn.conversation_id}},
            )
            await turn.send_activity("Sorry, I couldn't provision new agent.")
            await turn.send_activity(f"Error: {e}")
            return End(False)

        await turn.send_activity(
            "Your agent is ready. Go ahead and start making connections."
        )
        state = await self._deps.states.agent_state(turn)
        state.provisioning_key = configuration.wallet_key
        state.provisioning_id = agent_id

        user = await self._deps.states.user_state.load(turn)
        user.agent_name = agent_name
        return End(True)
