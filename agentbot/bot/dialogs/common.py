"""Dialog names and the steps that make sure an agent exists."""

from ..dependencies import DialogDependencies
from ...dialogs import BeginChild, End, Next, PromptOptions, WaterfallStepContext

PROVISION_AGENT = "provision-agent"
CREATE_INVITATION = "create-invitation"
ACCEPT_INVITATION = "accept-invitation"
NOTIFY_CONNECTED = "notify-connected"
ISSUE_CREDENTIAL = "issue-credential"
TEXT_PROMPT = "text-prompt"
YES_NO_PROMPT = "yes-no-prompt"
CREDENTIAL_TYPE_PROMPT = "credential-type-prompt"


class EnsureAgentSteps:
    """Two waterfall steps: ask to provision when needed, then run provision-agent.

    The first step passes None forward when an agent already exists, so the
    second can tell "nothing to do" from a yes/no answer.
    """

    def __init__(self, deps: DialogDependencies, reason: str):
        self._deps = deps
        self._reason = reason

    async def check_agent(self, step: WaterfallStepContext):
        state = await self._deps.states.agent_state(step.context)
        if state.provisioning_id is None:
            await step.context.send_activity(
                f"You must provision an agent before {self._reason}"
            )
            return BeginChild(
                YES_NO_PROMPT, PromptOptions(prompt="Would you like to do that now?")
            )
        return Next()

    async def provision_agent(self, step: WaterfallStepContext):
        if step.result is None:
            return Next()
        if step.result is True:
            return BeginChild(PROVISION_AGENT)

        await step.context.send_activity("Ok")
        return End(False)
