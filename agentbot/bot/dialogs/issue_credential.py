"""issue-credential: pick a credential type."""

from ...dialogs import BeginChild, End, Next, PromptOptions, WaterfallDialog, WaterfallStepContext
from .common import CREDENTIAL_TYPE_PROMPT, ISSUE_CREDENTIAL

CREDENTIAL_TYPES = ["Email", "Phone", "Twitter"]


def match_credential_type(value) -> str | None:
    if not isinstance(value, str):
        return None
    candidate = value.strip().casefold()
    for credential_type in CREDENTIAL_TYPES:
        if credential_type.casefold() == candidate:
            return credential_type
    return None


class IssueCredentialDialog(WaterfallDialog):
    """Begin options may carry the credential type the recognizer found."""

    def __init__(self, dialog_id: str = ISSUE_CREDENTIAL):
        super().__init__(dialog_id)
        self.add_step(self.select_credential)
        self.add_step(self.confirm_selection)

    async def select_credential(self, step: WaterfallStepContext):
        known = match_credential_type(step.options)
        if known is not None:
            return Next(known)
        return BeginChild(
            CREDENTIAL_TYPE_PROMPT,
            PromptOptions(
                prompt="What type of credential would you like?",
                choices=list(CREDENTIAL_TYPES),
            ),
        )

    async def confirm_selection(self, step: WaterfallStepContext):
        credential_type = step.result
        await step.context.send_activity(
            f"Issuing {credential_type} credentials isn't supported yet."
        )
        return End(credential_type)
