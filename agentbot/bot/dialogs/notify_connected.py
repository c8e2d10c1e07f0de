"""notify-connected: tell the user later, when the connection completes."""

from typing import Any

from ...dialogs import Dialog, DialogContext, DialogTurnResult
from ...errors import MalformedPayloadError
from ...logging_config import get_logger
from ...models import ConnectionRecord, ServiceEvent
from ...services import UNSPECIFIED_LABEL
from ...turn import TurnContext
from ..dependencies import DialogDependencies
from .common import NOTIFY_CONNECTED

logger = get_logger(__name__)


async def send_connected(turn: TurnContext, connection: ConnectionRecord) -> None:
    await turn.send_activity(
        f"You are now connected to {connection.alias or UNSPECIFIED_LABEL}"
    )


class NotifyConnectedDialog(Dialog):
    """Leaf dialog: registers a watch and ends in the same turn.

    Options are a ServiceEvent (or its dict form) naming the event kind and
    connection id to wait for. Ends True when the watch was registered.
    """

    def __init__(self, deps: DialogDependencies, dialog_id: str = NOTIFY_CONNECTED):
        super().__init__(dialog_id)
        self._deps = deps

    async def begin_dialog(
        self, dc: DialogContext, options: Any = None
    ) -> DialogTurnResult:
        turn = dc.context
        try:
            event = (
                options
                if isinstance(options, ServiceEvent)
                else ServiceEvent.from_dict(options or {})
            )
        except MalformedPayloadError as e:
            logger.warning("Notify connected requested without an event: %s", e)
            return await dc.end_dialog(False)

        state = await self._deps.states.agent_state(turn)
        if state.provisioning_id is None:
            logger.warning(
                "Notify connected requested, but no agent data found in state",
                extra={"context": {"conversation_id": turn.conversation_id}},
            )
            return await dc.end_dialog(False)

        subscription = await self._deps.resumer.watch(
            event.kind,
            event.correlation_id,
            turn.get_conversation_reference(),
            state.provisioning_id,
            send_connected,
        )
        return await dc.end_dialog(subscription is not None)
