"""DialogContext: per-turn dispatcher over the dialog stack."""

from typing import TYPE_CHECKING, Any

from ..errors import DialogStateError, UnknownDialogError
from ..logging_config import get_logger
from ..models import DialogInstance
from ..turn import TurnContext
from .dialog import Dialog, DialogTurnResult, DialogTurnStatus

if TYPE_CHECKING:
    from .dialog_set import DialogSet

logger = get_logger(__name__)


class DialogContext:
    """Dispatches begin/continue/end operations against one conversation's stack.

    The stack list is the one loaded from conversation state and is mutated
    in place; persisting it is the turn handler's job.
    """

    def __init__(
        self, dialogs: "DialogSet", turn: TurnContext, stack: list[DialogInstance]
    ):
        self._dialogs = dialogs
        self._turn = turn
        self._stack = stack

    @property
    def context(self) -> TurnContext:
        return self._turn

    @property
    def dialogs(self) -> "DialogSet":
        return self._dialogs

    @property
    def stack(self) -> list[DialogInstance]:
        """Active dialogs, innermost last."""
        return self._stack

    @property
    def active_dialog(self) -> DialogInstance | None:
        return self._stack[-1] if self._stack else None

    def _dialog_for(self, instance: DialogInstance) -> Dialog:
        dialog = self._dialogs.find(instance.dialog_id)
        if dialog is None:
            raise DialogStateError(
                f"Stack references unregistered dialog '{instance.dialog_id}'"
            )
        return dialog

    async def begin_dialog(
        self, dialog_id: str, options: Any = None
    ) -> DialogTurnResult:
        """Push a new instance of a registered dialog and start it."""
        dialog = self._dialogs.find(dialog_id)
        if dialog is None:
            raise UnknownDialogError(dialog_id)

        self._stack.append(DialogInstance(dialog_id=dialog_id, state={}))
        logger.debug(
            "Begin dialog %s (depth %s)",
            dialog_id,
            len(self._stack),
            extra={"context": {"conversation_id": self._turn.conversation_id}},
        )
        return await dialog.begin_dialog(self, options)

    async def continue_dialog(self) -> DialogTurnResult:
        """Hand the current turn to the dialog on top of the stack."""
        instance = self.active_dialog
        if instance is None:
            return DialogTurnResult(DialogTurnStatus.EMPTY)

        return await self._dialog_for(instance).continue_dialog(self)

    async def end_dialog(self, result: Any = None) -> DialogTurnResult:
        """Pop the active dialog and resume its parent with result."""
        if self._stack:
            ended = self._stack.pop()
            logger.debug(
                "End dialog %s (depth %s)",
                ended.dialog_id,
                len(self._stack),
                extra={"context": {"conversation_id": self._turn.conversation_id}},
            )

        instance = self.active_dialog
        if instance is None:
            return DialogTurnResult(DialogTurnStatus.COMPLETE, result)

        return await self._dialog_for(instance).resume_dialog(self, result)

