"""Dialog base class and turn results."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .dialog_context import DialogContext


class DialogTurnStatus(str, Enum):
    """Outcome of dispatching a turn to the dialog stack."""

    EMPTY = "empty"  # nothing on the stack
    WAITING = "waiting"  # a dialog is waiting for the next turn
    COMPLETE = "complete"  # the stack emptied during this turn


@dataclass
class DialogTurnResult:
    """Status of the dialog stack after a dispatch, with the final result."""

    status: DialogTurnStatus
    result: Any = None


class Dialog:
    """A named, resumable unit of interaction.

    Subclasses implement begin_dialog. The default continue_dialog and
    resume_dialog end the dialog, which suits dialogs that never wait.
    """

    def __init__(self, dialog_id: str):
        if not dialog_id:
            raise ValueError("dialog_id is required")
        self._id = dialog_id

    @property
    def id(self) -> str:
        return self._id

    async def begin_dialog(
        self, dc: "DialogContext", options: Any = None
    ) -> DialogTurnResult:
        """Start the dialog. Its instance is already on top of the stack."""
        raise NotImplementedError

    async def continue_dialog(self, dc: "DialogContext") -> DialogTurnResult:
        """Handle a new turn while this dialog is on top of the stack."""
        return await dc.end_dialog()

    async def resume_dialog(
        self, dc: "DialogContext", result: Any = None
    ) -> DialogTurnResult:
        """Called when a child dialog ended and this dialog is on top again."""
        return await dc.end_dialog(result)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._id!r})"
