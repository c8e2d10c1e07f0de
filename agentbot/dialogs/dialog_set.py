"""DialogSet: the name-keyed dialog registry."""

from ..models import DialogInstance
from ..turn import TurnContext
from .dialog import Dialog
from .dialog_context import DialogContext


class DialogSet:
    """Registry mapping unique dialog names to dialog definitions.

    Built once at startup. After freeze() no dialogs can be added, so the
    set can be read from concurrent turns without locking.
    """

    def __init__(self, dialogs: list[Dialog] | None = None):
        self._dialogs: dict[str, Dialog] = {}
        self._frozen = False
        for dialog in dialogs or []:
            self.add(dialog)

    def add(self, dialog: Dialog) -> "DialogSet":
        """Register a dialog under its id."""
        if self._frozen:
            raise RuntimeError("DialogSet is frozen")
        if dialog.id in self._dialogs:
            raise ValueError(f"Dialog '{dialog.id}' is already registered")
        self._dialogs[dialog.id] = dialog
        return self

    def freeze(self) -> None:
        self._frozen = True

    def find(self, dialog_id: str) -> Dialog | None:
        """Look up a dialog by name."""
        return self._dialogs.get(dialog_id)

    def __contains__(self, dialog_id: object) -> bool:
        return dialog_id in self._dialogs

    @property
    def names(self) -> list[str]:
        return list(self._dialogs)

    def create_context(
        self, turn: TurnContext, stack: list[DialogInstance]
    ) -> DialogContext:
        """Bind a DialogContext to a loaded stack for one turn."""
        return DialogContext(self, turn, stack)
