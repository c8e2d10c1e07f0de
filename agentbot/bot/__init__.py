"""Bot module: turn routing and the domain dialogs."""

from .bot import INTENT_DIALOGS, AgentBot, build_dialog_set
from .dependencies import DialogDependencies

__all__ = ["AgentBot", "DialogDependencies", "INTENT_DIALOGS", "build_dialog_set"]
