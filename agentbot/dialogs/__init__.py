"""Dialog engine module."""

from .dialog import Dialog, DialogTurnResult, DialogTurnStatus
from .dialog_context import DialogContext
from .dialog_set import DialogSet
from .prompts import (
    ChoicePrompt,
    ConfirmPrompt,
    Prompt,
    PromptOptions,
    PromptState,
    PromptValidatorContext,
    TextPrompt,
)
from .waterfall import (
    BeginChild,
    End,
    Next,
    StepDirective,
    WaterfallDialog,
    WaterfallStepContext,
)

__all__ = [
    "Dialog",
    "DialogTurnResult",
    "DialogTurnStatus",
    "DialogContext",
    "DialogSet",
    # Prompts
    "Prompt",
    "TextPrompt",
    "ConfirmPrompt",
    "ChoicePrompt",
    "PromptOptions",
    "PromptState",
    "PromptValidatorContext",
    # Waterfall
    "WaterfallDialog",
    "WaterfallStepContext",
    "StepDirective",
    "Next",
    "BeginChild",
    "End",
]
