"""Prompt dialogs: capture one validated piece of user input."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable

from ..logging_config import get_logger
from ..models import ActivityType
from ..turn import TurnContext
from .dialog import Dialog, DialogTurnResult, DialogTurnStatus
from .dialog_context import DialogContext

logger = get_logger(__name__)


class PromptState(str, Enum):
    """Prompt lifecycle: PROMPTING -> AWAITING_INPUT -> VALIDATING -> RETRY | COMPLETE."""

    PROMPTING = "prompting"
    AWAITING_INPUT = "awaiting_input"
    VALIDATING = "validating"
    RETRY = "retry"
    COMPLETE = "complete"


@dataclass
class PromptOptions:
    """What to ask, what to say on retry, and the optional choice set.

    max_attempts caps the number of validated inputs; None means retry
    forever. When the cap is hit the prompt ends with result None.
    """

    prompt: str | None = None
    retry_prompt: str | None = None
    choices: list[str] = field(default_factory=list)
    max_attempts: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "prompt": self.prompt,
            "retryPrompt": self.retry_prompt,
            "choices": list(self.choices),
            "maxAttempts": self.max_attempts,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PromptOptions":
        return cls(
            prompt=data.get("prompt"),
            retry_prompt=data.get("retryPrompt"),
            choices=list(data.get("choices") or []),
            max_attempts=data.get("maxAttempts"),
        )

    @classmethod
    def coerce(cls, options: Any) -> "PromptOptions":
        if options is None:
            return cls()
        if isinstance(options, PromptOptions):
            return options
        if isinstance(options, str):
            return cls(prompt=options)
        if isinstance(options, dict):
            return cls.from_dict(options)
        raise TypeError(f"Unsupported prompt options: {options!r}")


@dataclass
class PromptRecognizerResult:
    succeeded: bool
    value: Any = None


@dataclass
class PromptValidatorContext:
    """Passed to custom validators after recognition."""

    context: TurnContext
    recognized: PromptRecognizerResult
    options: PromptOptions
    attempt_count: int


PromptValidator = Callable[[PromptValidatorContext], Awaitable[bool]]


def format_inline_choices(choices: list[str]) -> str:
    """Render choices as '(1) Email, (2) Phone, or (3) Twitter'."""
    items = [f"({i}) {choice}" for i, choice in enumerate(choices, start=1)]
    if len(items) <= 2:
        return " or ".join(items)
    return ", ".join(items[:-1]) + ", or " + items[-1]


class Prompt(Dialog):
    """Base prompt: render, wait, recognize, validate, retry or complete."""

    default_retry_prompt: str | None = None

    def __init__(self, dialog_id: str, validator: PromptValidator | None = None):
        super().__init__(dialog_id)
        self._validator = validator

    async def begin_dialog(
        self, dc: DialogContext, options: Any = None
    ) -> DialogTurnResult:
        prompt_options = PromptOptions.coerce(options)
        state = dc.active_dialog.state
        state["options"] = prompt_options.to_dict()
        state["attemptCount"] = 0
        state["state"] = PromptState.PROMPTING.value

        await self._render(dc.context, prompt_options, is_retry=False)
        state["state"] = PromptState.AWAITING_INPUT.value
        return DialogTurnResult(DialogTurnStatus.WAITING)

    async def continue_dialog(self, dc: DialogContext) -> DialogTurnResult:
        state = dc.active_dialog.state
        options = PromptOptions.from_dict(state.get("options") or {})
        turn = dc.context

        if turn.activity.type != ActivityType.MESSAGE:
            await self._render(turn, options, is_retry=False)
            state["state"] = PromptState.AWAITING_INPUT.value
            return DialogTurnResult(DialogTurnStatus.WAITING)

        state["state"] = PromptState.VALIDATING.value
        state["attemptCount"] = int(state.get("attemptCount", 0)) + 1
        recognized = self.recognize(turn.activity.text or "", options)

        is_valid = recognized.succeeded
        if self._validator is not None:
            is_valid = await self._validator(
                PromptValidatorContext(
                    context=turn,
                    recognized=recognized,
                    options=options,
                    attempt_count=state["attemptCount"],
                )
            )

        if is_valid:
            state["state"] = PromptState.COMPLETE.value
            return await dc.end_dialog(recognized.value)

        if (
            options.max_attempts is not None
            and state["attemptCount"] >= options.max_attempts
        ):
            logger.info(
                "Prompt %s gave up after %s attempts",
                self.id,
                state["attemptCount"],
            )
            state["state"] = PromptState.COMPLETE.value
            return await dc.end_dialog(None)

        state["state"] = PromptState.RETRY.value
        await self._render(turn, options, is_retry=True)
        state["state"] = PromptState.AWAITING_INPUT.value
        return DialogTurnResult(DialogTurnStatus.WAITING)

    async def resume_dialog(
        self, dc: DialogContext, result: Any = None
    ) -> DialogTurnResult:
        # Prompts don't start children; if one ended on top of us, ask again
        options = PromptOptions.from_dict(dc.active_dialog.state.get("options") or {})
        await self._render(dc.context, options, is_retry=False)
        return DialogTurnResult(DialogTurnStatus.WAITING)

    def recognize(self, text: str, options: PromptOptions) -> PromptRecognizerResult:
        raise NotImplementedError

    def suggested_actions(self, options: PromptOptions) -> list[str]:
        return []

    def render_text(self, options: PromptOptions, is_retry: bool) -> str | None:
        if is_retry:
            return options.retry_prompt or self.default_retry_prompt or options.prompt
        return options.prompt

    async def _render(
        self, turn: TurnContext, options: PromptOptions, is_retry: bool
    ) -> None:
        text = self.render_text(options, is_retry)
        if text is None:
            return
        await turn.send_activity(
            text, suggested_actions=self.suggested_actions(options)
        )


class TextPrompt(Prompt):
    """Any non-blank text is valid."""

    def recognize(self, text: str, options: PromptOptions) -> PromptRecognizerResult:
        value = text.strip()
        return PromptRecognizerResult(succeeded=bool(value), value=value or None)


AFFIRMATIVE_TOKENS = frozenset(
    {"yes", "y", "yeah", "yep", "yup", "sure", "ok", "okay", "true"}
)
NEGATIVE_TOKENS = frozenset({"no", "n", "nope", "nah", "false"})


class ConfirmPrompt(Prompt):
    """Yes/no question, result is a bool."""

    default_retry_prompt = "Please answer yes or no."

    def recognize(self, text: str, options: PromptOptions) -> PromptRecognizerResult:
        token = text.strip().rstrip(".!").strip().lower()
        if token in AFFIRMATIVE_TOKENS:
            return PromptRecognizerResult(succeeded=True, value=True)
        if token in NEGATIVE_TOKENS:
            return PromptRecognizerResult(succeeded=True, value=False)
        return PromptRecognizerResult(succeeded=False)

    def suggested_actions(self, options: PromptOptions) -> list[str]:
        return ["Yes", "No"]


class ChoicePrompt(Prompt):
    """Input must match one of the choices, ignoring case."""

    def recognize(self, text: str, options: PromptOptions) -> PromptRecognizerResult:
        candidate = text.strip().casefold()
        for choice in options.choices:
            if choice.casefold() == candidate:
                return PromptRecognizerResult(succeeded=True, value=choice)
        return PromptRecognizerResult(succeeded=False)

    def suggested_actions(self, options: PromptOptions) -> list[str]:
        return list(options.choices)

    def render_text(self, options: PromptOptions, is_retry: bool) -> str | None:
        text = super().render_text(options, is_retry)
        if text is None or not options.choices:
            return text
        return f"{text} {format_inline_choices(options.choices)}"
