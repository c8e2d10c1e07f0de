"""Waterfall dialogs: ordered steps with result threading."""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Union

from ..errors import DialogStateError
from ..models import ActivityType
from ..turn import TurnContext
from .dialog import Dialog, DialogTurnResult, DialogTurnStatus
from .dialog_context import DialogContext


@dataclass(frozen=True)
class Next:
    """Advance to the next step, which receives value as its result."""

    value: Any = None


@dataclass(frozen=True)
class BeginChild:
    """Suspend at this step and push a child dialog.

    The step after this one receives the child's result.
    """

    dialog_id: str
    options: Any = None


@dataclass(frozen=True)
class End:
    """End the waterfall now, surfacing value to the parent."""

    value: Any = None


StepDirective = Union[Next, BeginChild, End]


class WaterfallStepContext:
    """Explicit per-step context handed to every step function."""

    def __init__(
        self,
        dc: DialogContext,
        index: int,
        options: Any,
        result: Any,
        values: dict[str, Any],
    ):
        self._dc = dc
        self.index = index
        self.options = options
        self.result = result
        self.values = values

    @property
    def dialog_context(self) -> DialogContext:
        return self._dc

    @property
    def context(self) -> TurnContext:
        return self._dc.context


WaterfallStep = Callable[[WaterfallStepContext], Awaitable[StepDirective]]


class WaterfallDialog(Dialog):
    """Runs an ordered list of steps, one directive at a time.

    Instance state keeps the step index, the begin options and a values
    dict; all three must stay JSON-serializable.
    """

    STEP_INDEX = "stepIndex"
    OPTIONS = "options"
    VALUES = "values"

    def __init__(self, dialog_id: str, steps: list[WaterfallStep] | None = None):
        super().__init__(dialog_id)
        self._steps: list[WaterfallStep] = list(steps or [])

    def add_step(self, step: WaterfallStep) -> "WaterfallDialog":
        self._steps.append(step)
        return self

    @property
    def step_count(self) -> int:
        return len(self._steps)

    async def begin_dialog(
        self, dc: DialogContext, options: Any = None
    ) -> DialogTurnResult:
        state = dc.active_dialog.state
        state[self.OPTIONS] = options
        state[self.VALUES] = {}
        state[self.STEP_INDEX] = 0
        return await self._advance(dc, 0, None)

    async def continue_dialog(self, dc: DialogContext) -> DialogTurnResult:
        # Without a child on top only a user message moves the waterfall on
        activity = dc.context.activity
        if activity.type != ActivityType.MESSAGE:
            return DialogTurnResult(DialogTurnStatus.WAITING)
        return await self.resume_dialog(dc, activity.text)

    async def resume_dialog(
        self, dc: DialogContext, result: Any = None
    ) -> DialogTurnResult:
        index = self._current_index(dc)
        return await self._advance(dc, index + 1, result)

    def _current_index(self, dc: DialogContext) -> int:
        index = dc.active_dialog.state.get(self.STEP_INDEX)
        if not isinstance(index, int) or not 0 <= index < len(self._steps):
            raise DialogStateError(
                f"Waterfall '{self.id}' has invalid step index {index!r} "
                f"({len(self._steps)} steps)"
            )
        return index

    async def _advance(
        self, dc: DialogContext, index: int, result: Any
    ) -> DialogTurnResult:
        if index >= len(self._steps):
            return await dc.end_dialog(result)
        return await self._run_step(dc, index, result)

    async def _run_step(
        self, dc: DialogContext, index: int, result: Any
    ) -> DialogTurnResult:
        state = dc.active_dialog.state
        state[self.STEP_INDEX] = index

        step_context = WaterfallStepContext(
            dc,
            index=index,
            options=state.get(self.OPTIONS),
            result=result,
            values=state.setdefault(self.VALUES, {}),
        )
        directive = await self._steps[index](step_context)

        if isinstance(directive, Next):
            return await self._advance(dc, index + 1, directive.value)
        if isinstance(directive, BeginChild):
            return await dc.begin_dialog(directive.dialog_id, directive.options)
        if isinstance(directive, End):
            return await dc.end_dialog(directive.value)

        raise TypeError(
            f"Step {index} of '{self.id}' returned {directive!r}, "
            "expected Next, BeginChild or End"
        )
