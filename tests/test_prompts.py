"""Tests for prompt dialogs."""

import pytest

from agentbot.dialogs import (
    ChoicePrompt,
    ConfirmPrompt,
    DialogSet,
    DialogTurnStatus,
    PromptOptions,
    TextPrompt,
)
from agentbot.dialogs.prompts import format_inline_choices
from agentbot.models import ActivityType


async def _start(dialogs, make_turn, dialog_id, options):
    stack = []
    turn = make_turn("start")
    result = await dialogs.create_context(turn, stack).begin_dialog(dialog_id, options)
    return stack, turn, result


async def _reply(dialogs, make_turn, stack, text, **kwargs):
    turn = make_turn(text, **kwargs)
    result = await dialogs.create_context(turn, stack).continue_dialog()
    return turn, result


def _texts(turn):
    return [a.text for a in turn.sent_activities]


class TestTextPrompt:
    """Tests for TextPrompt."""

    @pytest.mark.asyncio
    async def test_renders_and_waits(self, make_turn):
        """Test that beginning a prompt asks the question and waits."""
        dialogs = DialogSet([TextPrompt("text")])

        stack, turn, result = await _start(dialogs, make_turn, "text", "Your name?")

        assert result.status == DialogTurnStatus.WAITING
        assert _texts(turn) == ["Your name?"]
        assert stack[-1].state["attemptCount"] == 0

    @pytest.mark.asyncio
    async def test_blank_input_retries(self, make_turn):
        """Test that whitespace is not an answer."""
        dialogs = DialogSet([TextPrompt("text")])
        stack, _, _ = await _start(
            dialogs,
            make_turn,
            "text",
            PromptOptions(prompt="Your name?", retry_prompt="Please type a name."),
        )

        turn, result = await _reply(dialogs, make_turn, stack, "   ")

        assert result.status == DialogTurnStatus.WAITING
        assert _texts(turn) == ["Please type a name."]
        assert stack[-1].state["attemptCount"] == 1

    @pytest.mark.asyncio
    async def test_answer_is_stripped_result(self, make_turn):
        """Test that a valid answer ends the prompt with the trimmed text."""
        dialogs = DialogSet([TextPrompt("text")])
        stack, _, _ = await _start(dialogs, make_turn, "text", "Your name?")

        _, result = await _reply(dialogs, make_turn, stack, "  Alice  ")

        assert result.status == DialogTurnStatus.COMPLETE
        assert result.result == "Alice"
        assert stack == []

    @pytest.mark.asyncio
    async def test_non_message_reprompts(self, make_turn):
        """Test that a non-message turn repeats the question without counting."""
        dialogs = DialogSet([TextPrompt("text")])
        stack, _, _ = await _start(dialogs, make_turn, "text", "Your name?")

        turn, result = await _reply(
            dialogs, make_turn, stack, None, type=ActivityType.EVENT
        )

        assert result.status == DialogTurnStatus.WAITING
        assert _texts(turn) == ["Your name?"]
        assert stack[-1].state["attemptCount"] == 0

    @pytest.mark.asyncio
    async def test_custom_validator(self, make_turn):
        """Test that a validator can reject recognized input."""

        async def at_least_three(ctx):
            return ctx.recognized.succeeded and len(ctx.recognized.value) >= 3

        dialogs = DialogSet([TextPrompt("text", validator=at_least_three)])
        stack, _, _ = await _start(dialogs, make_turn, "text", "Your name?")

        _, short = await _reply(dialogs, make_turn, stack, "Al")
        _, good = await _reply(dialogs, make_turn, stack, "Alice")

        assert short.status == DialogTurnStatus.WAITING
        assert good.result == "Alice"


class TestConfirmPrompt:
    """Tests for ConfirmPrompt."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "text,expected",
        [("yes", True), ("Y", True), ("ok", True), ("no", False), ("Nope", False)],
    )
    async def test_recognizes_tokens(self, make_turn, text, expected):
        """Test yes/no tokens, case-insensitive."""
        dialogs = DialogSet([ConfirmPrompt("yn")])
        stack, _, _ = await _start(dialogs, make_turn, "yn", "Continue?")

        _, result = await _reply(dialogs, make_turn, stack, text)

        assert result.status == DialogTurnStatus.COMPLETE
        assert result.result is expected

    @pytest.mark.asyncio
    async def test_unrecognized_uses_default_retry(self, make_turn):
        """Test the default retry text for anything else."""
        dialogs = DialogSet([ConfirmPrompt("yn")])
        stack, _, _ = await _start(dialogs, make_turn, "yn", "Continue?")

        turn, result = await _reply(dialogs, make_turn, stack, "maybe")

        assert result.status == DialogTurnStatus.WAITING
        assert _texts(turn) == ["Please answer yes or no."]

    @pytest.mark.asyncio
    async def test_suggests_yes_and_no(self, make_turn):
        """Test the suggested actions on the question."""
        dialogs = DialogSet([ConfirmPrompt("yn")])

        _, turn, _ = await _start(dialogs, make_turn, "yn", "Continue?")

        assert turn.sent_activities[0].suggested_actions == ["Yes", "No"]

    @pytest.mark.asyncio
    async def test_max_attempts_gives_up_with_none(self, make_turn):
        """Test that a capped prompt ends with None after the last bad answer."""
        dialogs = DialogSet([ConfirmPrompt("yn")])
        stack, _, _ = await _start(
            dialogs, make_turn, "yn", PromptOptions(prompt="Continue?", max_attempts=2)
        )

        _, first = await _reply(dialogs, make_turn, stack, "maybe")
        _, second = await _reply(dialogs, make_turn, stack, "perhaps")

        assert first.status == DialogTurnStatus.WAITING
        assert second.status == DialogTurnStatus.COMPLETE
        assert second.result is None


class TestChoicePrompt:
    """Tests for ChoicePrompt."""

    @pytest.mark.asyncio
    async def test_renders_inline_choices(self, make_turn):
        """Test that the question lists the choices."""
        dialogs = DialogSet([ChoicePrompt("pick")])

        _, turn, _ = await _start(
            dialogs,
            make_turn,
            "pick",
            PromptOptions(prompt="Which?", choices=["Email", "Phone", "Twitter"]),
        )

        assert _texts(turn) == ["Which? (1) Email, (2) Phone, or (3) Twitter"]
        assert turn.sent_activities[0].suggested_actions == ["Email", "Phone", "Twitter"]

    @pytest.mark.asyncio
    async def test_match_ignores_case_and_returns_canonical(self, make_turn):
        """Test case-insensitive matching."""
        dialogs = DialogSet([ChoicePrompt("pick")])
        stack, _, _ = await _start(
            dialogs, make_turn, "pick", PromptOptions(prompt="Which?", choices=["Email"])
        )

        _, result = await _reply(dialogs, make_turn, stack, "EMAIL")

        assert result.result == "Email"

    @pytest.mark.asyncio
    async def test_unknown_choice_retries(self, make_turn):
        """Test that an unlisted answer re-asks."""
        dialogs = DialogSet([ChoicePrompt("pick")])
        stack, _, _ = await _start(
            dialogs,
            make_turn,
            "pick",
            PromptOptions(prompt="Which?", choices=["Email", "Phone"]),
        )

        turn, result = await _reply(dialogs, make_turn, stack, "Fax")

        assert result.status == DialogTurnStatus.WAITING
        assert _texts(turn) == ["Which? (1) Email or (2) Phone"]


class TestPromptOptions:
    """Tests for PromptOptions coercion."""

    def test_coerce(self):
        """Test the accepted option shapes."""
        assert PromptOptions.coerce(None) == PromptOptions()
        assert PromptOptions.coerce("Hi?") == PromptOptions(prompt="Hi?")
        assert PromptOptions.coerce({"prompt": "Hi?", "maxAttempts": 3}) == PromptOptions(
            prompt="Hi?", max_attempts=3
        )
        with pytest.raises(TypeError):
            PromptOptions.coerce(42)

    def test_format_inline_choices(self):
        """Test choice list rendering."""
        assert format_inline_choices(["A"]) == "(1) A"
        assert format_inline_choices(["A", "B"]) == "(1) A or (2) B"
