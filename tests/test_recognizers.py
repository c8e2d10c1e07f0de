"""Tests for intent recognizers."""

from unittest.mock import AsyncMock

import pytest

from agentbot.errors import ExternalServiceError
from agentbot.recognizers import (
    AGENT_PROVISION,
    CONNECTION_CREATE_INVITATION,
    CREDENTIAL_ISSUE,
    NONE_INTENT,
    KeywordIntentRecognizer,
    LLMIntentRecognizer,
)


class TestKeywordRecognizer:
    """Tests for KeywordIntentRecognizer."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "text,intent",
        [
            ("provision a new agent", AGENT_PROVISION),
            ("Set up my agent please", AGENT_PROVISION),
            ("create an invitation", CONNECTION_CREATE_INVITATION),
            ("I want to connect with Bob", CONNECTION_CREATE_INVITATION),
            ("issue a credential", CREDENTIAL_ISSUE),
            ("hello there", NONE_INTENT),
            ("", NONE_INTENT),
        ],
    )
    async def test_intents(self, text, intent):
        """Test keyword routing."""
        result = await KeywordIntentRecognizer().recognize(text)

        assert result.intent == intent
        assert result.text == text

    @pytest.mark.asyncio
    async def test_scores(self):
        """Test that matches clear the default threshold and misses do not."""
        recognizer = KeywordIntentRecognizer()

        assert (await recognizer.recognize("new agent")).score > 0.7
        assert (await recognizer.recognize("weather")).score == 0.0

    @pytest.mark.asyncio
    async def test_credential_type_entity(self):
        """Test CredentialType extraction."""
        result = await KeywordIntentRecognizer().recognize("I need a TWITTER credential")

        assert result.entities == {"CredentialType": "Twitter"}

    @pytest.mark.asyncio
    async def test_credential_without_type(self):
        """Test that no entity is produced without a known type."""
        result = await KeywordIntentRecognizer().recognize("credentials please")

        assert result.entities == {}


class TestLLMRecognizer:
    """Tests for LLMIntentRecognizer."""

    @pytest.mark.asyncio
    async def test_parses_json_reply(self, mock_llm):
        """Test a well-formed classification."""
        mock_llm.complete = AsyncMock(
            return_value='{"intent": "Credential_Issue", "score": 0.93, '
            '"entities": {"CredentialType": "Email"}}'
        )

        result = await LLMIntentRecognizer(mock_llm).recognize("email cred")

        assert result.intent == CREDENTIAL_ISSUE
        assert result.score == pytest.approx(0.93)
        assert result.entities == {"CredentialType": "Email"}
        kwargs = mock_llm.complete.call_args.kwargs
        assert kwargs["messages"] == [{"role": "user", "content": "email cred"}]
        assert "Agent_Provision" in kwargs["system"]

    @pytest.mark.asyncio
    async def test_json_inside_prose(self, mock_llm):
        """Test that surrounding text is ignored."""
        mock_llm.complete = AsyncMock(
            return_value='Sure: {"intent": "Agent_Provision", "score": 2} done'
        )

        result = await LLMIntentRecognizer(mock_llm).recognize("agent")

        assert result.intent == AGENT_PROVISION
        assert result.score == 1.0

    @pytest.mark.asyncio
    async def test_empty_entities_dropped(self, mock_llm):
        """Test that blank entity values are not kept."""
        mock_llm.complete = AsyncMock(
            return_value='{"intent": "Credential_Issue", "score": 0.8, '
            '"entities": {"CredentialType": ""}}'
        )

        result = await LLMIntentRecognizer(mock_llm).recognize("credential")

        assert result.entities == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["no json here", '{"intent": "x", "score": "high"}', "{broken"])
    async def test_unparseable_reply_is_none(self, mock_llm, raw):
        """Test that bad output yields the None intent."""
        mock_llm.complete = AsyncMock(return_value=raw)

        result = await LLMIntentRecognizer(mock_llm).recognize("hi")

        assert result.intent == NONE_INTENT
        assert result.score == 0.0

    @pytest.mark.asyncio
    async def test_service_error_is_none(self, mock_llm):
        """Test that an LLM outage falls back to the None intent."""
        mock_llm.complete = AsyncMock(side_effect=ExternalServiceError("down"))

        result = await LLMIntentRecognizer(mock_llm).recognize("hi")

        assert result.intent == NONE_INTENT
