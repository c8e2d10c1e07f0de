"""Intent recognizers used when no dialog is active."""

import json
import re
from dataclasses import dataclass, field
from typing import Protocol

from ..errors import ExternalServiceError
from ..llm import ILLMProvider
from ..logging_config import get_logger

logger = get_logger(__name__)

AGENT_PROVISION = "Agent_Provision"
CONNECTION_CREATE_INVITATION = "Connection_CreateInvitation"
CREDENTIAL_ISSUE = "Credential_Issue"
NONE_INTENT = "None"

KNOWN_INTENTS = (AGENT_PROVISION, CONNECTION_CREATE_INVITATION, CREDENTIAL_ISSUE)
CREDENTIAL_TYPE_ENTITY = "CredentialType"


@dataclass
class RecognizerResult:
    """Top intent with its confidence and extracted entities."""

    text: str
    intent: str = NONE_INTENT
    score: float = 0.0
    entities: dict[str, str] = field(default_factory=dict)


class IIntentRecognizer(Protocol):
    """Maps free text to an intent."""

    async def recognize(self, text: str) -> RecognizerResult:
        ...


class KeywordIntentRecognizer:
    """Pattern-based recognizer for deployments without an LLM."""

    # First match wins
    _PATTERNS = (
        (
            CONNECTION_CREATE_INVITATION,
            re.compile(r"\b(invite|invitation|connect)\b", re.I),
        ),
        (
            AGENT_PROVISION,
            re.compile(r"\b(provision|create|new|set ?up)\b.*\bagent\b", re.I),
        ),
        (CREDENTIAL_ISSUE, re.compile(r"\bcredentials?\b", re.I)),
    )
    _CREDENTIAL_TYPES = re.compile(r"\b(email|phone|twitter)\b", re.I)

    async def recognize(self, text: str) -> RecognizerResult:
        for intent, pattern in self._PATTERNS:
            if pattern.search(text or ""):
                entities = {}
                if intent == CREDENTIAL_ISSUE:
                    match = self._CREDENTIAL_TYPES.search(text)
                    if match:
                        entities[CREDENTIAL_TYPE_ENTITY] = match.group(1).capitalize()
                return RecognizerResult(
                    text=text, intent=intent, score=0.9, entities=entities
                )
        return RecognizerResult(text=text)


SYSTEM_PROMPT = """You classify messages sent to a digital identity agent bot.
Intents:
- Agent_Provision: the user wants to create or set up their agent.
- Connection_CreateInvitation: the user wants an invitation to connect with someone.
- Credential_Issue: the user wants a credential issued. Entity CredentialType is one of Email, Phone, Twitter.
- None: anything else.
Reply with JSON only: {"intent": "<name>", "score": <0..1>, "entities": {"CredentialType": "<value>"}}"""


class LLMIntentRecognizer:
    """Asks the LLM to classify the message into one of the bot's intents."""

    def __init__(self, llm: ILLMProvider):
        self._llm = llm

    async def recognize(self, text: str) -> RecognizerResult:
        try:
            raw = await self._llm.complete(
                messages=[{"role": "user", "content": text}],
                system=SYSTEM_PROMPT,
                max_tokens=200,
            )
        except ExternalServiceError as e:
            logger.error("Intent recognition failed: %s", e)
            return RecognizerResult(text=text)

        return self._parse(text, raw)

    @staticmethod
    def _parse(text: str, raw: str) -> RecognizerResult:
        start, end = raw.find("{"), raw.rfind("}")
        try:
            data = json.loads(raw[start : end + 1]) if start != -1 else {}
            score = float(data.get("score", 0.0))
        except (json.JSONDecodeError, TypeError, ValueError):
            logger.warning("Unparseable recognizer output: %s", raw[:200])
            return RecognizerResult(text=text)

        entities = {
            str(k): str(v)
            for k, v in (data.get("entities") or {}).items()
            if v not in (None, "")
        }
        return RecognizerResult(
            text=text,
            intent=str(data.get("intent") or NONE_INTENT),
            score=max(0.0, min(score, 1.0)),
            entities=entities,
        )
