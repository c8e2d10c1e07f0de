"""Intent recognizers module."""

from .recognizer import (
    AGENT_PROVISION,
    CONNECTION_CREATE_INVITATION,
    CREDENTIAL_ISSUE,
    CREDENTIAL_TYPE_ENTITY,
    NONE_INTENT,
    IIntentRecognizer,
    KeywordIntentRecognizer,
    LLMIntentRecognizer,
    RecognizerResult,
)

__all__ = [
    "AGENT_PROVISION",
    "CONNECTION_CREATE_INVITATION",
    "CREDENTIAL_ISSUE",
    "CREDENTIAL_TYPE_ENTITY",
    "NONE_INTENT",
    "IIntentRecognizer",
    "KeywordIntentRecognizer",
    "LLMIntentRecognizer",
    "RecognizerResult",
]
