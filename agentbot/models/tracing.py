"""Tracing and observability data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TraceEvent:
    """A single observability event (turns, dialogs, bus deliveries)."""

    id: str
    event_type: str  # e.g. "turn_processed", "conversation_resumed"
    actor: str  # component that created this event
    data: dict  # self-contained details for display
    timestamp: datetime
