"""EventBus module."""

from .event_bus import EventBus, EventCallback, EventPredicate, IEventBus, Subscription

__all__ = ["EventBus", "EventCallback", "EventPredicate", "IEventBus", "Subscription"]
