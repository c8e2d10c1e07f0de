"""Replay-buffered EventBus for out-of-band service events."""

import asyncio
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Protocol

from ..logging_config import get_logger
from ..models import ServiceEvent
from ..tracker import ITracker, NullTracker

logger = get_logger(__name__)


EventPredicate = Callable[[ServiceEvent], bool]
EventCallback = Callable[[ServiceEvent], Awaitable[None]]


@dataclass(eq=False)
class Subscription:
    """A one-shot interest in the first event matching predicate."""

    predicate: EventPredicate
    callback: EventCallback
    created_at: float
    expires_at: float
    spent: bool = False
    cancelled: bool = False
    task: asyncio.Task | None = field(default=None, repr=False)

    def is_active(self, now: float) -> bool:
        return not self.spent and not self.cancelled and now <= self.expires_at

    def cancel(self) -> None:
        """Stop waiting. Has no effect on a callback that already started."""
        self.cancelled = True


class IEventBus(Protocol):
    """In-memory pub/sub with a time-bounded replay buffer."""

    def subscribe(
        self, predicate: EventPredicate, callback: EventCallback
    ) -> Subscription:
        """Fire callback once for the first past or future matching event."""
        ...

    async def publish(self, event: ServiceEvent) -> None:
        """Buffer event and deliver it to matching subscriptions."""
        ...


class EventBus:
    """In-memory pub/sub event bus with replay window.

    Events stay replayable for replay_window seconds after publish, and a
    subscription lives for the same window unless it fires first. Callbacks
    run as separate asyncio tasks so publish never waits on them.
    """

    def __init__(
        self,
        replay_window: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
        tracker: ITracker | None = None,
    ):
        if replay_window <= 0:
            raise ValueError("replay_window must be positive")
        self._window = replay_window
        self._clock = clock
        self._tracker = tracker or NullTracker()
        self._buffer: deque[tuple[float, ServiceEvent]] = deque()
        self._subscriptions: list[Subscription] = []
        self._tasks: set[asyncio.Task] = set()

    @property
    def replay_window(self) -> float:
        return self._window

    def subscribe(
        self, predicate: EventPredicate, callback: EventCallback
    ) -> Subscription:
        """Fire callback once for the first past or future matching event."""
        now = self._clock()
        self._prune(now)

        subscription = Subscription(
            predicate=predicate,
            callback=callback,
            created_at=now,
            expires_at=now + self._window,
        )

        for _, event in self._buffer:
            if self._matches(subscription, event):
                self._deliver(subscription, event)
                return subscription

        self._subscriptions.append(subscription)
        return subscription

    async def publish(self, event: ServiceEvent) -> None:
        """Buffer event and deliver it to matching subscriptions."""
        now = self._clock()
        self._prune(now)
        self._buffer.append((now, event))

        delivered = 0
        for subscription in self._subscriptions:
            if subscription.is_active(now) and self._matches(subscription, event):
                self._deliver(subscription, event)
                delivered += 1
        self._subscriptions = [s for s in self._subscriptions if s.is_active(now)]

        logger.info(
            "Published %s for %s to %s subscriber(s)",
            event.kind.value,
            event.correlation_id,
            delivered,
            extra={"context": {"correlation_id": event.correlation_id}},
        )
        await self._tracker.track(
            event_type="event_published",
            actor="event_bus",
            data={
                "kind": event.kind.value,
                "correlation_id": event.correlation_id,
                "delivered": delivered,
            },
        )

    async def join(self) -> None:
        """Wait for every callback started so far to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Cancel pending callbacks and forget all subscriptions and events."""
        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*list(self._tasks), return_exceptions=True)
        self._subscriptions.clear()
        self._buffer.clear()

    def pending_subscriptions(self) -> int:
        now = self._clock()
        return sum(1 for s in self._subscriptions if s.is_active(now))

    def _prune(self, now: float) -> None:
        cutoff = now - self._window
        while self._buffer and self._buffer[0][0] < cutoff:
            self._buffer.popleft()
        self._subscriptions = [s for s in self._subscriptions if s.is_active(now)]

    @staticmethod
    def _matches(subscription: Subscription, event: ServiceEvent) -> bool:
        try:
            return bool(subscription.predicate(event))
        except Exception as e:
            logger.error("Error in subscription predicate: %s", e, exc_info=True)
            return False

    def _deliver(self, subscription: Subscription, event: ServiceEvent) -> None:
        subscription.spent = True
        task = asyncio.create_task(subscription.callback(event))
        subscription.task = task
        self._tasks.add(task)
        task.add_done_callback(self._on_callback_done)

    def _on_callback_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Error in subscription callback: %s",
                exc,
                exc_info=(type(exc), exc, exc.__traceback__),
            )
