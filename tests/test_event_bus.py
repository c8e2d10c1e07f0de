"""Tests for EventBus."""

import asyncio

import pytest

from agentbot.event_bus import EventBus
from agentbot.models import EventKind, ServiceEvent


def _event(correlation_id: str = "c1", kind: EventKind = EventKind.CONNECTION_REQUEST):
    return ServiceEvent(kind=kind, correlation_id=correlation_id)


def _recorder():
    calls = []

    async def handler(event: ServiceEvent):
        calls.append(event)

    return calls, handler


def _for(correlation_id: str):
    return lambda e: e.correlation_id == correlation_id


class TestEventBusDelivery:
    """Tests for live delivery."""

    @pytest.mark.asyncio
    async def test_publish_to_matching_subscriber(self, event_bus):
        """Test that a matching event reaches the subscriber."""
        calls, handler = _recorder()
        event_bus.subscribe(_for("c1"), handler)

        await event_bus.publish(_event("c1"))
        await event_bus.join()

        assert calls == [_event("c1")]

    @pytest.mark.asyncio
    async def test_non_matching_event_ignored(self, event_bus):
        """Test that the predicate filters events."""
        calls, handler = _recorder()
        event_bus.subscribe(_for("c1"), handler)

        await event_bus.publish(_event("other"))
        await event_bus.join()

        assert calls == []
        assert event_bus.pending_subscriptions() == 1

    @pytest.mark.asyncio
    async def test_subscription_fires_once(self, event_bus):
        """Test that a subscription is spent after its first event."""
        calls, handler = _recorder()
        event_bus.subscribe(_for("c1"), handler)

        await event_bus.publish(_event("c1"))
        await event_bus.publish(_event("c1"))
        await event_bus.join()

        assert len(calls) == 1
        assert event_bus.pending_subscriptions() == 0

    @pytest.mark.asyncio
    async def test_independent_subscriptions(self, event_bus):
        """Test that concurrent watchers only see their own events."""
        calls_a, handler_a = _recorder()
        calls_b, handler_b = _recorder()
        event_bus.subscribe(_for("a"), handler_a)
        event_bus.subscribe(_for("b"), handler_b)

        await event_bus.publish(_event("b"))
        await event_bus.publish(_event("a"))
        await event_bus.join()

        assert [e.correlation_id for e in calls_a] == ["a"]
        assert [e.correlation_id for e in calls_b] == ["b"]

    @pytest.mark.asyncio
    async def test_publish_does_not_wait_for_callbacks(self, event_bus):
        """Test that publish returns while a callback is still running."""
        release = asyncio.Event()
        finished = []

        async def slow(event):
            await release.wait()
            finished.append(event)

        event_bus.subscribe(_for("c1"), slow)

        await asyncio.wait_for(event_bus.publish(_event("c1")), timeout=1)
        assert finished == []

        release.set()
        await event_bus.join()
        assert len(finished) == 1

    @pytest.mark.asyncio
    async def test_cancelled_subscription_not_delivered(self, event_bus):
        """Test that cancel stops a pending subscription."""
        calls, handler = _recorder()
        subscription = event_bus.subscribe(_for("c1"), handler)

        subscription.cancel()
        await event_bus.publish(_event("c1"))
        await event_bus.join()

        assert calls == []


class TestEventBusReplay:
    """Tests for the replay window."""

    @pytest.mark.asyncio
    async def test_late_subscriber_gets_buffered_event(self, event_bus, clock):
        """Test that an event published before subscribing is replayed."""
        await event_bus.publish(_event("c1"))
        clock.advance(30)

        calls, handler = _recorder()
        event_bus.subscribe(_for("c1"), handler)
        await event_bus.join()

        assert calls == [_event("c1")]

    @pytest.mark.asyncio
    async def test_replay_delivers_only_first_match(self, event_bus):
        """Test that a replayed subscription is one-shot too."""
        await event_bus.publish(_event("c1", EventKind.CONNECTION_REQUEST))
        await event_bus.publish(_event("c1", EventKind.CONNECTION_RESPONSE))

        calls, handler = _recorder()
        event_bus.subscribe(_for("c1"), handler)
        await event_bus.join()

        assert [e.kind for e in calls] == [EventKind.CONNECTION_REQUEST]

    @pytest.mark.asyncio
    async def test_replay_follows_publish_order(self, event_bus, clock):
        """Test that late subscribers see the earliest buffered match first."""
        for correlation_id in ["a", "b", "c"]:
            await event_bus.publish(_event(correlation_id))
            clock.advance(1)

        calls_bc, handler_bc = _recorder()
        calls_any, handler_any = _recorder()
        event_bus.subscribe(lambda e: e.correlation_id in ("c", "b"), handler_bc)
        event_bus.subscribe(lambda e: True, handler_any)
        await event_bus.join()

        assert [e.correlation_id for e in calls_bc] == ["b"]
        assert [e.correlation_id for e in calls_any] == ["a"]

    @pytest.mark.asyncio
    async def test_event_older_than_window_not_replayed(self, event_bus, clock):
        """Test that buffered events expire."""
        await event_bus.publish(_event("c1"))
        clock.advance(61)

        calls, handler = _recorder()
        event_bus.subscribe(_for("c1"), handler)
        await event_bus.join()

        assert calls == []
        assert event_bus.pending_subscriptions() == 1

    @pytest.mark.asyncio
    async def test_subscription_expires_after_window(self, event_bus, clock):
        """Test that a subscription is dropped once the window passes."""
        calls, handler = _recorder()
        event_bus.subscribe(_for("c1"), handler)
        clock.advance(61)

        await event_bus.publish(_event("c1"))
        await event_bus.join()

        assert calls == []
        assert event_bus.pending_subscriptions() == 0

    def test_window_must_be_positive(self):
        """Test constructor validation."""
        with pytest.raises(ValueError):
            EventBus(replay_window=0)


class TestEventBusErrorHandling:
    """Tests for EventBus error handling."""

    @pytest.mark.asyncio
    async def test_callback_error_does_not_break_others(self, event_bus):
        """Test that one failing callback does not affect another."""
        calls, handler = _recorder()

        async def broken(event):
            raise RuntimeError("boom")

        event_bus.subscribe(_for("c1"), broken)
        event_bus.subscribe(_for("c1"), handler)

        await event_bus.publish(_event("c1"))
        await event_bus.join()

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_predicate_error_is_no_match(self, event_bus):
        """Test that a raising predicate is treated as not matching."""
        calls, handler = _recorder()

        def bad_predicate(event):
            raise KeyError("nope")

        event_bus.subscribe(bad_predicate, handler)
        await event_bus.publish(_event("c1"))
        await event_bus.join()

        assert calls == []

    @pytest.mark.asyncio
    async def test_publish_is_traced(self, event_bus, storage):
        """Test that publishing records a trace event."""
        await event_bus.publish(_event("c1"))

        events = await storage.get_trace_events(event_types=["event_published"])

        assert len(events) == 1
        assert events[0].data["correlation_id"] == "c1"
        assert events[0].data["delivered"] == 0

    @pytest.mark.asyncio
    async def test_close_forgets_everything(self, event_bus):
        """Test that close drops subscriptions and the buffer."""
        calls, handler = _recorder()
        await event_bus.publish(_event("old"))
        event_bus.subscribe(_for("c1"), handler)

        await event_bus.close()
        event_bus.subscribe(_for("old"), handler)
        await event_bus.join()

        assert calls == []
        assert event_bus.pending_subscriptions() == 1
