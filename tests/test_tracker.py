"""Tests for Tracker."""

from datetime import datetime, timezone

import pytest

from agentbot.tracker import NullTracker


class TestTrackerTrack:
    """Tests for Tracker.track() method."""

    @pytest.mark.asyncio
    async def test_track_creates_event(self, tracker, storage):
        """Test that track() creates a TraceEvent."""
        await tracker.track(
            event_type="test_event",
            actor="test_actor",
            data={"key": "value"},
        )

        events = await storage.get_trace_events()
        assert len(events) == 1
        assert events[0].event_type == "test_event"
        assert events[0].actor == "test_actor"
        assert events[0].data == {"key": "value"}
        assert events[0].id

    @pytest.mark.asyncio
    async def test_track_generates_timestamp(self, tracker, storage):
        """Test that track() stamps events with the current time."""
        before = datetime.now(timezone.utc)
        await tracker.track(event_type="test_event", actor="test_actor", data={})
        after = datetime.now(timezone.utc)

        events = await storage.get_trace_events()
        assert before <= events[0].timestamp <= after

    @pytest.mark.asyncio
    async def test_track_after_storage_closed(self, tracker, storage):
        """Test that tracking during shutdown does not raise."""
        await storage.close()

        await tracker.track(event_type="late", actor="test_actor", data={})

    @pytest.mark.asyncio
    async def test_null_tracker(self):
        """Test that NullTracker accepts events silently."""
        await NullTracker().track(event_type="x", actor="y", data={})
