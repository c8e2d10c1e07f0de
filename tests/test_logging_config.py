"""Tests for the JSON log formatter."""

import json
import logging

from agentbot.logging_config import JSONFormatter


def _record(context=None) -> logging.LogRecord:
    record = logging.LogRecord(
        name="agentbot.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Resumed %s",
        args=("conv-1",),
        exc_info=None,
    )
    if context is not None:
        record.context = context
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_conversation_ids_are_top_level(self):
        """Test that conversation and correlation ids leave the context dict."""
        line = JSONFormatter().format(
            _record({"conversation_id": "conv-1", "correlation_id": "c1", "kind": "x"})
        )

        data = json.loads(line)
        assert data["message"] == "Resumed conv-1"
        assert data["conversation_id"] == "conv-1"
        assert data["correlation_id"] == "c1"
        assert data["context"] == {"kind": "x"}

    def test_without_context(self):
        """Test a record logged without extra context."""
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert "context" not in data
        assert "conversation_id" not in data

    def test_context_is_not_mutated(self):
        """Test that formatting leaves the record's context intact."""
        context = {"conversation_id": "conv-1"}
        record = _record(context)

        JSONFormatter().format(record)

        assert context == {"conversation_id": "conv-1"}
