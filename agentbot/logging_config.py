"""Structured logging configuration for AgentBot."""

import json
import logging
import logging.config
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_LOG_PATH

# Identifiers lifted out of extra={"context": ...} so log lines can be grepped per conversation
TOP_LEVEL_CONTEXT_KEYS = ("conversation_id", "correlation_id")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, keyed by conversation where known."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }

        context = dict(getattr(record, "context", None) or {})
        for key in TOP_LEVEL_CONTEXT_KEYS:
            if key in context:
                log_data[key] = context.pop(key)
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = "INFO", log_file: str | None = None) -> None:
    """
    Route all records through JSONFormatter to a rotating file and stdout.

    Args:
        log_level: Root level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Path to log file. Defaults to logs/app.log.
    """
    if log_file is None:
        log_file = str(DEFAULT_LOG_PATH)
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {"()": "agentbot.logging_config.JSONFormatter"},
            },
            "handlers": {
                "file": {
                    "class": "logging.handlers.RotatingFileHandler",
                    "filename": log_file,
                    "maxBytes": 10 * 1024 * 1024,
                    "backupCount": 5,
                    "formatter": "json",
                    "encoding": "utf-8",
                },
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                "aiosqlite": {"level": "WARNING"},
                "anthropic": {"level": "WARNING"},
                "httpx": {"level": "WARNING"},
                "uvicorn.access": {"level": "WARNING"},
            },
            "root": {
                "level": log_level.upper(),
                "handlers": ["file", "console"],
            },
        }
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
