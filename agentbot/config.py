"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
LOGS_DIR = PROJECT_ROOT / "logs"
DEFAULT_DB_PATH = DATA_DIR / "agentbot.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        DATA_DIR.mkdir(parents=True, exist_ok=True)
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Runtime settings, read from the environment."""

    database_url: str | None = None
    log_level: str = "INFO"
    log_file: str | None = None
    agent_endpoint_host: str = "http://localhost:8000/agents/"
    agent_wallet_key: str = "DefaultKey"
    event_replay_window: float = 3600.0
    serialize_turns: bool = True
    intent_score_threshold: float = 0.7
    anthropic_api_key: str | None = field(default=None, repr=False)
    anthropic_model: str = "claude-3-5-sonnet-20241022"
    api_host: str = "localhost"
    api_port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            database_url=os.getenv("DATABASE_URL"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE") or None,
            agent_endpoint_host=os.getenv(
                "AGENT_ENDPOINT_HOST", "http://localhost:8000/agents/"
            ),
            agent_wallet_key=os.getenv("AGENT_WALLET_KEY", "DefaultKey"),
            event_replay_window=float(
                os.getenv("EVENT_REPLAY_WINDOW_SECONDS", "3600")
            ),
            serialize_turns=_env_bool("SERIALIZE_TURNS", True),
            intent_score_threshold=float(os.getenv("INTENT_SCORE_THRESHOLD", "0.7")),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            anthropic_model=os.getenv(
                "ANTHROPIC_MODEL", "claude-3-5-sonnet-20241022"
            ),
            api_host=os.getenv("API_HOST", "localhost"),
            api_port=int(os.getenv("API_PORT", "8000")),
        )
