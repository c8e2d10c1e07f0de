"""SQLite storage implementation."""

import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Literal, Protocol

import aiosqlite

from ..config import resolve_db_path
from ..models import Activity, TraceEvent

Direction = Literal["inbound", "outbound"]


@dataclass
class StoreItem:
    """An opaque versioned blob stored under (scope, key)."""

    scope: str
    key: str
    data: dict[str, Any]
    version: int
    updated_at: datetime


@dataclass
class TranscriptEntry:
    """An activity recorded in a conversation transcript."""

    direction: Direction
    activity: Activity


class IStorage(Protocol):
    """Persistent storage for state records, transcripts and trace events."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    # State records
    async def read(self, scope: str, key: str) -> StoreItem | None:
        """Read a state record."""
        ...

    async def write(self, scope: str, key: str, data: dict[str, Any]) -> int:
        """Write a state record, last write wins. Returns the new version."""
        ...

    # Transcript
    async def save_activity(self, activity: Activity, direction: Direction) -> None:
        """Append an activity to its conversation transcript."""
        ...

    async def get_activities(
        self, conversation_id: str, after: datetime | None = None
    ) -> list[TranscriptEntry]:
        """Get a conversation transcript, optionally after a timestamp."""
        ...

    async def has_conversation(self, conversation_id: str) -> bool:
        """Check whether any activity was recorded for a conversation."""
        ...

    # TraceEvents
    async def save_trace_event(self, event: TraceEvent) -> None:
        """Save a trace event."""
        ...

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        conversation_id: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters."""
        ...

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        ...


def _parse_ts(value: str) -> datetime:
    ts = datetime.fromisoformat(value)
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


class Storage:
    """SQLite storage implementation."""

    def __init__(self, db_path: str | Path | None = None):
        if db_path is None:
            self._db_path = resolve_db_path()
        else:
            self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Initialize database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    def _require_conn(self) -> aiosqlite.Connection:
        if not self._conn:
            raise RuntimeError("Storage not initialized")
        return self._conn

    # State records
    async def read(self, scope: str, key: str) -> StoreItem | None:
        """Read a state record."""
        conn = self._require_conn()

        cursor = await conn.execute(
            """
            SELECT scope, key, data, version, updated_at
            FROM state_records
            WHERE scope = ? AND key = ?
            """,
            (scope, key),
        )
        row = await cursor.fetchone()

        if not row:
            return None

        return StoreItem(
            scope=row[0],
            key=row[1],
            data=json.loads(row[2]),
            version=row[3],
            updated_at=_parse_ts(row[4]),
        )

    async def write(self, scope: str, key: str, data: dict[str, Any]) -> int:
        """Write a state record, last write wins. Returns the new version."""
        conn = self._require_conn()

        await conn.execute(
            """
            INSERT INTO state_records (scope, key, data, version, updated_at)
            VALUES (?, ?, ?, 1, ?)
            ON CONFLICT (scope, key) DO UPDATE SET
                data = excluded.data,
                version = state_records.version + 1,
                updated_at = excluded.updated_at
            """,
            (
                scope,
                key,
                json.dumps(data),
                datetime.now(timezone.utc).isoformat(),
            ),
        )
        await conn.commit()

        cursor = await conn.execute(
            "SELECT version FROM state_records WHERE scope = ? AND key = ?",
            (scope, key),
        )
        row = await cursor.fetchone()
        return row[0]

    # Transcript
    async def save_activity(self, activity: Activity, direction: Direction) -> None:
        """Append an activity to its conversation transcript."""
        conn = self._require_conn()

        await conn.execute(
            """
            INSERT OR REPLACE INTO activities
            (id, conversation_id, direction, payload, timestamp)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                activity.id or str(uuid.uuid4()),
                activity.conversation_id,
                direction,
                json.dumps(activity.to_dict()),
                activity.timestamp.isoformat(),
            ),
        )
        await conn.commit()

    async def get_activities(
        self, conversation_id: str, after: datetime | None = None
    ) -> list[TranscriptEntry]:
        """Get a conversation transcript, optionally after a timestamp."""
        conn = self._require_conn()

        if after:
            cursor = await conn.execute(
                """
                SELECT direction, payload
                FROM activities
                WHERE conversation_id = ? AND timestamp > ?
                ORDER BY timestamp ASC, rowid ASC
                """,
                (conversation_id, after.isoformat()),
            )
        else:
            cursor = await conn.execute(
                """
                SELECT direction, payload
                FROM activities
                WHERE conversation_id = ?
                ORDER BY timestamp ASC, rowid ASC
                """,
                (conversation_id,),
            )

        rows = await cursor.fetchall()

        return [
            TranscriptEntry(
                direction=row[0],
                activity=Activity.from_dict(json.loads(row[1])),
            )
            for row in rows
        ]

    async def has_conversation(self, conversation_id: str) -> bool:
        """Check whether any activity was recorded for a conversation."""
        conn = self._require_conn()

        cursor = await conn.execute(
            "SELECT 1 FROM activities WHERE conversation_id = ? LIMIT 1",
            (conversation_id,),
        )
        return await cursor.fetchone() is not None

    # TraceEvents
    async def save_trace_event(self, event: TraceEvent) -> None:
        """Save a trace event."""
        conn = self._require_conn()

        await conn.execute(
            """
            INSERT INTO trace_events (id, event_type, actor, data, timestamp)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                event.id or str(uuid.uuid4()),
                event.event_type,
                event.actor,
                json.dumps(event.data, default=str),
                event.timestamp.isoformat(),
            ),
        )
        await conn.commit()

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        conversation_id: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters."""
        conn = self._require_conn()

        conditions = []
        params: list[Any] = []

        if after:
            conditions.append("timestamp > ?")
            params.append(after.isoformat())
        if event_types:
            placeholders = ",".join("?" * len(event_types))
            conditions.append(f"event_type IN ({placeholders})")
            params.extend(event_types)
        if actor:
            conditions.append("actor = ?")
            params.append(actor)
        if conversation_id:
            conditions.append("json_extract(data, '$.conversation_id') = ?")
            params.append(conversation_id)

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        query = f"""
            SELECT id, event_type, actor, data, timestamp
            FROM trace_events
            {where_clause}
            ORDER BY timestamp DESC
            LIMIT ?
        """
        params.append(limit)

        cursor = await conn.execute(query, params)
        rows = await cursor.fetchall()

        return [
            TraceEvent(
                id=row[0],
                event_type=row[1],
                actor=row[2],
                data=json.loads(row[3]),
                timestamp=_parse_ts(row[4]),
            )
            for row in rows
        ]

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        conn = self._require_conn()

        for table in ["state_records", "activities", "trace_events"]:
            await conn.execute(f"DELETE FROM {table}")

        await conn.commit()
