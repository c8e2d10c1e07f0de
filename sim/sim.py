"""SIM implementation - scripted invitation handshake between two users."""

import asyncio
from typing import Protocol
from urllib.parse import urlsplit

import httpx

from agentbot.logging_config import get_logger
from agentbot.tracker import ITracker

logger = get_logger(__name__)

BOT_ACCOUNT = {"id": "agentbot", "name": "AgentBot"}


class ISim(Protocol):
    """Drives the bot over HTTP."""

    async def start(self) -> None:
        """Start scripted scenario."""
        ...

    async def stop(self) -> None:
        """Stop scenario."""
        ...


class Sim:
    """Two users provision agents, exchange an invitation and get connected.

    Alice creates an invitation, Bob pastes it and accepts. The SIM then
    plays the remote side by completing Alice's pending connection, which
    makes the bot message Alice proactively.
    """

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        tracker: ITracker | None = None,
        delay: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_url = api_url
        self._transport = transport
        self._tracker = tracker
        self._delay = delay
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None

    def set_tracker(self, tracker: ITracker) -> None:
        """Inject tracker for SIM trace events."""
        self._tracker = tracker

    async def start(self) -> None:
        """Start scripted scenario."""
        if self._running:
            return

        self._running = True
        self._client = httpx.AsyncClient(
            base_url=self._api_url, transport=self._transport, timeout=10.0
        )

        # Start background task
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        """Stop scenario."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

        if self._client:
            await self._client.aclose()
            self._client = None

    async def _run_scenario(self) -> None:
        await self._track("sim_started", {"scenario": "invitation_handshake"})
        outcome = "incomplete"
        try:
            outcome = await self._handshake()
        except asyncio.CancelledError:
            outcome = "cancelled"
            raise
        except httpx.HTTPError as e:
            logger.error("SIM scenario error: %s", e)
            outcome = "error"
        finally:
            self._running = False
            await self._track(
                "sim_completed", {"scenario": "invitation_handshake", "outcome": outcome}
            )

    async def _handshake(self) -> str:
        alice = ("sim-alice", "user_alice", "Alice")
        bob = ("sim-bob", "user_bob", "Bob")

        for conversation_id, user_id, name in (alice, bob):
            await self._send(
                conversation_id,
                user_id,
                type="conversationUpdate",
                members_added=[BOT_ACCOUNT],
            )
            await self._send(conversation_id, user_id, "provision a new agent")
            await self._send(conversation_id, user_id, f"{name} Agent")

        replies = await self._send(*alice[:2], "create an invitation")
        invitation_url = next(
            (r["text"] for r in replies if (r.get("text") or "").startswith("http")),
            None,
        )
        if not invitation_url or not self._running:
            logger.warning("SIM: no invitation received")
            return "no_invitation"

        await self._send(*bob[:2], invitation_url)
        await self._send(*bob[:2], "yes")

        # The invitation endpoint ends with the inviting agent's id
        agent_id = urlsplit(invitation_url).path.rstrip("/").rsplit("/", 1)[-1]
        response = await self._client.get(f"/api/agents/{agent_id}/connections")
        response.raise_for_status()
        pending = [c for c in response.json() if c["status"] == "invited"]
        for connection in pending:
            await self._client.post(
                f"/api/agents/{agent_id}/connections/{connection['id']}/complete",
                json={"their_label": "Bob Agent"},
            )

        await asyncio.sleep(self._delay)
        transcript = await self._client.get(
            f"/api/conversations/{alice[0]}/activities"
        )
        transcript.raise_for_status()
        connected = any(
            (e["activity"].get("text") or "").startswith("You are now connected")
            for e in transcript.json()
        )
        logger.info("SIM: Alice notified of connection: %s", connected)
        return "connected" if connected else "not_notified"

    async def _send(
        self,
        conversation_id: str,
        user_id: str,
        text: str | None = None,
        **fields,
    ) -> list[dict]:
        """Post an activity and return the bot's replies."""
        if not self._client:
            return []

        payload = {
            "type": "message",
            "conversation_id": conversation_id,
            "from": {"id": user_id},
            "recipient": BOT_ACCOUNT,
            "text": text,
            **fields,
        }
        response = await self._client.post("/api/messages", json=payload)
        if response.status_code != 200:
            logger.error("SIM: Error sending message: %s", response.status_code)
            return []

        replies = response.json().get("activities", [])
        logger.info("SIM: %s -> %s", user_id, text)
        for reply in replies:
            logger.info("SIM: Response: %s", reply.get("text") or reply.get("type"))

        await asyncio.sleep(self._delay)
        return replies

    async def _track(self, event_type: str, data: dict) -> None:
        if self._tracker:
            await self._tracker.track(event_type, "sim", data)
