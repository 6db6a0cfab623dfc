"""WebSocket connection management with table engine integration."""

import asyncio
import logging
import time
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from api.dependencies import create_table
from api.session import extract_session_id
from config import config
from core.game import BlackjackTable, GameEvent

logger = logging.getLogger(__name__)

router = APIRouter()


class ConnectionManager:
    """Manage WebSocket connections and their paced tables."""

    def __init__(self) -> None:
        self._connections: dict[str, WebSocket] = {}
        self._tables: dict[str, BlackjackTable] = {}
        self._event_queues: dict[str, asyncio.Queue[GameEvent]] = {}
        self._last_seen: dict[str, float] = {}

    async def connect(self, websocket: WebSocket, session_id: str) -> None:
        """Accept and register a new connection."""
        await websocket.accept()
        self._connections[session_id] = websocket
        self._event_queues[session_id] = asyncio.Queue()

    def disconnect(self, session_id: str) -> None:
        """Remove a connection."""
        self._connections.pop(session_id, None)
        self._event_queues.pop(session_id, None)
        # Keep the table for reconnection until it has been idle too long
        self._last_seen[session_id] = time.monotonic()

    def get_or_create_table(self, session_id: str) -> BlackjackTable:
        """Get or create a table for the session."""
        self.evict_idle(config.session_ttl)
        if session_id not in self._tables:
            table = create_table(paced=True)
            table.subscribe(lambda event: self._queue_event(session_id, event))
            self._tables[session_id] = table
        self._last_seen[session_id] = time.monotonic()
        return self._tables[session_id]

    def evict_idle(self, max_idle: float, now: float | None = None) -> int:
        """
        Drop tables with no open connection that have been idle too long.

        Returns:
            Number of tables dropped
        """
        now = time.monotonic() if now is None else now
        stale = [
            sid for sid, seen in self._last_seen.items()
            if sid not in self._connections and now - seen > max_idle
        ]
        for sid in stale:
            self._tables.pop(sid, None)
            del self._last_seen[sid]
        if stale:
            logger.debug("Evicted %d idle WebSocket tables", len(stale))
        return len(stale)

    def _queue_event(self, session_id: str, event: GameEvent) -> None:
        """Queue an event for async delivery."""
        queue = self._event_queues.get(session_id)
        if queue is not None:
            queue.put_nowait(event)

    async def next_event(self, session_id: str) -> GameEvent:
        """Wait for the next event of a session."""
        return await self._event_queues[session_id].get()

    async def send_message(self, session_id: str, message: dict[str, Any]) -> None:
        """Send a message to a specific session."""
        websocket = self._connections.get(session_id)
        if websocket is not None:
            await websocket.send_json(message)

    @property
    def active_connections(self) -> int:
        """Return number of active connections."""
        return len(self._connections)

    @property
    def table_count(self) -> int:
        """Return number of tables kept for sessions."""
        return len(self._tables)


# Global connection manager
manager = ConnectionManager()


def _event_to_message(event: GameEvent) -> dict[str, Any]:
    """Convert a table event to a WebSocket message."""
    data = dict(event.data)
    snapshot = data.pop("snapshot")
    return {
        "type": "event",
        "event_type": event.event_type.name,
        "data": data,
        "state": snapshot.to_dict(),
    }


@router.websocket("/table/{session_id}")
async def table_websocket(websocket: WebSocket, session_id: str) -> None:
    """
    WebSocket endpoint for real-time table updates.

    The session id must be a signed token as issued by POST /api/table/new;
    anything else is refused with close code 1008.

    Messages from client:
    - {"type": "action", "action": "deal"|"hit"|"stand"|"clear"}
    - {"type": "get_state"}

    Messages to client:
    - {"type": "state_update", "state": {...}}
    - {"type": "event", "event_type": "...", "data": {...}, "state": {...}}
    - {"type": "error", "message": "..."}
    """
    if extract_session_id(session_id) is None:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await manager.connect(websocket, session_id)
    table = manager.get_or_create_table(session_id)

    await manager.send_message(session_id, {
        "type": "state_update",
        "state": table.snapshot().to_dict(),
    })

    async def process_events() -> None:
        """Forward table events to the client as they happen."""
        while True:
            event = await manager.next_event(session_id)
            await manager.send_message(session_id, _event_to_message(event))

    # Start event processor
    event_task = asyncio.create_task(process_events())

    actions = {
        "deal": table.start_round,
        "hit": table.hit,
        "stand": table.stand,
    }

    try:
        while True:
            message = await websocket.receive_json()
            msg_type = message.get("type")

            if msg_type == "get_state":
                await manager.send_message(session_id, {
                    "type": "state_update",
                    "state": table.snapshot().to_dict(),
                })

            elif msg_type == "action":
                action = message.get("action")
                if action == "clear":
                    table.clear()
                    await manager.send_message(session_id, {
                        "type": "state_update",
                        "state": table.snapshot().to_dict(),
                    })
                elif action in actions:
                    # Runs the dealer's paced turn to completion when it starts
                    await actions[action]()
                else:
                    await manager.send_message(session_id, {
                        "type": "error",
                        "message": f"Unknown action: {action}",
                    })

            else:
                await manager.send_message(session_id, {
                    "type": "error",
                    "message": f"Unknown message type: {msg_type}",
                })

    except WebSocketDisconnect:
        logger.debug("WebSocket %s disconnected", session_id)
    finally:
        event_task.cancel()
        try:
            await event_task
        except asyncio.CancelledError:
            pass
        manager.disconnect(session_id)
