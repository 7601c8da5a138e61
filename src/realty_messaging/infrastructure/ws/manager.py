"""In-process registry of live WebSocket connections and their rooms."""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Iterable
from uuid import UUID

from fastapi import WebSocket

from realty_messaging.infrastructure.ws.protocol import WsOutbound

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Connection:
    """One live socket. Owns the set of rooms it has joined."""

    ws: WebSocket
    user_id: UUID
    user_name: str | None = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    rooms: set[str] = field(default_factory=set)

    async def send(self, event_type: str, data: dict[str, Any]) -> None:
        await self.ws.send_text(WsOutbound(type=event_type, data=data).model_dump_json())


class ConnectionManager:
    """Tracks live connections. Subscribers of a room are resolved at send time."""

    def __init__(self) -> None:
        self._connections: dict[str, Connection] = {}

    def __len__(self) -> int:
        return len(self._connections)

    async def connect(self, ws: WebSocket, user_id: UUID, user_name: str | None = None) -> Connection:
        await ws.accept()
        conn = Connection(ws=ws, user_id=user_id, user_name=user_name)
        self._connections[conn.id] = conn
        logger.debug("WS connected: user=%s conn=%s (total=%d)", user_id, conn.id, len(self._connections))
        return conn

    def disconnect(self, conn: Connection) -> None:
        if self._connections.pop(conn.id, None) is not None:
            conn.rooms.clear()
            logger.debug("WS disconnected: user=%s conn=%s", conn.user_id, conn.id)

    def join(self, conn: Connection, room: str) -> None:
        conn.rooms.add(room)
        logger.debug("conn=%s joined %s", conn.id, room)

    def leave(self, conn: Connection, room: str) -> None:
        conn.rooms.discard(room)

    def subscribers(self, rooms: Iterable[str], *, exclude: str | None = None) -> list[Connection]:
        wanted = set(rooms)
        return [
            c
            for c in self._connections.values()
            if c.id != exclude and not c.rooms.isdisjoint(wanted)
        ]

    async def send_to_rooms(
        self,
        rooms: Iterable[str],
        event_type: str,
        data: dict[str, Any],
        *,
        exclude: str | None = None,
    ) -> int:
        """Send once to each connection joined to any of ``rooms``. Returns delivered count."""
        return await self._deliver(self.subscribers(rooms, exclude=exclude), event_type, data)

    async def send_to_all(
        self,
        event_type: str,
        data: dict[str, Any],
        *,
        exclude: str | None = None,
    ) -> int:
        targets = [c for c in self._connections.values() if c.id != exclude]
        return await self._deliver(targets, event_type, data)

    async def _deliver(
        self,
        targets: list[Connection],
        event_type: str,
        data: dict[str, Any],
    ) -> int:
        raw = WsOutbound(type=event_type, data=data).model_dump_json()
        delivered = 0
        dead: list[Connection] = []
        for conn in targets:
            try:
                await conn.ws.send_text(raw)
                delivered += 1
            except Exception:
                logger.debug("Dropping %s for dead conn=%s", event_type, conn.id, exc_info=True)
                dead.append(conn)
        for conn in dead:
            self.disconnect(conn)
        return delivered
