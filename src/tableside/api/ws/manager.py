from __future__ import annotations

import asyncio
import logging
import time
from collections import defaultdict

from fastapi import WebSocket

from tableside.application.metrics.table_activity import set_connected_sockets

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks sockets, the rooms they joined and when each was last heard from."""

    def __init__(self) -> None:
        self._rooms: dict[str, set[WebSocket]] = defaultdict(set)
        self._socket_rooms: dict[WebSocket, set[str]] = {}
        self._last_seen: dict[WebSocket, float] = {}
        self._lock = asyncio.Lock()

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self._socket_rooms[websocket] = set()
            self._last_seen[websocket] = time.monotonic()
            count = len(self._socket_rooms)
        set_connected_sockets(count)
        logger.info("ws_client_connected")

    async def unregister(self, websocket: WebSocket) -> None:
        async with self._lock:
            rooms = self._socket_rooms.pop(websocket, None)
            self._last_seen.pop(websocket, None)
            if rooms is None:
                return
            for room in rooms:
                self._discard(room, websocket)
            count = len(self._socket_rooms)
        set_connected_sockets(count)
        logger.info("ws_client_disconnected")

    def _discard(self, room: str, websocket: WebSocket) -> None:
        sockets = self._rooms.get(room)
        if not sockets:
            return
        sockets.discard(websocket)
        if not sockets:
            self._rooms.pop(room, None)

    async def join(self, websocket: WebSocket, room: str) -> None:
        async with self._lock:
            rooms = self._socket_rooms.get(websocket)
            if rooms is None:
                return
            rooms.add(room)
            self._rooms[room].add(websocket)
        logger.info("ws_room_joined", extra={"room": room})

    async def leave(self, websocket: WebSocket, room: str) -> None:
        async with self._lock:
            rooms = self._socket_rooms.get(websocket)
            if rooms is None:
                return
            rooms.discard(room)
            self._discard(room, websocket)

    def touch(self, websocket: WebSocket) -> None:
        if websocket in self._last_seen:
            self._last_seen[websocket] = time.monotonic()

    def connection_count(self) -> int:
        return len(self._socket_rooms)

    def room_size(self, room: str) -> int:
        return len(self._rooms.get(room, ()))

    async def send(self, websocket: WebSocket, message_json_str: str) -> None:
        try:
            await websocket.send_text(message_json_str)
        except Exception:
            await self.unregister(websocket)

    async def broadcast(self, room: str, message_json_str: str) -> None:
        async with self._lock:
            targets = list(self._rooms.get(room, set()))

        stale: list[WebSocket] = []
        for websocket in targets:
            try:
                await websocket.send_text(message_json_str)
            except Exception:
                stale.append(websocket)

        for websocket in stale:
            await self.unregister(websocket)

    async def drop_idle(self, max_idle_seconds: float, now: float | None = None) -> int:
        current = time.monotonic() if now is None else now
        async with self._lock:
            idle = [
                websocket
                for websocket, last_seen in self._last_seen.items()
                if current - last_seen > max_idle_seconds
            ]

        for websocket in idle:
            try:
                await websocket.close(code=1001, reason="heartbeat timeout")
            except Exception:
                logger.debug("ws_close_failed", exc_info=True)
            await self.unregister(websocket)
        if idle:
            logger.info("ws_idle_connections_dropped", extra={"dropped": len(idle)})
        return len(idle)
