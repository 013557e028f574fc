from __future__ import annotations

from fastapi import WebSocket

from tableside.api.ws.manager import ConnectionManager
from tableside.application.mappers.event_envelope import serialize_notification
from tableside.application.notifications import Audience, Transition


async def deliver(
    manager: ConnectionManager,
    transition: Transition,
    caller: WebSocket | None = None,
) -> None:
    """Apply room changes first so a caller joining a room also gets that room's messages."""
    if caller is not None:
        for room in transition.rooms_left:
            await manager.leave(caller, room)
        for room in transition.rooms_joined:
            await manager.join(caller, room)

    for notification in transition.notifications:
        message = serialize_notification(notification)
        if notification.audience == Audience.ROOM and notification.room:
            await manager.broadcast(notification.room, message)
        elif caller is not None:
            await manager.send(caller, message)
