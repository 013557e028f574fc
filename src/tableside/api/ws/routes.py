from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from tableside.api.middleware.request_id import bound_connection_id
from tableside.api.runtime import AppRuntime
from tableside.api.ws.delivery import deliver
from tableside.api.ws.manager import ConnectionManager
from tableside.application.notifications import error_transition
from tableside.application.use_cases.context import ClientSession
from tableside.infrastructure.observability.otel import get_tracer

router = APIRouter()
logger = logging.getLogger(__name__)

MALFORMED_FRAME_MESSAGE = "Mensaje inválido"


async def _handle_frame(
    runtime: AppRuntime,
    manager: ConnectionManager,
    websocket: WebSocket,
    session: ClientSession,
    raw: str | None,
) -> None:
    try:
        frame = json.loads(raw) if raw is not None else None
    except json.JSONDecodeError:
        frame = None
    if not isinstance(frame, dict) or "event" not in frame:
        await deliver(manager, error_transition(MALFORMED_FRAME_MESSAGE), caller=websocket)
        return

    event_name = frame["event"]
    with get_tracer().start_as_current_span("ws.event") as span:
        span.set_attribute("tableside.event", str(event_name))
        async with runtime.lock:
            transition = runtime.dispatcher.dispatch(session, event_name, frame.get("data"))
            pending = runtime.snapshotter.capture() if transition.mutated else None
        await deliver(manager, transition, caller=websocket)
    if pending is not None:
        await asyncio.to_thread(runtime.snapshotter.write, pending)

    logger.debug(
        "ws_event_handled",
        extra={
            "event": str(event_name),
            "outcome": "mutated" if transition.mutated else "unchanged",
            "table_id": session.table_id,
        },
    )


def _frame_text(message: dict[str, Any]) -> str | None:
    """Text of a received frame; binary frames count only when they are UTF-8."""
    if message.get("text") is not None:
        return message["text"]
    data = message.get("bytes")
    if data is None:
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    runtime: AppRuntime = websocket.app.state.runtime
    manager: ConnectionManager = websocket.app.state.ws_manager

    with bound_connection_id() as connection_id:
        session = ClientSession(connection_id=connection_id)
        await manager.register(websocket)
        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(message.get("code", 1000))
                raw = _frame_text(message)
                manager.touch(websocket)
                await _handle_frame(runtime, manager, websocket, session, raw)
        except WebSocketDisconnect:
            logger.debug("ws_client_left", extra={"table_id": session.table_id})
        except Exception:
            logger.exception("ws_connection_error", extra={"table_id": session.table_id})
        finally:
            await manager.unregister(websocket)
