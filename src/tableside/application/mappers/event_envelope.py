from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel

from tableside.application.notifications import Notification


def _json_payload(payload: Any) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json")
    if isinstance(payload, list):
        return [_json_payload(item) for item in payload]
    return payload


def serialize_notification(notification: Notification) -> str:
    envelope = {
        "event": notification.event.value,
        "data": _json_payload(notification.payload),
    }
    return json.dumps(envelope, separators=(",", ":"), ensure_ascii=False)
