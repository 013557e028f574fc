"""Outbound messages produced by use cases.

Use cases never touch sockets: they return a :class:`Transition` describing
who should receive what, and the API layer performs the sends.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from tableside.application.dto.responses import ErrorResponse

ADMIN_ROOM = "admin-room"


def table_room(table_id: int) -> str:
    return f"mesa-{table_id}"


class OutboundEvent(str, Enum):
    TABLE_CONNECTED = "table-connected"
    CART_UPDATED = "cart-updated"
    BILL_TYPE_SET = "bill-type-set"
    WAITER_CALLED = "waiter-called"
    ORDER_CONFIRMED = "order-confirmed"
    BILL_PREPARED = "bill-prepared"
    ITEMS_SERVED = "items-served"
    BILL_PAID = "bill-paid"
    TABLE_FREED = "table-freed"
    RESET_TO_BILL_SELECTION = "reset-to-bill-selection"
    WAITER_ARRIVING = "waiter-arriving"
    ERROR = "error"
    TABLE_UPDATED = "table-updated"
    NEW_CALL = "new-call"
    NEW_ORDER = "new-order"
    BILL_REQUESTED = "bill-requested"
    CALL_ATTENDED = "call-attended"
    ORDER_SERVED = "order-served"
    TIMES_UPDATED = "times-updated"
    ADMIN_CONNECTED = "admin-connected"
    PONG = "pong"


class Audience(str, Enum):
    CALLER = "caller"
    ROOM = "room"


@dataclass(frozen=True)
class Notification:
    event: OutboundEvent
    payload: Any = None
    audience: Audience = Audience.CALLER
    room: str | None = None

    def __post_init__(self) -> None:
        if self.audience == Audience.ROOM and not self.room:
            raise ValueError("room notifications need a room")


def to_caller(event: OutboundEvent, payload: Any = None) -> Notification:
    return Notification(event=event, payload=payload)


def to_table(table_id: int, event: OutboundEvent, payload: Any = None) -> Notification:
    return Notification(
        event=event, payload=payload, audience=Audience.ROOM, room=table_room(table_id)
    )


def to_admins(event: OutboundEvent, payload: Any = None) -> Notification:
    return Notification(event=event, payload=payload, audience=Audience.ROOM, room=ADMIN_ROOM)


@dataclass
class Transition:
    notifications: list[Notification] = field(default_factory=list)
    rooms_joined: list[str] = field(default_factory=list)
    rooms_left: list[str] = field(default_factory=list)
    mutated: bool = False

    def emit(self, notification: Notification) -> Transition:
        self.notifications.append(notification)
        return self

    def events(self) -> list[str]:
        return [notification.event.value for notification in self.notifications]


def error_transition(message: str, details: dict[str, Any] | None = None) -> Transition:
    payload = ErrorResponse(message=message, details=details)
    return Transition(notifications=[to_caller(OutboundEvent.ERROR, payload)])
