from __future__ import annotations

from collections.abc import Callable
from typing import Any

from tableside.application.dto.requests import (
    InboundEvent,
    InvalidPayloadError,
    UnknownEventError,
    parse_request,
    resolve_event,
)
from tableside.application.metrics.table_activity import record_inbound_event
from tableside.application.notifications import Transition, error_transition
from tableside.application.ports.repositories import MenuRepository
from tableside.application.state import AppState
from tableside.application.use_cases.admin_session import JoinAsAdmin, Ping
from tableside.application.use_cases.billing import MarkBillPaid, RequestBill
from tableside.application.use_cases.cart import AddToCart, RemoveFromCart
from tableside.application.use_cases.context import ClientSession
from tableside.application.use_cases.mark_order_served import MarkOrderServed
from tableside.application.use_cases.place_order import PlaceOrder
from tableside.application.use_cases.table_session import FreeTable, JoinTable, SetBillType
from tableside.application.use_cases.waiter_calls import AttendCall, CallWaiter

Handler = Callable[[ClientSession, Any], Transition]

UNKNOWN_EVENT_MESSAGE = "Evento desconocido"
INVALID_PAYLOAD_MESSAGE = "Datos inválidos"

ADMIN_EVENTS = frozenset(
    {
        InboundEvent.ATTEND_CALL,
        InboundEvent.MARK_ORDER_SERVED,
        InboundEvent.MARK_BILL_PAID,
        InboundEvent.FREE_TABLE,
    }
)


class EventDispatcher:
    """Routes one inbound event to its use case and returns the resulting transition."""

    def __init__(
        self,
        state: AppState,
        menu_repository: MenuRepository,
        admin_password: str,
    ) -> None:
        self._handlers: dict[InboundEvent, Handler] = {
            InboundEvent.JOIN_TABLE: JoinTable(state).execute,
            InboundEvent.SET_BILL_TYPE: SetBillType(state).execute,
            InboundEvent.ADD_TO_CART: AddToCart(state, menu_repository).execute,
            InboundEvent.REMOVE_FROM_CART: RemoveFromCart(state).execute,
            InboundEvent.CALL_WAITER: CallWaiter(state).execute,
            InboundEvent.PLACE_ORDER: PlaceOrder(state).execute,
            InboundEvent.REQUEST_BILL: RequestBill(state).execute,
            InboundEvent.JOIN_AS_ADMIN: JoinAsAdmin(state, admin_password).execute,
            InboundEvent.ATTEND_CALL: AttendCall(state).execute,
            InboundEvent.MARK_ORDER_SERVED: MarkOrderServed(state).execute,
            InboundEvent.MARK_BILL_PAID: MarkBillPaid(state).execute,
            InboundEvent.FREE_TABLE: FreeTable(state).execute,
            InboundEvent.PING: Ping(state).execute,
        }
        missing = sorted(event.value for event in set(InboundEvent) - set(self._handlers))
        if missing:
            raise RuntimeError(f"no handler registered for events: {', '.join(missing)}")

    def dispatch(self, session: ClientSession, event_name: object, data: Any) -> Transition:
        try:
            event = resolve_event(event_name)
        except UnknownEventError:
            record_inbound_event("unknown", "rejected")
            return error_transition(UNKNOWN_EVENT_MESSAGE, {"event": str(event_name)})

        if event in ADMIN_EVENTS and not session.is_admin:
            record_inbound_event(event.value, "ignored")
            return Transition()

        try:
            request = parse_request(event, data)
        except InvalidPayloadError as exc:
            if event == InboundEvent.JOIN_AS_ADMIN:
                record_inbound_event(event.value, "ignored")
                return Transition()
            record_inbound_event(event.value, "rejected")
            return error_transition(INVALID_PAYLOAD_MESSAGE, exc.details)

        transition = self._handlers[event](session, request)
        record_inbound_event(event.value, "applied" if transition.mutated else "noop")
        return transition
