from __future__ import annotations

from tableside.application.dto.requests import EmptyRequest
from tableside.application.dto.responses import OrderConfirmedResponse
from tableside.application.mappers.clock import format_clock
from tableside.application.mappers.service_mapper import to_order_response
from tableside.application.mappers.table_mapper import to_table_response
from tableside.application.metrics.table_activity import record_order_placed
from tableside.application.notifications import (
    OutboundEvent,
    Transition,
    error_transition,
    to_admins,
    to_caller,
)
from tableside.application.state import AppState
from tableside.application.use_cases.context import ClientSession, bound_table
from tableside.domain.common.ids import OrderId
from tableside.domain.order.entities import Order, OrderItem
from tableside.domain.table.entities import TableStatus
from tableside.domain.table.ledger import calculate_total

EMPTY_CART_MESSAGE = "No hay productos para pedir"
ORDER_CONFIRMED_MESSAGE = "Pedido enviado a la barra"


class PlaceOrder:
    def __init__(self, state: AppState) -> None:
        self._state = state

    def execute(self, session: ClientSession, request: EmptyRequest) -> Transition:
        table = bound_table(self._state, session)
        if table is None:
            return Transition()
        if not table.pending_cart:
            return error_transition(EMPTY_CART_MESSAGE)

        now = self._state.now()
        # the cart stays pending until staff marks the order served
        order = Order(
            order_id=OrderId(self._state.ids.next()),
            table_id=table.table_id,
            items=[OrderItem.from_cart_item(item) for item in table.pending_cart],
            total=calculate_total(table.pending_cart),
            split=table.split,
            people=list(table.people),
            created_at=now,
        )
        table.timestamps.last_order = now
        table.status = TableStatus.WAITING
        table.touch(now)
        self._state.orders.append(order)
        record_order_placed(int(table.table_id))

        confirmed = OrderConfirmedResponse(
            orderId=int(order.order_id),
            message=ORDER_CONFIRMED_MESSAGE,
            time=format_clock(now) or "",
        )
        return (
            Transition(mutated=True)
            .emit(to_admins(OutboundEvent.NEW_ORDER, to_order_response(order)))
            .emit(to_caller(OutboundEvent.ORDER_CONFIRMED, confirmed))
            .emit(to_admins(OutboundEvent.TABLE_UPDATED, to_table_response(table)))
        )
