from __future__ import annotations

from dataclasses import replace

from tableside.application.dto.requests import MarkOrderServedRequest
from tableside.application.dto.responses import ItemsServedResponse, OrderServedResponse
from tableside.application.mappers.clock import format_clock
from tableside.application.mappers.table_mapper import (
    to_cart_item_response,
    to_cart_view,
    to_table_response,
)
from tableside.application.metrics.table_activity import record_order_served
from tableside.application.notifications import OutboundEvent, Transition, to_admins, to_table
from tableside.application.state import AppState
from tableside.application.use_cases.context import ClientSession
from tableside.domain.common.ids import OrderId
from tableside.domain.common.money import quantize
from tableside.domain.table.entities import CartItem, CartItemStatus, TableStatus
from tableside.domain.table.ledger import calculate_consumption_by_person


class MarkOrderServed:
    def __init__(self, state: AppState) -> None:
        self._state = state

    def execute(self, session: ClientSession, request: MarkOrderServedRequest) -> Transition:
        order = self._state.find_order(OrderId(request.order_id))
        if order is None:
            return Transition()

        now = self._state.now()
        if not order.mark_served(now):
            return Transition()
        record_order_served(order.created_at, now)

        table = self._state.get_table(order.table_id)
        served: list[CartItem] = []
        for order_item in order.items:
            # items removed from the cart after the order was placed are skipped
            pending = table.pop_pending(order_item.item_id)
            if pending is None:
                continue
            served_item = replace(pending, status=CartItemStatus.SERVED, served_at=now)
            table.served_items.append(served_item)
            table.current_total = quantize(table.current_total + served_item.subtotal)
            served.append(served_item)

        table.timestamps.last_served = now
        if not table.pending_cart:
            table.status = TableStatus.ACTIVE
        table.consumption_by_person = calculate_consumption_by_person(table)
        table.touch(now)

        table_id = int(table.table_id)
        serve_time = format_clock(now) or ""
        served_views = [to_cart_item_response(item) for item in served]
        items_served = ItemsServedResponse(
            items=served_views,
            currentTotal=table.current_total,
            consumptionByPerson=dict(table.consumption_by_person),
            serveTime=serve_time,
        )
        order_served = OrderServedResponse(
            orderId=int(order.order_id),
            tableId=table_id,
            servedItems=served_views,
            serveTime=serve_time,
        )
        return (
            Transition(mutated=True)
            .emit(to_table(table_id, OutboundEvent.ITEMS_SERVED, items_served))
            .emit(to_table(table_id, OutboundEvent.CART_UPDATED, to_cart_view(table)))
            .emit(to_admins(OutboundEvent.ORDER_SERVED, order_served))
            .emit(to_admins(OutboundEvent.TABLE_UPDATED, to_table_response(table)))
        )
