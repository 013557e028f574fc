from __future__ import annotations

from tableside.application.dto.responses import (
    CartItemResponse,
    CartViewResponse,
    TableResponse,
    TableTimestampsResponse,
)
from tableside.application.mappers.clock import format_clock
from tableside.domain.table.entities import CartItem, Table


def to_cart_item_response(item: CartItem) -> CartItemResponse:
    return CartItemResponse(
        id=int(item.item_id),
        productId=int(item.product_id),
        name=item.name,
        price=item.price,
        quantity=item.quantity,
        notes=item.notes,
        person=item.person,
        addedAt=item.added_at,
        addedAtFormatted=format_clock(item.added_at) or "",
        status=item.status.value,
        servedAt=item.served_at,
        servedAtFormatted=format_clock(item.served_at),
    )


def to_cart_view(table: Table) -> CartViewResponse:
    return CartViewResponse(
        pendingCart=[to_cart_item_response(item) for item in table.pending_cart],
        servedItems=[to_cart_item_response(item) for item in table.served_items],
        split=table.split,
        people=list(table.people),
        currentTotal=table.current_total,
        consumptionByPerson=dict(table.consumption_by_person),
        status=table.status.value,
    )


def to_table_response(table: Table) -> TableResponse:
    view = to_cart_view(table)
    return TableResponse(
        **view.model_dump(),
        id=int(table.table_id),
        lastActivity=table.last_activity,
        timestamps=TableTimestampsResponse(
            lastOrder=table.timestamps.last_order,
            lastCall=table.timestamps.last_call,
            lastBillRequest=table.timestamps.last_bill_request,
            lastServed=table.timestamps.last_served,
        ),
    )
