from __future__ import annotations

from tableside.application.dto.responses import (
    BillItemResponse,
    BillResponse,
    CallResponse,
    OrderItemResponse,
    OrderResponse,
)
from tableside.application.mappers.clock import format_clock
from tableside.domain.bill.entities import Bill
from tableside.domain.call.entities import Call
from tableside.domain.order.entities import Order


def to_call_response(call: Call) -> CallResponse:
    return CallResponse(
        id=int(call.call_id),
        tableId=int(call.table_id),
        reason=call.reason,
        time=call.time,
        timeFormatted=format_clock(call.time) or "",
        elapsedTime=call.elapsed_time,
        status=call.status.value,
        attendedAt=call.attended_at,
        attendedAtFormatted=format_clock(call.attended_at),
    )


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=int(order.order_id),
        tableId=int(order.table_id),
        items=[
            OrderItemResponse(
                id=int(item.item_id),
                productId=int(item.product_id),
                name=item.name,
                quantity=item.quantity,
                price=item.price,
                person=item.person,
                notes=item.notes,
                addedAt=item.added_at,
                addedAtFormatted=format_clock(item.added_at) or "",
            )
            for item in order.items
        ],
        total=order.total,
        split=order.split,
        people=list(order.people),
        createdAt=order.created_at,
        createdAtFormatted=format_clock(order.created_at) or "",
        elapsedTime=order.elapsed_time,
        status=order.status.value,
        servedAt=order.served_at,
        servedAtFormatted=format_clock(order.served_at),
    )


def to_bill_response(bill: Bill) -> BillResponse:
    return BillResponse(
        id=int(bill.bill_id),
        tableId=int(bill.table_id),
        items=[
            BillItemResponse(
                name=line.name,
                quantity=line.quantity,
                price=line.price,
                person=line.person,
                status=line.status,
                subtotal=line.subtotal,
                addedAt=line.added_at,
                timeAdded=format_clock(line.added_at) or "",
            )
            for line in bill.items
        ],
        total=bill.total,
        split=bill.split,
        people=list(bill.people),
        currentTotal=bill.current_total,
        consumptionByPerson=dict(bill.consumption_by_person),
        perPerson=dict(bill.per_person) if bill.per_person is not None else None,
        requestedAt=bill.requested_at,
        requestedAtFormatted=format_clock(bill.requested_at) or "",
        elapsedTime=bill.elapsed_time,
        status=bill.status.value,
        paidAt=bill.paid_at,
        paidAtFormatted=format_clock(bill.paid_at),
    )
