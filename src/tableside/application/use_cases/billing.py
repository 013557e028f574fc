from __future__ import annotations

from decimal import Decimal

from tableside.application.dto.requests import EmptyRequest, MarkBillPaidRequest
from tableside.application.dto.responses import BillPaidResponse, BillPreparedResponse
from tableside.application.mappers.clock import format_clock
from tableside.application.mappers.service_mapper import to_bill_response
from tableside.application.mappers.table_mapper import to_cart_view, to_table_response
from tableside.application.metrics.table_activity import record_bill
from tableside.application.notifications import (
    OutboundEvent,
    Transition,
    to_admins,
    to_caller,
    to_table,
)
from tableside.application.state import AppState
from tableside.application.use_cases.context import ClientSession, bound_table
from tableside.domain.bill.entities import Bill, BillLine
from tableside.domain.common.ids import BillId
from tableside.domain.common.money import quantize, to_amount, to_quantity
from tableside.domain.table.entities import SHARED_PERSON, CartItem, TableStatus
from tableside.domain.table.ledger import calculate_total

BILL_PAID_MESSAGE = "Pago confirmado - ¡Gracias!"


def bill_requested_message(total: Decimal) -> str:
    return f"Cuenta solicitada: ${total:.2f}"


def _bill_line(item: CartItem) -> BillLine:
    quantity = to_quantity(item.quantity, default=1) or 1
    price = to_amount(item.price)
    return BillLine(
        name=item.name,
        quantity=quantity,
        price=price,
        person=item.person or SHARED_PERSON,
        status=item.status.value,
        subtotal=quantize(price * quantity),
        added_at=item.added_at,
    )


class RequestBill:
    def __init__(self, state: AppState) -> None:
        self._state = state

    def execute(self, session: ClientSession, request: EmptyRequest) -> Transition:
        table = bound_table(self._state, session)
        if table is None:
            return Transition()

        now = self._state.now()
        all_items = [*table.served_items, *table.pending_cart]
        total = calculate_total(all_items)

        per_person: dict[str, Decimal] | None = None
        if table.split and table.people and all_items:
            per_person = {
                person: calculate_total(item for item in all_items if item.person == person)
                for person in table.people
            }

        bill = Bill(
            bill_id=BillId(self._state.ids.next()),
            table_id=table.table_id,
            items=[_bill_line(item) for item in all_items],
            total=total,
            split=table.split,
            people=list(table.people),
            current_total=table.current_total,
            consumption_by_person=dict(table.consumption_by_person),
            per_person=per_person,
            requested_at=now,
        )
        table.timestamps.last_bill_request = now
        table.status = TableStatus.PAYING
        table.touch(now)
        self._state.bills.append(bill)
        record_bill(bill.status.value)

        bill_view = to_bill_response(bill)
        prepared = BillPreparedResponse(
            **bill_view.model_dump(),
            message=bill_requested_message(total),
        )
        return (
            Transition(mutated=True)
            .emit(to_admins(OutboundEvent.BILL_REQUESTED, bill_view))
            .emit(to_caller(OutboundEvent.BILL_PREPARED, prepared))
            .emit(to_admins(OutboundEvent.TABLE_UPDATED, to_table_response(table)))
        )


class MarkBillPaid:
    def __init__(self, state: AppState) -> None:
        self._state = state

    def execute(self, session: ClientSession, request: MarkBillPaidRequest) -> Transition:
        bill = self._state.find_bill(BillId(request.bill_id))
        if bill is None:
            return Transition()

        now = self._state.now()
        if not bill.mark_paid(now):
            return Transition()
        record_bill(bill.status.value)

        table = self._state.get_table(bill.table_id)
        table.status = TableStatus.PAID_BUT_OCCUPIED
        table.touch(now)

        table_id = int(table.table_id)
        paid = BillPaidResponse(
            message=BILL_PAID_MESSAGE,
            finalTotal=bill.total,
            paidTime=format_clock(now) or "",
        )
        return (
            Transition(mutated=True)
            .emit(to_table(table_id, OutboundEvent.BILL_PAID, paid))
            .emit(to_table(table_id, OutboundEvent.CART_UPDATED, to_cart_view(table)))
            .emit(to_admins(OutboundEvent.TABLE_UPDATED, to_table_response(table)))
            .emit(to_admins(OutboundEvent.BILL_PAID, int(bill.bill_id)))
        )
