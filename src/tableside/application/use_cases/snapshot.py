"""Best-effort snapshot of the active state and its reload at startup.

Only open calls, pending orders and pending bills are written. On reload the
document is merged into the ten pre-allocated tables: unknown table ids and
unknown fields are ignored, so structure is trusted but identity is not.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from pydantic import ValidationError

from tableside.application.dto.responses import (
    BillResponse,
    CallResponse,
    CartItemResponse,
    OrderResponse,
    SnapshotDocument,
    TableResponse,
)
from tableside.application.mappers.service_mapper import (
    to_bill_response,
    to_call_response,
    to_order_response,
)
from tableside.application.mappers.table_mapper import to_table_response
from tableside.application.metrics.table_activity import record_snapshot_save_failure
from tableside.application.ports.snapshot import SnapshotError, SnapshotStore
from tableside.application.state import AppState
from tableside.domain.bill.entities import Bill, BillLine, BillStatus
from tableside.domain.call.entities import Call, CallStatus
from tableside.domain.common.ids import (
    BillId,
    CallId,
    CartItemId,
    OrderId,
    ProductId,
    TableId,
)
from tableside.domain.common.money import quantize
from tableside.domain.order.entities import Order, OrderItem, OrderStatus
from tableside.domain.table.entities import (
    CartItem,
    CartItemStatus,
    TableStatus,
    TableTimestamps,
    is_valid_table_id,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def _enum_or(enum_cls: type[E], value: str, default: E) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _cart_item(view: CartItemResponse) -> CartItem:
    return CartItem(
        item_id=CartItemId(view.id),
        product_id=ProductId(view.productId),
        name=view.name,
        price=view.price,
        quantity=view.quantity,
        notes=view.notes,
        person=view.person,
        added_at=view.addedAt,
        status=_enum_or(CartItemStatus, view.status, CartItemStatus.PENDING),
        served_at=view.servedAt,
    )


def _call(view: CallResponse) -> Call:
    return Call(
        call_id=CallId(view.id),
        table_id=TableId(view.tableId),
        time=view.time,
        reason=view.reason,
        status=_enum_or(CallStatus, view.status, CallStatus.WAITING),
        attended_at=view.attendedAt,
        elapsed_time=view.elapsedTime,
    )


def _order(view: OrderResponse) -> Order:
    return Order(
        order_id=OrderId(view.id),
        table_id=TableId(view.tableId),
        items=[
            OrderItem(
                item_id=CartItemId(item.id),
                product_id=ProductId(item.productId),
                name=item.name,
                quantity=item.quantity,
                price=item.price,
                person=item.person,
                notes=item.notes,
                added_at=item.addedAt,
            )
            for item in view.items
        ],
        total=quantize(view.total),
        split=view.split,
        people=list(view.people),
        created_at=view.createdAt,
        status=_enum_or(OrderStatus, view.status, OrderStatus.PENDING),
        served_at=view.servedAt,
        elapsed_time=view.elapsedTime,
    )


def _bill(view: BillResponse) -> Bill:
    return Bill(
        bill_id=BillId(view.id),
        table_id=TableId(view.tableId),
        items=[
            BillLine(
                name=line.name,
                quantity=line.quantity,
                price=line.price,
                person=line.person,
                status=line.status,
                subtotal=quantize(line.subtotal),
                added_at=line.addedAt,
            )
            for line in view.items
        ],
        total=quantize(view.total),
        split=view.split,
        people=list(view.people),
        current_total=quantize(view.currentTotal),
        consumption_by_person={
            person: quantize(amount) for person, amount in view.consumptionByPerson.items()
        },
        per_person=(
            {person: quantize(amount) for person, amount in view.perPerson.items()}
            if view.perPerson is not None
            else None
        ),
        requested_at=view.requestedAt,
        status=_enum_or(BillStatus, view.status, BillStatus.PENDING),
        paid_at=view.paidAt,
        elapsed_time=view.elapsedTime,
    )


class BuildSnapshot:
    def __init__(self, state: AppState) -> None:
        self._state = state

    def execute(self) -> str:
        document = SnapshotDocument(
            tables=[to_table_response(table) for table in self._state.all_tables()],
            calls=[to_call_response(call) for call in self._state.waiting_calls()],
            orders=[to_order_response(order) for order in self._state.pending_orders()],
            bills=[to_bill_response(bill) for bill in self._state.pending_bills()],
            lastBackup=self._state.now(),
        )
        return document.model_dump_json()


class RestoreSnapshot:
    def __init__(self, state: AppState) -> None:
        self._state = state

    def execute(self, raw: str) -> SnapshotDocument:
        try:
            document = SnapshotDocument.model_validate_json(raw)
        except ValidationError as exc:
            raise SnapshotError("snapshot document is malformed") from exc

        for view in document.tables:
            if is_valid_table_id(view.id):
                self._merge_table(view)

        highest_id = 0
        for call_view in document.calls:
            call = _call(call_view)
            if call.status == CallStatus.WAITING and is_valid_table_id(call.table_id):
                self._state.calls.append(call)
                highest_id = max(highest_id, call.call_id)
        for order_view in document.orders:
            if not order_view.items or not is_valid_table_id(order_view.tableId):
                logger.warning("snapshot_order_skipped", extra={"order_id": order_view.id})
                continue
            order = _order(order_view)
            if order.status == OrderStatus.PENDING:
                self._state.orders.append(order)
                highest_id = max(highest_id, order.order_id)
        for bill_view in document.bills:
            bill = _bill(bill_view)
            if bill.status == BillStatus.PENDING and is_valid_table_id(bill.table_id):
                self._state.bills.append(bill)
                highest_id = max(highest_id, bill.bill_id)

        for table in self._state.all_tables():
            for item in [*table.pending_cart, *table.served_items]:
                highest_id = max(highest_id, item.item_id)
        self._state.ids.advance_past(highest_id)
        return document

    def _merge_table(self, view: TableResponse) -> None:
        table = self._state.get_table(view.id)
        table.pending_cart = [_cart_item(item) for item in view.pendingCart]
        table.served_items = [_cart_item(item) for item in view.servedItems]
        table.split = view.split
        table.people = list(view.people)
        table.status = _enum_or(TableStatus, view.status, table.status)
        table.current_total = quantize(view.currentTotal)
        table.consumption_by_person = {
            person: quantize(amount) for person, amount in view.consumptionByPerson.items()
        }
        table.last_activity = view.lastActivity
        table.timestamps = TableTimestamps(
            last_order=view.timestamps.lastOrder,
            last_call=view.timestamps.lastCall,
            last_bill_request=view.timestamps.lastBillRequest,
            last_served=view.timestamps.lastServed,
        )


@dataclass(frozen=True)
class PendingSnapshot:
    sequence: int
    payload: str


class Snapshotter:
    """Saves and restores snapshots without ever failing the caller.

    ``capture`` reads the state and must run under the state lock. ``write``
    only touches the store, so it can run in a worker thread; a capture that
    is older than the last one written is dropped.
    """

    def __init__(self, state: AppState, store: SnapshotStore, backend: str) -> None:
        self._state = state
        self._store = store
        self._backend = backend
        self._captured = 0
        self._written = 0
        self._write_lock = threading.Lock()

    def capture(self) -> PendingSnapshot | None:
        try:
            payload = BuildSnapshot(self._state).execute()
        except Exception:
            self._record_failure()
            return None
        self._captured += 1
        return PendingSnapshot(sequence=self._captured, payload=payload)

    def write(self, snapshot: PendingSnapshot | None) -> bool:
        if snapshot is None:
            return False
        with self._write_lock:
            if snapshot.sequence <= self._written:
                return True
            try:
                self._store.save(snapshot.payload)
            except Exception:
                self._record_failure()
                return False
            self._written = snapshot.sequence
        return True

    def save(self) -> bool:
        return self.write(self.capture())

    def _record_failure(self) -> None:
        record_snapshot_save_failure(self._backend)
        logger.exception("snapshot_save_failed", extra={"backend": self._backend})

    def restore(self) -> bool:
        try:
            raw = self._store.load()
            if raw is None:
                logger.info("snapshot_not_found", extra={"backend": self._backend})
                return False
            document = RestoreSnapshot(self._state).execute(raw)
        except Exception:
            logger.exception("snapshot_restore_failed", extra={"backend": self._backend})
            return False
        logger.info(
            "snapshot_restored",
            extra={"backend": self._backend, "last_backup": document.lastBackup},
        )
        return True
