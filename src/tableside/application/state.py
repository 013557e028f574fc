from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from tableside.domain.bill.entities import Bill, BillStatus
from tableside.domain.call.entities import Call, CallStatus
from tableside.domain.common.ids import BillId, CallId, IdSequence, OrderId, TableId
from tableside.domain.order.entities import Order, OrderStatus
from tableside.domain.table.entities import (
    TABLE_COUNT,
    InvalidTableError,
    Table,
    is_valid_table_id,
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AppState:
    """Process-wide table store plus the append-only call/order/bill lists.

    Only use cases mutate it, and they run one at a time on the event loop.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        ids: IdSequence | None = None,
    ) -> None:
        self._clock = clock or _utc_now
        self.ids = ids or IdSequence()
        now = self._clock()
        self.tables: dict[TableId, Table] = {
            TableId(number): Table(table_id=TableId(number), last_activity=now)
            for number in range(1, TABLE_COUNT + 1)
        }
        self.calls: list[Call] = []
        self.orders: list[Order] = []
        self.bills: list[Bill] = []

    def now(self) -> datetime:
        return self._clock()

    def get_table(self, table_id: int) -> Table:
        if not is_valid_table_id(table_id):
            raise InvalidTableError(f"table {table_id} is outside 1..{TABLE_COUNT}")
        return self.tables[TableId(table_id)]

    def find_call(self, call_id: CallId) -> Call | None:
        return next((call for call in self.calls if call.call_id == call_id), None)

    def find_order(self, order_id: OrderId) -> Order | None:
        return next((order for order in self.orders if order.order_id == order_id), None)

    def find_bill(self, bill_id: BillId) -> Bill | None:
        return next((bill for bill in self.bills if bill.bill_id == bill_id), None)

    def waiting_calls(self) -> list[Call]:
        return [call for call in self.calls if call.status == CallStatus.WAITING]

    def pending_orders(self) -> list[Order]:
        return [order for order in self.orders if order.status == OrderStatus.PENDING]

    def pending_bills(self) -> list[Bill]:
        return [bill for bill in self.bills if bill.status == BillStatus.PENDING]

    def all_tables(self) -> list[Table]:
        return [self.tables[table_id] for table_id in sorted(self.tables)]
