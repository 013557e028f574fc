from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from tableside.domain.common.ids import BillId, TableId
from tableside.domain.common.money import ZERO


class BillStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


@dataclass(frozen=True)
class BillLine:
    name: str
    quantity: int
    price: Decimal
    person: str
    status: str
    subtotal: Decimal
    added_at: datetime | None


@dataclass
class Bill:
    bill_id: BillId
    table_id: TableId
    items: list[BillLine]
    total: Decimal
    split: bool
    requested_at: datetime
    people: list[str] = field(default_factory=list)
    current_total: Decimal = ZERO
    consumption_by_person: dict[str, Decimal] = field(default_factory=dict)
    per_person: dict[str, Decimal] | None = None
    status: BillStatus = BillStatus.PENDING
    paid_at: datetime | None = None
    elapsed_time: str = "0s"

    def mark_paid(self, now: datetime) -> bool:
        if self.status != BillStatus.PENDING:
            return False
        self.status = BillStatus.PAID
        self.paid_at = now
        return True
