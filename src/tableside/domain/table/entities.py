from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from tableside.domain.common.ids import CartItemId, ProductId, TableId
from tableside.domain.common.money import ZERO

SHARED_PERSON = "Todos"
TABLE_COUNT = 10


class TableStatus(str, Enum):
    AVAILABLE = "available"
    ACTIVE = "active"
    ORDERING = "ordering"
    WAITING = "waiting"
    PAYING = "paying"
    PAID_BUT_OCCUPIED = "paid_but_occupied"


class CartItemStatus(str, Enum):
    PENDING = "pending"
    SERVED = "served"


@dataclass
class CartItem:
    item_id: CartItemId
    product_id: ProductId
    name: str
    price: Decimal
    quantity: int
    notes: str
    person: str
    added_at: datetime
    status: CartItemStatus = CartItemStatus.PENDING
    served_at: datetime | None = None

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


@dataclass
class TableTimestamps:
    last_order: datetime | None = None
    last_call: datetime | None = None
    last_bill_request: datetime | None = None
    last_served: datetime | None = None


@dataclass
class Table:
    table_id: TableId
    last_activity: datetime
    pending_cart: list[CartItem] = field(default_factory=list)
    served_items: list[CartItem] = field(default_factory=list)
    split: bool = False
    people: list[str] = field(default_factory=list)
    status: TableStatus = TableStatus.AVAILABLE
    current_total: Decimal = ZERO
    consumption_by_person: dict[str, Decimal] = field(default_factory=dict)
    timestamps: TableTimestamps = field(default_factory=TableTimestamps)

    def reset(self, status: TableStatus, now: datetime) -> None:
        """Wipe every session field and leave the table in ``status``."""
        self.pending_cart = []
        self.served_items = []
        self.split = False
        self.people = []
        self.current_total = ZERO
        self.consumption_by_person = {}
        self.timestamps = TableTimestamps()
        self.status = status
        self.last_activity = now

    def touch(self, now: datetime) -> None:
        self.last_activity = now

    def resolve_person(self, person_index: int | None) -> str:
        if not self.split or person_index is None:
            return SHARED_PERSON
        if 0 <= person_index < len(self.people) and self.people[person_index]:
            return self.people[person_index]
        return SHARED_PERSON

    def pop_pending(self, item_id: CartItemId) -> CartItem | None:
        for index, item in enumerate(self.pending_cart):
            if item.item_id == item_id:
                return self.pending_cart.pop(index)
        return None

    def is_empty(self) -> bool:
        return not self.pending_cart and not self.served_items


def is_valid_table_id(value: int) -> bool:
    return 1 <= value <= TABLE_COUNT


class InvalidTableError(Exception):
    pass
