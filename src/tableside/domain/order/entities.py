from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from tableside.domain.common.ids import CartItemId, OrderId, ProductId, TableId
from tableside.domain.table.entities import CartItem


class OrderStatus(str, Enum):
    PENDING = "pending"
    SERVED = "served"


@dataclass(frozen=True)
class OrderItem:
    item_id: CartItemId
    product_id: ProductId
    name: str
    quantity: int
    price: Decimal
    person: str
    notes: str
    added_at: datetime

    @classmethod
    def from_cart_item(cls, item: CartItem) -> OrderItem:
        return cls(
            item_id=item.item_id,
            product_id=item.product_id,
            name=item.name,
            quantity=item.quantity,
            price=item.price,
            person=item.person,
            notes=item.notes,
            added_at=item.added_at,
        )


@dataclass
class Order:
    order_id: OrderId
    table_id: TableId
    items: list[OrderItem]
    total: Decimal
    split: bool
    created_at: datetime
    people: list[str] = field(default_factory=list)
    status: OrderStatus = OrderStatus.PENDING
    served_at: datetime | None = None
    elapsed_time: str = "0s"

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("order must contain at least one item")

    def mark_served(self, now: datetime) -> bool:
        if self.status != OrderStatus.PENDING:
            return False
        self.status = OrderStatus.SERVED
        self.served_at = now
        return True
