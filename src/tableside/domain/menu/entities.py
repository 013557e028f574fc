from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from tableside.domain.common.ids import ProductId


@dataclass(frozen=True)
class MenuItem:
    item_id: ProductId
    name: str
    description: str
    price: Decimal
    category: str
    is_drink: bool
    popular: bool
    image: str | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if self.price < 0:
            raise ValueError("price must be >= 0")
