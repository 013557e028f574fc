from __future__ import annotations

from typing import Protocol

from tableside.domain.common.ids import ProductId
from tableside.domain.menu.entities import MenuItem


class MenuRepository(Protocol):
    def list_items(self) -> list[MenuItem]: ...

    def get_item(self, product_id: ProductId) -> MenuItem | None: ...
