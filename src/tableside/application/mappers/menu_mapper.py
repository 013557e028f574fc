from __future__ import annotations

from tableside.application.dto.responses import MenuItemResponse
from tableside.domain.menu.entities import MenuItem


def to_menu_item_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        id=int(item.item_id),
        name=item.name,
        description=item.description,
        price=item.price,
        category=item.category,
        image=item.image,
        popular=item.popular,
        isDrink=item.is_drink,
    )


def to_menu_response(items: list[MenuItem]) -> list[MenuItemResponse]:
    return [to_menu_item_response(item) for item in items]
