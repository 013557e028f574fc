from __future__ import annotations

from tableside.application.dto.requests import AddToCartRequest, RemoveFromCartRequest
from tableside.application.mappers.table_mapper import to_cart_view, to_table_response
from tableside.application.notifications import OutboundEvent, Transition, to_admins, to_caller
from tableside.application.ports.repositories import MenuRepository
from tableside.application.state import AppState
from tableside.application.use_cases.context import ClientSession, bound_table
from tableside.domain.common.ids import CartItemId, ProductId
from tableside.domain.table.entities import CartItem, Table, TableStatus
from tableside.domain.table.ledger import add_consumption, subtract_consumption


def _cart_transition(table: Table, mutated: bool) -> Transition:
    return (
        Transition(mutated=mutated)
        .emit(to_caller(OutboundEvent.CART_UPDATED, to_cart_view(table)))
        .emit(to_admins(OutboundEvent.TABLE_UPDATED, to_table_response(table)))
    )


class AddToCart:
    def __init__(self, state: AppState, menu_repository: MenuRepository) -> None:
        self._state = state
        self._menu_repository = menu_repository

    def execute(self, session: ClientSession, request: AddToCartRequest) -> Transition:
        table = bound_table(self._state, session)
        if table is None:
            return Transition()

        product = self._menu_repository.get_item(ProductId(request.product_id))
        if product is None:
            return Transition()

        now = self._state.now()
        person = table.resolve_person(request.person_index)
        item = CartItem(
            item_id=CartItemId(self._state.ids.next()),
            product_id=product.item_id,
            name=product.name,
            price=product.price,
            quantity=request.quantity,
            notes=request.notes or "",
            person=person,
            added_at=now,
        )
        table.pending_cart.append(item)
        table.status = TableStatus.ORDERING
        table.touch(now)
        if table.split:
            add_consumption(table.consumption_by_person, person, item.subtotal)

        return _cart_transition(table, mutated=True)


class RemoveFromCart:
    def __init__(self, state: AppState) -> None:
        self._state = state

    def execute(self, session: ClientSession, request: RemoveFromCartRequest) -> Transition:
        table = bound_table(self._state, session)
        if table is None:
            return Transition()

        removed = table.pop_pending(CartItemId(request.item_id))
        if removed is not None:
            if table.split:
                subtract_consumption(table.consumption_by_person, removed.person, removed.subtotal)
            if table.is_empty():
                table.status = TableStatus.ACTIVE
            table.touch(self._state.now())

        return _cart_transition(table, mutated=removed is not None)
