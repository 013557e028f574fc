from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from tableside.application.dto.requests import (
    AddToCartRequest,
    EmptyRequest,
    JoinTableRequest,
    MarkOrderServedRequest,
    RemoveFromCartRequest,
    SetBillTypeRequest,
)
from tableside.application.use_cases.cart import AddToCart, RemoveFromCart
from tableside.application.use_cases.mark_order_served import MarkOrderServed
from tableside.application.use_cases.place_order import PlaceOrder
from tableside.application.use_cases.table_session import JoinTable, SetBillType
from tableside.domain.order.entities import OrderStatus
from tableside.domain.table.entities import CartItemStatus, TableStatus


def _ordered_table(state, menu, guest, table_id: int = 3):
    JoinTable(state).execute(guest, JoinTableRequest(table_id=table_id))
    SetBillType(state).execute(guest, SetBillTypeRequest(split=True, people=["Ana", "Luis"]))
    add = AddToCart(state, menu)
    add.execute(guest, AddToCartRequest(product_id=100, person_index=0))
    add.execute(guest, AddToCartRequest(product_id=101, quantity=2, person_index=1))
    PlaceOrder(state).execute(guest, EmptyRequest())
    return state.get_table(table_id), state.orders[-1]


def test_mark_served_moves_items_and_accumulates_total(state, menu, guest, admin, clock) -> None:
    table, order = _ordered_table(state, menu, guest)
    clock.advance(240)

    request = MarkOrderServedRequest(order_id=order.order_id)
    transition = MarkOrderServed(state).execute(admin, request)

    assert order.status == OrderStatus.SERVED
    assert order.served_at == clock.current
    assert table.pending_cart == []
    assert [item.status for item in table.served_items] == [CartItemStatus.SERVED] * 2
    assert all(item.served_at == clock.current for item in table.served_items)
    assert table.current_total == Decimal("20.00")
    assert table.consumption_by_person == {"Ana": Decimal("10.00"), "Luis": Decimal("10.00")}
    assert table.status == TableStatus.ACTIVE
    assert table.timestamps.last_served == clock.current
    assert transition.events() == [
        "items-served",
        "cart-updated",
        "order-served",
        "table-updated",
    ]
    items_served = transition.notifications[0]
    assert items_served.room == "mesa-3"
    assert items_served.payload.currentTotal == Decimal("20.00")
    assert len(items_served.payload.items) == 2


def test_serving_twice_is_a_no_op(state, menu, guest, admin) -> None:
    table, order = _ordered_table(state, menu, guest)
    serve = MarkOrderServed(state)
    serve.execute(admin, MarkOrderServedRequest(order_id=order.order_id))

    transition = serve.execute(admin, MarkOrderServedRequest(order_id=order.order_id))

    assert transition.notifications == []
    assert transition.mutated is False
    assert table.current_total == Decimal("20.00")
    assert len(table.served_items) == 2


def test_unknown_order_is_ignored(state, admin) -> None:
    transition = MarkOrderServed(state).execute(admin, MarkOrderServedRequest(order_id=1))

    assert transition.notifications == []


def test_items_removed_after_ordering_are_not_served(state, menu, guest, admin) -> None:
    table, order = _ordered_table(state, menu, guest)
    RemoveFromCart(state).execute(
        guest, RemoveFromCartRequest(item_id=table.pending_cart[0].item_id)
    )

    MarkOrderServed(state).execute(admin, MarkOrderServedRequest(order_id=order.order_id))

    assert [item.name for item in table.served_items] == ["Papas chicas"]
    assert table.current_total == Decimal("10.00")


def test_items_added_after_ordering_stay_pending(state, menu, guest, admin) -> None:
    table, order = _ordered_table(state, menu, guest)
    AddToCart(state, menu).execute(guest, AddToCartRequest(product_id=1))

    MarkOrderServed(state).execute(admin, MarkOrderServedRequest(order_id=order.order_id))

    assert [item.product_id for item in table.pending_cart] == [1]
    assert table.status == TableStatus.ORDERING


def test_two_guinness_on_table_three(state, menu, guest, admin) -> None:
    JoinTable(state).execute(guest, JoinTableRequest(table_id=3))
    AddToCart(state, menu).execute(guest, AddToCartRequest(product_id=1, quantity=2))
    PlaceOrder(state).execute(guest, EmptyRequest())
    table = state.get_table(3)
    (order,) = state.orders

    assert order.total == Decimal("17.00")
    assert table.status == TableStatus.WAITING

    MarkOrderServed(state).execute(admin, MarkOrderServedRequest(order_id=order.order_id))

    assert table.status == TableStatus.ACTIVE
    assert table.current_total == Decimal("17.00")
    assert table.pending_cart == []
    assert [item.quantity for item in table.served_items] == [2]
