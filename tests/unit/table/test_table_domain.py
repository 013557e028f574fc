from __future__ import annotations

import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from tableside.application.state import AppState
from tableside.domain.common.ids import CartItemId, ProductId, TableId
from tableside.domain.table.entities import (
    SHARED_PERSON,
    CartItem,
    InvalidTableError,
    Table,
    TableStatus,
    TableTimestamps,
    is_valid_table_id,
)

NOW = datetime(2026, 10, 19, 21, 0, tzinfo=timezone.utc)


def _item(item_id: int, person: str = SHARED_PERSON) -> CartItem:
    return CartItem(
        item_id=CartItemId(item_id),
        product_id=ProductId(1),
        name="Guinness",
        price=Decimal("8.50"),
        quantity=2,
        notes="",
        person=person,
        added_at=NOW,
    )


def test_reset_wipes_every_session_field() -> None:
    table = Table(
        table_id=TableId(4),
        last_activity=NOW,
        pending_cart=[_item(1)],
        served_items=[_item(2)],
        split=True,
        people=["Ana", "Luis"],
        status=TableStatus.PAYING,
        current_total=Decimal("17.00"),
        consumption_by_person={"Ana": Decimal("17.00")},
        timestamps=TableTimestamps(last_order=NOW),
    )
    later = datetime(2026, 10, 19, 23, 0, tzinfo=timezone.utc)

    table.reset(TableStatus.AVAILABLE, later)

    assert table.pending_cart == []
    assert table.served_items == []
    assert table.split is False
    assert table.people == []
    assert table.current_total == Decimal("0.00")
    assert table.consumption_by_person == {}
    assert table.timestamps == TableTimestamps()
    assert table.status == TableStatus.AVAILABLE
    assert table.last_activity == later


@pytest.mark.parametrize(
    ("split", "people", "person_index", "expected"),
    [
        (False, ["Ana"], 0, SHARED_PERSON),
        (True, ["Ana", "Luis"], 1, "Luis"),
        (True, ["Ana", "Luis"], None, SHARED_PERSON),
        (True, ["Ana", "Luis"], 5, SHARED_PERSON),
        (True, ["Ana", "Luis"], -1, SHARED_PERSON),
    ],
)
def test_resolve_person(split: bool, people: list[str], person_index, expected: str) -> None:
    table = Table(table_id=TableId(1), last_activity=NOW, split=split, people=people)
    assert table.resolve_person(person_index) == expected


def test_pop_pending_removes_only_the_matching_item() -> None:
    table = Table(table_id=TableId(1), last_activity=NOW, pending_cart=[_item(1), _item(2)])

    removed = table.pop_pending(CartItemId(2))

    assert removed is not None and removed.item_id == 2
    assert [item.item_id for item in table.pending_cart] == [1]
    assert table.pop_pending(CartItemId(99)) is None


def test_cart_item_subtotal() -> None:
    assert _item(1).subtotal == Decimal("17.00")


@pytest.mark.parametrize(("value", "expected"), [(0, False), (1, True), (10, True), (11, False)])
def test_table_id_bounds(value: int, expected: bool) -> None:
    assert is_valid_table_id(value) is expected


def test_state_allocates_ten_available_tables() -> None:
    state = AppState(clock=lambda: NOW)

    tables = state.all_tables()

    assert [int(table.table_id) for table in tables] == list(range(1, 11))
    assert all(table.status == TableStatus.AVAILABLE for table in tables)
    with pytest.raises(InvalidTableError):
        state.get_table(11)
