"""Totals and per-person consumption for table items.

Items may be domain objects (``price``/``quantity``/``person`` attributes) or
plain mappings, e.g. entries restored from an older snapshot.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from tableside.domain.common.money import ZERO, quantize, to_amount, to_quantity
from tableside.domain.table.entities import SHARED_PERSON, Table


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def item_value(item: Any) -> Decimal:
    return to_amount(_field(item, "price")) * to_quantity(_field(item, "quantity"))


def calculate_total(items: Iterable[Any]) -> Decimal:
    return quantize(sum((item_value(item) for item in items), ZERO))


def calculate_consumption_by_person(table: Table) -> dict[str, Decimal]:
    consumption: dict[str, Decimal] = {}
    for item in [*table.served_items, *table.pending_cart]:
        person = _field(item, "person") or SHARED_PERSON
        consumption[person] = consumption.get(person, ZERO) + item_value(item)
    return {person: quantize(amount) for person, amount in consumption.items()}


def add_consumption(consumption: dict[str, Decimal], person: str, amount: Decimal) -> None:
    consumption[person] = quantize(consumption.get(person, ZERO) + amount)


def subtract_consumption(consumption: dict[str, Decimal], person: str, amount: Decimal) -> None:
    # no clamping: a ledger that drifted out of sync is allowed to go negative
    consumption[person] = quantize(consumption.get(person, ZERO) - amount)
