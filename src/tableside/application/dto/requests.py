from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class InboundEvent(str, Enum):
    JOIN_TABLE = "join-table"
    SET_BILL_TYPE = "set-bill-type"
    ADD_TO_CART = "add-to-cart"
    REMOVE_FROM_CART = "remove-from-cart"
    CALL_WAITER = "call-waiter"
    PLACE_ORDER = "place-order"
    REQUEST_BILL = "request-bill"
    JOIN_AS_ADMIN = "join-as-admin"
    ATTEND_CALL = "attend-call"
    MARK_ORDER_SERVED = "mark-order-served"
    MARK_BILL_PAID = "mark-bill-paid"
    FREE_TABLE = "free-table"
    PING = "ping"


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )

    # events whose payload is a bare value (e.g. ``join-table`` sends ``3``)
    scalar_field: ClassVar[str | None] = None


class EmptyRequest(CamelBaseModel):
    pass


class JoinTableRequest(CamelBaseModel):
    scalar_field: ClassVar[str | None] = "table_id"

    table_id: int


class SetBillTypeRequest(CamelBaseModel):
    split: bool
    people: list[str] = Field(default_factory=list)

    @field_validator("people")
    @classmethod
    def _distinct_names(cls, value: list[str]) -> list[str]:
        names = [name.strip() for name in value]
        if any(not name for name in names):
            raise ValueError("person names must be non-empty")
        if len(set(names)) != len(names):
            raise ValueError("person names must be distinct")
        return names


class AddToCartRequest(CamelBaseModel):
    product_id: int
    quantity: int = Field(default=1, ge=1)
    notes: str | None = None
    person_index: int | None = None


class RemoveFromCartRequest(CamelBaseModel):
    scalar_field: ClassVar[str | None] = "item_id"

    item_id: int


class JoinAsAdminRequest(CamelBaseModel):
    scalar_field: ClassVar[str | None] = "password"

    password: str


class AttendCallRequest(CamelBaseModel):
    scalar_field: ClassVar[str | None] = "call_id"

    call_id: int


class MarkOrderServedRequest(CamelBaseModel):
    scalar_field: ClassVar[str | None] = "order_id"

    order_id: int


class MarkBillPaidRequest(CamelBaseModel):
    scalar_field: ClassVar[str | None] = "bill_id"

    bill_id: int


class FreeTableRequest(CamelBaseModel):
    scalar_field: ClassVar[str | None] = "table_id"

    table_id: int


REQUEST_MODELS: dict[InboundEvent, type[CamelBaseModel]] = {
    InboundEvent.JOIN_TABLE: JoinTableRequest,
    InboundEvent.SET_BILL_TYPE: SetBillTypeRequest,
    InboundEvent.ADD_TO_CART: AddToCartRequest,
    InboundEvent.REMOVE_FROM_CART: RemoveFromCartRequest,
    InboundEvent.CALL_WAITER: EmptyRequest,
    InboundEvent.PLACE_ORDER: EmptyRequest,
    InboundEvent.REQUEST_BILL: EmptyRequest,
    InboundEvent.JOIN_AS_ADMIN: JoinAsAdminRequest,
    InboundEvent.ATTEND_CALL: AttendCallRequest,
    InboundEvent.MARK_ORDER_SERVED: MarkOrderServedRequest,
    InboundEvent.MARK_BILL_PAID: MarkBillPaidRequest,
    InboundEvent.FREE_TABLE: FreeTableRequest,
    InboundEvent.PING: EmptyRequest,
}


class UnknownEventError(Exception):
    pass


class InvalidPayloadError(Exception):
    def __init__(self, event: InboundEvent, errors: list[dict[str, Any]]) -> None:
        super().__init__(f"invalid payload for {event.value}")
        self.event = event
        self.details = {"event": event.value, "errors": errors}


def resolve_event(name: object) -> InboundEvent:
    try:
        return InboundEvent(name)
    except ValueError as exc:
        raise UnknownEventError(f"unknown event {name!r}") from exc


def parse_request(event: InboundEvent, data: Any) -> CamelBaseModel:
    model = REQUEST_MODELS[event]
    if model.scalar_field is not None and not isinstance(data, dict):
        data = {model.scalar_field: data}
    elif not isinstance(data, dict):
        data = {}
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False, include_input=False)
        raise InvalidPayloadError(event, errors) from exc
