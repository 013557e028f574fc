from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer

# JavaScript clients expect plain numbers, not decimal strings.
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class MenuItemResponse(BaseModel):
    id: int
    name: str
    description: str
    price: Amount
    category: str
    image: str | None = None
    popular: bool
    isDrink: bool


class CartItemResponse(BaseModel):
    id: int
    productId: int
    name: str
    price: Amount
    quantity: int
    notes: str = ""
    person: str
    addedAt: datetime
    addedAtFormatted: str
    status: str
    servedAt: datetime | None = None
    servedAtFormatted: str | None = None


class TableTimestampsResponse(BaseModel):
    lastOrder: datetime | None = None
    lastCall: datetime | None = None
    lastBillRequest: datetime | None = None
    lastServed: datetime | None = None


class CartViewResponse(BaseModel):
    pendingCart: list[CartItemResponse] = Field(default_factory=list)
    servedItems: list[CartItemResponse] = Field(default_factory=list)
    split: bool = False
    people: list[str] = Field(default_factory=list)
    currentTotal: Amount = Decimal("0.00")
    consumptionByPerson: dict[str, Amount] = Field(default_factory=dict)
    status: str


class TableResponse(CartViewResponse):
    id: int
    lastActivity: datetime
    timestamps: TableTimestampsResponse = Field(default_factory=TableTimestampsResponse)


class TableConnectedResponse(BaseModel):
    tableId: int
    tableState: CartViewResponse


class BillTypeSetResponse(BaseModel):
    split: bool
    people: list[str] = Field(default_factory=list)
    consumptionByPerson: dict[str, Amount] = Field(default_factory=dict)


class CallResponse(BaseModel):
    id: int
    tableId: int
    reason: str
    time: datetime
    timeFormatted: str
    elapsedTime: str = "0s"
    status: str
    attendedAt: datetime | None = None
    attendedAtFormatted: str | None = None


class OrderItemResponse(BaseModel):
    id: int
    productId: int
    name: str
    quantity: int
    price: Amount
    person: str
    notes: str = ""
    addedAt: datetime
    addedAtFormatted: str


class OrderResponse(BaseModel):
    id: int
    tableId: int
    items: list[OrderItemResponse] = Field(default_factory=list)
    total: Amount
    split: bool
    people: list[str] = Field(default_factory=list)
    createdAt: datetime
    createdAtFormatted: str
    elapsedTime: str = "0s"
    status: str
    servedAt: datetime | None = None
    servedAtFormatted: str | None = None


class BillItemResponse(BaseModel):
    name: str
    quantity: int
    price: Amount
    person: str
    status: str
    subtotal: Amount
    addedAt: datetime | None = None
    timeAdded: str


class BillResponse(BaseModel):
    id: int
    tableId: int
    items: list[BillItemResponse] = Field(default_factory=list)
    total: Amount
    split: bool
    people: list[str] = Field(default_factory=list)
    currentTotal: Amount = Decimal("0.00")
    consumptionByPerson: dict[str, Amount] = Field(default_factory=dict)
    perPerson: dict[str, Amount] | None = None
    requestedAt: datetime
    requestedAtFormatted: str
    elapsedTime: str = "0s"
    status: str
    paidAt: datetime | None = None
    paidAtFormatted: str | None = None


class BillPreparedResponse(BillResponse):
    message: str


class ConfirmationResponse(BaseModel):
    message: str
    time: str


class WaiterCalledResponse(ConfirmationResponse):
    callId: int


class OrderConfirmedResponse(ConfirmationResponse):
    orderId: int


class ItemsServedResponse(BaseModel):
    items: list[CartItemResponse] = Field(default_factory=list)
    currentTotal: Amount
    consumptionByPerson: dict[str, Amount] = Field(default_factory=dict)
    serveTime: str


class OrderServedResponse(BaseModel):
    orderId: int
    tableId: int
    servedItems: list[CartItemResponse] = Field(default_factory=list)
    serveTime: str


class BillPaidResponse(BaseModel):
    message: str
    finalTotal: Amount
    paidTime: str


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    message: str
    details: dict | None = None


class ActiveListsResponse(BaseModel):
    calls: list[CallResponse] = Field(default_factory=list)
    orders: list[OrderResponse] = Field(default_factory=list)
    bills: list[BillResponse] = Field(default_factory=list)


class AdminConnectedResponse(ActiveListsResponse):
    tables: list[TableResponse] = Field(default_factory=list)


class ActiveStateResponse(BaseModel):
    activeCalls: list[CallResponse] = Field(default_factory=list)
    activeOrders: list[OrderResponse] = Field(default_factory=list)
    activeBills: list[BillResponse] = Field(default_factory=list)
    tables: list[TableResponse] = Field(default_factory=list)


class SnapshotDocument(BaseModel):
    tables: list[TableResponse] = Field(default_factory=list)
    calls: list[CallResponse] = Field(default_factory=list)
    orders: list[OrderResponse] = Field(default_factory=list)
    bills: list[BillResponse] = Field(default_factory=list)
    lastBackup: datetime | None = None


class HealthResponse(BaseModel):
    status: str
    uptimeSeconds: float
    connections: int
    tables: int
    activeCalls: int
    activeOrders: int
    activeBills: int
    maxRssKb: int | None = None
