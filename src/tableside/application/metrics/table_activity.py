from __future__ import annotations

from datetime import datetime

from prometheus_client import Counter, Gauge, Histogram

INBOUND_EVENTS_TOTAL = Counter(
    "tableside_inbound_events_total",
    "Total number of inbound websocket events by outcome.",
    ["event", "outcome"],
)

ORDERS_PLACED_TOTAL = Counter(
    "tableside_orders_placed_total",
    "Total number of orders sent to the bar.",
    ["table_id"],
)

ORDERS_SERVED_TOTAL = Counter(
    "tableside_orders_served_total",
    "Total number of orders marked served.",
)

CALLS_TOTAL = Counter(
    "tableside_waiter_calls_total",
    "Total number of waiter calls by status.",
    ["status"],
)

BILLS_TOTAL = Counter(
    "tableside_bills_total",
    "Total number of bills by status.",
    ["status"],
)

TABLES_FREED_TOTAL = Counter(
    "tableside_tables_freed_total",
    "Total number of tables freed by staff.",
)

ORDER_TIME_TO_SERVE_SECONDS = Histogram(
    "tableside_order_time_to_serve_seconds",
    "Time between order placement and service.",
)

CALL_TIME_TO_ATTEND_SECONDS = Histogram(
    "tableside_call_time_to_attend_seconds",
    "Time between a waiter call and staff attending it.",
)

CONNECTED_SOCKETS = Gauge(
    "tableside_connected_sockets",
    "Current number of connected websocket clients.",
)

SNAPSHOT_SAVE_FAILURES_TOTAL = Counter(
    "tableside_snapshot_save_failures_total",
    "Total number of failed snapshot writes.",
    ["backend"],
)


def _seconds_between(start: datetime, end: datetime) -> float:
    return max((end - start).total_seconds(), 0.0)


def record_inbound_event(event: str, outcome: str) -> None:
    INBOUND_EVENTS_TOTAL.labels(event=event, outcome=outcome).inc()


def record_order_placed(table_id: int) -> None:
    ORDERS_PLACED_TOTAL.labels(table_id=str(table_id)).inc()


def record_order_served(created_at: datetime, served_at: datetime) -> None:
    ORDERS_SERVED_TOTAL.inc()
    ORDER_TIME_TO_SERVE_SECONDS.observe(_seconds_between(created_at, served_at))


def record_call(status: str) -> None:
    CALLS_TOTAL.labels(status=status).inc()


def record_call_attended(called_at: datetime, attended_at: datetime) -> None:
    record_call("attended")
    CALL_TIME_TO_ATTEND_SECONDS.observe(_seconds_between(called_at, attended_at))


def record_bill(status: str) -> None:
    BILLS_TOTAL.labels(status=status).inc()


def record_table_freed() -> None:
    TABLES_FREED_TOTAL.inc()


def set_connected_sockets(count: int) -> None:
    CONNECTED_SOCKETS.set(count)


def record_snapshot_save_failure(backend: str) -> None:
    SNAPSHOT_SAVE_FAILURES_TOTAL.labels(backend=backend).inc()
