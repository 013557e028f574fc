from __future__ import annotations

from tableside.application.dto.responses import ActiveListsResponse
from tableside.application.mappers.service_mapper import (
    to_bill_response,
    to_call_response,
    to_order_response,
)
from tableside.application.notifications import OutboundEvent, Transition, to_admins
from tableside.application.state import AppState
from tableside.domain.common.elapsed import elapsed_since


def refresh_elapsed_times(state: AppState) -> None:
    """Recompute the display-only ``elapsed_time`` of every open call, order and bill."""
    now = state.now()
    for call in state.waiting_calls():
        call.elapsed_time = elapsed_since(call.time, now)
    for order in state.pending_orders():
        order.elapsed_time = elapsed_since(order.created_at, now)
    for bill in state.pending_bills():
        bill.elapsed_time = elapsed_since(bill.requested_at, now)


def active_lists(state: AppState) -> ActiveListsResponse:
    return ActiveListsResponse(
        calls=[to_call_response(call) for call in state.waiting_calls()],
        orders=[to_order_response(order) for order in state.pending_orders()],
        bills=[to_bill_response(bill) for bill in state.pending_bills()],
    )


class RefreshElapsedTimes:
    def __init__(self, state: AppState) -> None:
        self._state = state

    def execute(self) -> Transition:
        refresh_elapsed_times(self._state)
        return Transition().emit(
            to_admins(OutboundEvent.TIMES_UPDATED, active_lists(self._state))
        )
