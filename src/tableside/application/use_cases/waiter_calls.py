from __future__ import annotations

from tableside.application.dto.requests import AttendCallRequest, EmptyRequest
from tableside.application.dto.responses import WaiterCalledResponse
from tableside.application.mappers.clock import format_clock
from tableside.application.mappers.service_mapper import to_call_response
from tableside.application.metrics.table_activity import record_call, record_call_attended
from tableside.application.notifications import (
    OutboundEvent,
    Transition,
    to_admins,
    to_caller,
    to_table,
)
from tableside.application.state import AppState
from tableside.application.use_cases.context import ClientSession, bound_table
from tableside.domain.call.entities import Call
from tableside.domain.common.ids import CallId

WAITER_CALLED_MESSAGE = "Mozo notificado"


class CallWaiter:
    def __init__(self, state: AppState) -> None:
        self._state = state

    def execute(self, session: ClientSession, request: EmptyRequest) -> Transition:
        table = bound_table(self._state, session)
        if table is None:
            return Transition()

        now = self._state.now()
        call = Call(call_id=CallId(self._state.ids.next()), table_id=table.table_id, time=now)
        table.timestamps.last_call = now
        table.touch(now)
        self._state.calls.append(call)
        record_call(call.status.value)

        acknowledgement = WaiterCalledResponse(
            message=WAITER_CALLED_MESSAGE,
            callId=int(call.call_id),
            time=format_clock(now) or "",
        )
        return (
            Transition(mutated=True)
            .emit(to_admins(OutboundEvent.NEW_CALL, to_call_response(call)))
            .emit(to_caller(OutboundEvent.WAITER_CALLED, acknowledgement))
        )


class AttendCall:
    def __init__(self, state: AppState) -> None:
        self._state = state

    def execute(self, session: ClientSession, request: AttendCallRequest) -> Transition:
        call = self._state.find_call(CallId(request.call_id))
        if call is None:
            return Transition()

        now = self._state.now()
        if not call.attend(now):
            return Transition()
        record_call_attended(call.time, now)
        self._state.get_table(call.table_id).touch(now)

        return (
            Transition(mutated=True)
            .emit(to_admins(OutboundEvent.CALL_ATTENDED, int(call.call_id)))
            .emit(to_table(int(call.table_id), OutboundEvent.WAITER_ARRIVING))
        )
