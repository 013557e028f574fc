from __future__ import annotations

import hmac

from tableside.application.dto.requests import EmptyRequest, JoinAsAdminRequest
from tableside.application.dto.responses import AdminConnectedResponse
from tableside.application.mappers.table_mapper import to_table_response
from tableside.application.notifications import (
    ADMIN_ROOM,
    OutboundEvent,
    Transition,
    to_caller,
)
from tableside.application.state import AppState
from tableside.application.use_cases.context import ClientSession
from tableside.application.use_cases.elapsed_times import active_lists, refresh_elapsed_times


class JoinAsAdmin:
    def __init__(self, state: AppState, admin_password: str) -> None:
        self._state = state
        self._admin_password = admin_password

    def execute(self, session: ClientSession, request: JoinAsAdminRequest) -> Transition:
        if not hmac.compare_digest(
            request.password.encode("utf-8"), self._admin_password.encode("utf-8")
        ):
            return Transition()

        session.is_admin = True
        refresh_elapsed_times(self._state)
        lists = active_lists(self._state)
        snapshot = AdminConnectedResponse(
            calls=lists.calls,
            orders=lists.orders,
            bills=lists.bills,
            tables=[to_table_response(table) for table in self._state.all_tables()],
        )
        transition = Transition(rooms_joined=[ADMIN_ROOM])
        return transition.emit(to_caller(OutboundEvent.ADMIN_CONNECTED, snapshot))


class Ping:
    def __init__(self, state: AppState) -> None:
        self._state = state

    def execute(self, session: ClientSession, request: EmptyRequest) -> Transition:
        epoch_ms = int(self._state.now().timestamp() * 1000)
        return Transition().emit(to_caller(OutboundEvent.PONG, epoch_ms))
