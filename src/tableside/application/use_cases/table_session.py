from __future__ import annotations

from tableside.application.dto.requests import (
    FreeTableRequest,
    JoinTableRequest,
    SetBillTypeRequest,
)
from tableside.application.dto.responses import (
    BillTypeSetResponse,
    CartViewResponse,
    MessageResponse,
    TableConnectedResponse,
)
from tableside.application.mappers.table_mapper import to_cart_view, to_table_response
from tableside.application.metrics.table_activity import record_table_freed
from tableside.application.notifications import (
    OutboundEvent,
    Transition,
    error_transition,
    table_room,
    to_admins,
    to_caller,
    to_table,
)
from tableside.application.state import AppState
from tableside.application.use_cases.context import ClientSession, bound_table
from tableside.domain.table.entities import InvalidTableError, TableStatus
from tableside.domain.table.ledger import calculate_consumption_by_person

INVALID_TABLE_MESSAGE = "Mesa inválida (1-10)"
TABLE_FREED_MESSAGE = "Mesa liberada - ¡Hasta la próxima!"


class JoinTable:
    def __init__(self, state: AppState) -> None:
        self._state = state

    def execute(self, session: ClientSession, request: JoinTableRequest) -> Transition:
        try:
            table = self._state.get_table(request.table_id)
        except InvalidTableError:
            return error_transition(INVALID_TABLE_MESSAGE)

        transition = Transition(mutated=True)
        if session.table_id is not None and session.table_id != table.table_id:
            transition.rooms_left.append(table_room(session.table_id))
        session.table_id = table.table_id
        transition.rooms_joined.append(table_room(table.table_id))

        now = self._state.now()
        if table.status == TableStatus.PAID_BUT_OCCUPIED:
            # a paid table is handed to the next party without staff freeing it
            table.reset(TableStatus.ACTIVE, now)
        elif table.status == TableStatus.AVAILABLE:
            table.status = TableStatus.ACTIVE
        table.touch(now)

        connected = TableConnectedResponse(
            tableId=int(table.table_id),
            tableState=to_cart_view(table),
        )
        transition.emit(to_caller(OutboundEvent.TABLE_CONNECTED, connected))
        transition.emit(to_admins(OutboundEvent.TABLE_UPDATED, to_table_response(table)))
        return transition


class SetBillType:
    def __init__(self, state: AppState) -> None:
        self._state = state

    def execute(self, session: ClientSession, request: SetBillTypeRequest) -> Transition:
        table = bound_table(self._state, session)
        if table is None:
            return Transition()

        table.split = request.split
        table.people = list(request.people)
        table.consumption_by_person = calculate_consumption_by_person(table)
        table.touch(self._state.now())

        payload = BillTypeSetResponse(
            split=table.split,
            people=list(table.people),
            consumptionByPerson=dict(table.consumption_by_person),
        )
        return (
            Transition(mutated=True)
            .emit(to_caller(OutboundEvent.BILL_TYPE_SET, payload))
            .emit(to_admins(OutboundEvent.TABLE_UPDATED, to_table_response(table)))
        )


class FreeTable:
    def __init__(self, state: AppState) -> None:
        self._state = state

    def execute(self, session: ClientSession, request: FreeTableRequest) -> Transition:
        try:
            table = self._state.get_table(request.table_id)
        except InvalidTableError:
            return error_transition(INVALID_TABLE_MESSAGE)

        table.reset(TableStatus.AVAILABLE, self._state.now())
        record_table_freed()

        table_id = int(table.table_id)
        return (
            Transition(mutated=True)
            .emit(
                to_table(
                    table_id,
                    OutboundEvent.TABLE_FREED,
                    MessageResponse(message=TABLE_FREED_MESSAGE),
                )
            )
            .emit(
                to_table(
                    table_id,
                    OutboundEvent.CART_UPDATED,
                    CartViewResponse(status=TableStatus.AVAILABLE.value),
                )
            )
            .emit(to_table(table_id, OutboundEvent.RESET_TO_BILL_SELECTION))
            .emit(to_admins(OutboundEvent.TABLE_FREED, to_table_response(table)))
        )
