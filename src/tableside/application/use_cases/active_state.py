from __future__ import annotations

from tableside.application.dto.responses import ActiveStateResponse, TableResponse
from tableside.application.mappers.table_mapper import to_table_response
from tableside.application.state import AppState
from tableside.application.use_cases.elapsed_times import active_lists
from tableside.domain.table.entities import InvalidTableError


class TableNotFoundError(Exception):
    pass


class GetActiveState:
    def __init__(self, state: AppState) -> None:
        self._state = state

    def execute(self) -> ActiveStateResponse:
        lists = active_lists(self._state)
        return ActiveStateResponse(
            activeCalls=lists.calls,
            activeOrders=lists.orders,
            activeBills=lists.bills,
            tables=[to_table_response(table) for table in self._state.all_tables()],
        )


class GetTable:
    def __init__(self, state: AppState) -> None:
        self._state = state

    def execute(self, table_id: int) -> TableResponse:
        try:
            table = self._state.get_table(table_id)
        except InvalidTableError as exc:
            raise TableNotFoundError(f"table not found for table_id={table_id}") from exc
        return to_table_response(table)
