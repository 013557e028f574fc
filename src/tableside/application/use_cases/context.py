from __future__ import annotations

from dataclasses import dataclass

from tableside.application.state import AppState
from tableside.domain.common.ids import TableId
from tableside.domain.table.entities import Table


@dataclass
class ClientSession:
    """Per-connection context: which table it joined and whether it is staff."""

    connection_id: str
    table_id: TableId | None = None
    is_admin: bool = False


def bound_table(state: AppState, session: ClientSession) -> Table | None:
    if session.table_id is None:
        return None
    return state.get_table(session.table_id)
