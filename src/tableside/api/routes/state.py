from __future__ import annotations

from fastapi import APIRouter, Request

from tableside.api.runtime import AppRuntime
from tableside.application.dto.responses import ActiveStateResponse, TableResponse
from tableside.application.use_cases.active_state import GetActiveState, GetTable

router = APIRouter()


@router.get("/api/state", response_model=ActiveStateResponse)
async def get_state(request: Request) -> ActiveStateResponse:
    runtime: AppRuntime = request.app.state.runtime
    async with runtime.lock:
        return GetActiveState(runtime.state).execute()


@router.get("/api/tables/{table_id}", response_model=TableResponse)
async def get_table(table_id: int, request: Request) -> TableResponse:
    runtime: AppRuntime = request.app.state.runtime
    async with runtime.lock:
        return GetTable(runtime.state).execute(table_id)
