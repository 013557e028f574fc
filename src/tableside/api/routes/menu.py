from __future__ import annotations

from fastapi import APIRouter, Request

from tableside.api.runtime import AppRuntime
from tableside.application.dto.responses import MenuItemResponse
from tableside.application.mappers.menu_mapper import to_menu_response

router = APIRouter()


@router.get("/api/menu", response_model=list[MenuItemResponse])
def get_menu(request: Request) -> list[MenuItemResponse]:
    runtime: AppRuntime = request.app.state.runtime
    return to_menu_response(runtime.menu_repository.list_items())
