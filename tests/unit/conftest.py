from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from tableside.application.dispatcher import EventDispatcher
from tableside.application.state import AppState
from tableside.application.use_cases.context import ClientSession
from tableside.domain.common.ids import ProductId
from tableside.domain.menu.entities import MenuItem
from tableside.infrastructure.menu.static_catalog import MENU, StaticMenuRepository

ADMIN_PASSWORD = "s3cret"
TABLA_ID = 100
PAPAS_ID = 101


class FixedClock:
    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current = self.current + timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2026, 10, 19, 21, 0, tzinfo=timezone.utc))


@pytest.fixture
def state(clock: FixedClock) -> AppState:
    return AppState(clock=clock)


@pytest.fixture
def menu() -> StaticMenuRepository:
    extras = [
        MenuItem(
            item_id=ProductId(TABLA_ID),
            name="Tabla de quesos",
            description="Para compartir",
            price=Decimal("10.00"),
            category="Picadas",
            is_drink=False,
            popular=False,
        ),
        MenuItem(
            item_id=ProductId(PAPAS_ID),
            name="Papas chicas",
            description="Porción individual",
            price=Decimal("5.00"),
            category="Papas",
            is_drink=False,
            popular=False,
        ),
    ]
    return StaticMenuRepository([*MENU, *extras])


@pytest.fixture
def dispatcher(state: AppState, menu: StaticMenuRepository) -> EventDispatcher:
    return EventDispatcher(state=state, menu_repository=menu, admin_password=ADMIN_PASSWORD)


@pytest.fixture
def guest() -> ClientSession:
    return ClientSession(connection_id="ws_guest")


@pytest.fixture
def admin() -> ClientSession:
    return ClientSession(connection_id="ws_admin", is_admin=True)
