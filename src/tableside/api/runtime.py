from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field

from tableside.application.dispatcher import EventDispatcher
from tableside.application.ports.repositories import MenuRepository
from tableside.application.ports.snapshot import SnapshotStore
from tableside.application.state import AppState
from tableside.application.use_cases.snapshot import Snapshotter
from tableside.config import Settings


@dataclass
class AppRuntime:
    """Everything the handlers share; ``lock`` makes state access single-writer."""

    settings: Settings
    state: AppState
    menu_repository: MenuRepository
    snapshot_store: SnapshotStore
    dispatcher: EventDispatcher
    snapshotter: Snapshotter
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    started_at: float = field(default_factory=time.monotonic)


def build_runtime(
    settings: Settings,
    menu_repository: MenuRepository,
    snapshot_store: SnapshotStore,
    state: AppState | None = None,
) -> AppRuntime:
    app_state = state or AppState()
    return AppRuntime(
        settings=settings,
        state=app_state,
        menu_repository=menu_repository,
        snapshot_store=snapshot_store,
        dispatcher=EventDispatcher(
            state=app_state,
            menu_repository=menu_repository,
            admin_password=settings.admin_password,
        ),
        snapshotter=Snapshotter(
            state=app_state,
            store=snapshot_store,
            backend=settings.snapshot_backend,
        ),
    )
