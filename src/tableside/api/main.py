from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tableside.api.background import start_background_tasks
from tableside.api.error_handling import register_exception_handlers
from tableside.api.middleware.access_log import AccessLogMiddleware
from tableside.api.middleware.request_id import RequestIDMiddleware
from tableside.api.routes.health import router as health_router
from tableside.api.routes.menu import router as menu_router
from tableside.api.routes.metrics import router as metrics_router
from tableside.api.routes.state import router as state_router
from tableside.api.runtime import build_runtime
from tableside.api.ws.manager import ConnectionManager
from tableside.api.ws.routes import router as ws_router
from tableside.application.ports.repositories import MenuRepository
from tableside.application.ports.snapshot import SnapshotStore
from tableside.config import Settings, get_settings
from tableside.infrastructure.menu.static_catalog import StaticMenuRepository
from tableside.infrastructure.observability.logging_config import configure_logging
from tableside.infrastructure.observability.otel import configure_otel
from tableside.infrastructure.persistence.factory import build_snapshot_store

logger = logging.getLogger(__name__)


def _cors_allow_origins(settings: Settings) -> list[str]:
    # dev/test: any origin, credentials are never allowed
    if settings.app_env in {"dev", "test"}:
        return ["*"]
    return list(settings.cors_allow_origins)


def _lifespan(
    settings: Settings,
    menu_repository: MenuRepository,
    snapshot_store: SnapshotStore,
):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        runtime = build_runtime(
            settings=settings,
            menu_repository=menu_repository,
            snapshot_store=snapshot_store,
        )
        runtime.snapshotter.restore()
        manager = ConnectionManager()
        app.state.runtime = runtime
        app.state.ws_manager = manager
        tasks = start_background_tasks(runtime, manager)
        logger.info("tableside_started", extra={"backend": settings.snapshot_backend})
        try:
            yield
        finally:
            for task in tasks:
                task.cancel()
            for task in tasks:
                with suppress(asyncio.CancelledError):
                    await task
            # last write wins over the periodic autosave
            async with runtime.lock:
                runtime.snapshotter.save()
            logger.info("tableside_stopped", extra={"backend": settings.snapshot_backend})

    return lifespan


def create_app(
    settings: Settings | None = None,
    menu_repository: MenuRepository | None = None,
    snapshot_store: SnapshotStore | None = None,
) -> FastAPI:
    configure_logging()

    resolved_settings = settings or get_settings()
    app = FastAPI(
        title="Tableside Backend",
        version="0.1.0",
        lifespan=_lifespan(
            settings=resolved_settings,
            menu_repository=menu_repository or StaticMenuRepository(),
            snapshot_store=snapshot_store or build_snapshot_store(resolved_settings),
        ),
    )
    register_exception_handlers(app)
    for router in (health_router, metrics_router, menu_router, state_router, ws_router):
        app.include_router(router)

    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_allow_origins(resolved_settings),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    configure_otel(app, app_env=resolved_settings.app_env)
    return app


app = create_app()
