from __future__ import annotations

import resource
import time

from fastapi import APIRouter, Request, Response, status

from tableside.api.runtime import AppRuntime
from tableside.api.ws.manager import ConnectionManager
from tableside.application.dto.responses import HealthResponse

router = APIRouter()


def _max_rss_kb() -> int:
    # ru_maxrss is reported in kilobytes on Linux
    return int(resource.getrusage(resource.RUSAGE_SELF).ru_maxrss)


@router.get("/health", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    runtime: AppRuntime = request.app.state.runtime
    manager: ConnectionManager = request.app.state.ws_manager
    state = runtime.state
    return HealthResponse(
        status="ok",
        uptimeSeconds=round(time.monotonic() - runtime.started_at, 3),
        connections=manager.connection_count(),
        tables=len(state.tables),
        activeCalls=len(state.waiting_calls()),
        activeOrders=len(state.pending_orders()),
        activeBills=len(state.pending_bills()),
        maxRssKb=_max_rss_kb(),
    )


@router.get("/health/live")
def live() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready")
def ready(request: Request, response: Response) -> dict[str, object]:
    runtime: AppRuntime = request.app.state.runtime
    snapshot_ready = runtime.snapshot_store.ping()

    if snapshot_ready:
        return {"status": "ok"}

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "unavailable",
        "checks": {"snapshot": snapshot_ready, "backend": runtime.settings.snapshot_backend},
    }
