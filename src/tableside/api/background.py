from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from tableside.api.runtime import AppRuntime
from tableside.api.ws.delivery import deliver
from tableside.api.ws.manager import ConnectionManager
from tableside.application.use_cases.elapsed_times import RefreshElapsedTimes

logger = logging.getLogger(__name__)


async def run_periodic(
    name: str,
    interval_seconds: float,
    action: Callable[[], Awaitable[None]],
) -> None:
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await action()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("periodic_task_failed", extra={"reason": name})


async def tick_elapsed_times(runtime: AppRuntime, manager: ConnectionManager) -> None:
    async with runtime.lock:
        transition = RefreshElapsedTimes(runtime.state).execute()
    await deliver(manager, transition)


async def autosave(runtime: AppRuntime) -> None:
    async with runtime.lock:
        pending = runtime.snapshotter.capture()
    await asyncio.to_thread(runtime.snapshotter.write, pending)


async def sweep_idle_connections(runtime: AppRuntime, manager: ConnectionManager) -> None:
    await manager.drop_idle(runtime.settings.heartbeat_timeout_seconds)


def start_background_tasks(
    runtime: AppRuntime,
    manager: ConnectionManager,
) -> list[asyncio.Task[None]]:
    settings = runtime.settings
    return [
        asyncio.create_task(
            run_periodic(
                "elapsed_ticker",
                settings.elapsed_tick_seconds,
                lambda: tick_elapsed_times(runtime, manager),
            )
        ),
        asyncio.create_task(
            run_periodic(
                "autosave",
                settings.snapshot_interval_seconds,
                lambda: autosave(runtime),
            )
        ),
        asyncio.create_task(
            run_periodic(
                "heartbeat_sweep",
                settings.heartbeat_sweep_seconds,
                lambda: sweep_idle_connections(runtime, manager),
            )
        ),
    ]
