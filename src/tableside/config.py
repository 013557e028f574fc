from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_CORS_ALLOW_ORIGINS = (
    "https://bar-irlanda.netlify.app",
    "http://localhost:3000",
    "http://localhost:3003",
)


def _float_env(name: str, default: float) -> float:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return float(raw_value)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {raw_value!r}") from exc


@dataclass(frozen=True)
class Settings:
    app_env: str
    admin_password: str
    snapshot_backend: str
    snapshot_path: str
    redis_url: str
    snapshot_interval_seconds: float
    elapsed_tick_seconds: float
    heartbeat_sweep_seconds: float
    heartbeat_timeout_seconds: float
    port: int
    cors_allow_origins: tuple[str, ...] = DEFAULT_CORS_ALLOW_ORIGINS


def _snapshot_backend() -> str:
    backend = os.getenv("SNAPSHOT_BACKEND", "file").strip().lower()
    if backend not in {"file", "redis", "none"}:
        raise RuntimeError(f"SNAPSHOT_BACKEND must be file, redis or none, got {backend!r}")
    return backend


def _cors_allow_origins() -> tuple[str, ...]:
    raw_value = os.getenv("CORS_ALLOW_ORIGINS")
    if raw_value is None:
        return DEFAULT_CORS_ALLOW_ORIGINS
    return tuple(origin.strip() for origin in raw_value.split(",") if origin.strip())


def load_settings() -> Settings:
    return Settings(
        app_env=os.getenv("APP_ENV", "dev").lower(),
        admin_password=os.getenv("ADMIN_PASSWORD", "admin123"),
        snapshot_backend=_snapshot_backend(),
        snapshot_path=os.getenv("SNAPSHOT_PATH", "data/snapshot.json"),
        redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
        snapshot_interval_seconds=_float_env("SNAPSHOT_INTERVAL_SECONDS", 30.0),
        elapsed_tick_seconds=_float_env("ELAPSED_TICK_SECONDS", 10.0),
        heartbeat_sweep_seconds=_float_env("HEARTBEAT_SWEEP_SECONDS", 60.0),
        heartbeat_timeout_seconds=_float_env("HEARTBEAT_TIMEOUT_SECONDS", 300.0),
        port=int(_float_env("PORT", 3003)),
        cors_allow_origins=_cors_allow_origins(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
