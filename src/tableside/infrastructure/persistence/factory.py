from __future__ import annotations

from tableside.application.ports.snapshot import SnapshotStore
from tableside.config import Settings
from tableside.infrastructure.persistence.file_snapshot_store import (
    FileSnapshotStore,
    NullSnapshotStore,
)
from tableside.infrastructure.persistence.redis_snapshot_store import RedisSnapshotStore


def build_snapshot_store(settings: Settings) -> SnapshotStore:
    if settings.snapshot_backend == "redis":
        return RedisSnapshotStore(settings.redis_url)
    if settings.snapshot_backend == "file":
        return FileSnapshotStore(settings.snapshot_path)
    return NullSnapshotStore()
