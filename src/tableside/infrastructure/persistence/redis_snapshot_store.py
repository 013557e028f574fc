from __future__ import annotations

import redis

from tableside.application.ports.snapshot import SnapshotError, SnapshotStore

SNAPSHOT_KEY = "tableside:snapshot"


class RedisSnapshotStore(SnapshotStore):
    """Keeps the snapshot under a single redis key.

    The client is created on first use, so a missing redis only shows up in
    readiness checks and failed saves, never at startup.
    """

    def __init__(
        self,
        redis_url: str,
        key: str = SNAPSHOT_KEY,
        timeout_seconds: float = 1.0,
    ) -> None:
        self._redis_url = redis_url
        self._key = key
        self._timeout_seconds = timeout_seconds
        self._client: redis.Redis | None = None

    def _redis(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.Redis.from_url(
                self._redis_url,
                socket_connect_timeout=self._timeout_seconds,
                socket_timeout=self._timeout_seconds,
            )
        return self._client

    def load(self) -> str | None:
        try:
            value = self._redis().get(self._key)
        except redis.RedisError as exc:
            raise SnapshotError(f"cannot read snapshot key {self._key}") from exc
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def save(self, payload: str) -> None:
        try:
            self._redis().set(name=self._key, value=payload)
        except redis.RedisError as exc:
            raise SnapshotError(f"cannot write snapshot key {self._key}") from exc

    def ping(self) -> bool:
        try:
            return bool(self._redis().ping())
        except redis.RedisError:
            return False
