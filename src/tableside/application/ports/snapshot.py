from __future__ import annotations

from typing import Protocol


class SnapshotStore(Protocol):
    def load(self) -> str | None: ...

    def save(self, payload: str) -> None: ...

    def ping(self) -> bool: ...


class SnapshotError(Exception):
    pass
