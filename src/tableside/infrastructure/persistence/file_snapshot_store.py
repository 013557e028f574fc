from __future__ import annotations

import os
import tempfile
from pathlib import Path

from tableside.application.ports.snapshot import SnapshotError, SnapshotStore


class FileSnapshotStore(SnapshotStore):
    """Keeps the snapshot in one JSON file, replaced atomically on every save."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> str | None:
        try:
            return self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise SnapshotError(f"cannot read snapshot {self._path}") from exc

    def save(self, payload: str) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", dir=str(self._path.parent)
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise SnapshotError(f"cannot write snapshot {self._path}") from exc

    def ping(self) -> bool:
        directory = self._path.parent
        if not directory.exists():
            # created on first save
            return True
        return os.access(directory, os.W_OK)


class NullSnapshotStore(SnapshotStore):
    def load(self) -> str | None:
        return None

    def save(self, payload: str) -> None:
        return None

    def ping(self) -> bool:
        return True
