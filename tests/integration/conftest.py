from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from tableside.api.main import create_app
from tableside.config import Settings
from tableside.infrastructure.persistence.file_snapshot_store import NullSnapshotStore

ADMIN_PASSWORD = "barra-secreta"


def build_settings(**overrides) -> Settings:
    values = {
        "app_env": "test",
        "admin_password": ADMIN_PASSWORD,
        "snapshot_backend": "none",
        "snapshot_path": "unused.json",
        "redis_url": "redis://localhost:6379/0",
        # keep periodic tasks out of the way of the assertions
        "snapshot_interval_seconds": 3600.0,
        "elapsed_tick_seconds": 3600.0,
        "heartbeat_sweep_seconds": 3600.0,
        "heartbeat_timeout_seconds": 3600.0,
        "port": 3003,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def client() -> Iterator[TestClient]:
    app = create_app(settings=build_settings(), snapshot_store=NullSnapshotStore())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_password() -> str:
    return ADMIN_PASSWORD


@pytest.fixture
def settings_factory():
    return build_settings
