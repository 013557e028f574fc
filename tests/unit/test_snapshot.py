from __future__ import annotations

import json
import sys
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from tableside.application.dispatcher import EventDispatcher
from tableside.application.ports.snapshot import SnapshotError
from tableside.application.state import AppState
from tableside.application.use_cases.context import ClientSession
from tableside.application.use_cases.snapshot import BuildSnapshot, RestoreSnapshot, Snapshotter
from tableside.domain.common.ids import IdSequence
from tableside.domain.table.entities import TableStatus
from tableside.infrastructure.persistence.file_snapshot_store import (
    FileSnapshotStore,
    NullSnapshotStore,
)


class FailingStore:
    def load(self) -> str | None:
        raise SnapshotError("disk on fire")

    def save(self, payload: str) -> None:
        raise SnapshotError("disk on fire")

    def ping(self) -> bool:
        return False


class MemoryStore:
    def __init__(self, payload: str | None = None) -> None:
        self.payload = payload

    def load(self) -> str | None:
        return self.payload

    def save(self, payload: str) -> None:
        self.payload = payload

    def ping(self) -> bool:
        return True


def _busy_state(state: AppState, dispatcher: EventDispatcher) -> None:
    guest = ClientSession(connection_id="ws_guest")
    staff = ClientSession(connection_id="ws_staff", is_admin=True)
    dispatcher.dispatch(guest, "join-table", 3)
    dispatcher.dispatch(guest, "set-bill-type", {"split": True, "people": ["Ana", "Luis"]})
    dispatcher.dispatch(guest, "add-to-cart", {"productId": 100, "personIndex": 0})
    dispatcher.dispatch(guest, "place-order", None)
    dispatcher.dispatch(staff, "mark-order-served", state.orders[0].order_id)
    dispatcher.dispatch(guest, "add-to-cart", {"productId": 101, "personIndex": 1})
    dispatcher.dispatch(guest, "place-order", None)
    dispatcher.dispatch(guest, "call-waiter", None)
    dispatcher.dispatch(guest, "call-waiter", None)
    dispatcher.dispatch(staff, "attend-call", state.calls[0].call_id)
    dispatcher.dispatch(guest, "request-bill", None)


def test_snapshot_keeps_only_active_entries(state, dispatcher) -> None:
    _busy_state(state, dispatcher)

    document = json.loads(BuildSnapshot(state).execute())

    assert len(document["tables"]) == 10
    assert [call["status"] for call in document["calls"]] == ["waiting"]
    assert [order["status"] for order in document["orders"]] == ["pending"]
    assert [bill["status"] for bill in document["bills"]] == ["pending"]
    assert document["lastBackup"] is not None
    assert document["tables"][2]["currentTotal"] == 10.0


def test_restore_rebuilds_tables_and_active_lists(state, dispatcher, clock) -> None:
    _busy_state(state, dispatcher)
    raw = BuildSnapshot(state).execute()
    restored = AppState(clock=clock, ids=IdSequence(clock_ms=lambda: 1))

    RestoreSnapshot(restored).execute(raw)

    table = restored.get_table(3)
    assert table.status == TableStatus.PAYING
    assert table.people == ["Ana", "Luis"]
    assert [item.name for item in table.served_items] == ["Tabla de quesos"]
    assert [item.name for item in table.pending_cart] == ["Papas chicas"]
    assert table.current_total == Decimal("10.00")
    assert table.consumption_by_person == {"Ana": Decimal("10.00"), "Luis": Decimal("5.00")}
    assert len(restored.waiting_calls()) == 1
    assert len(restored.pending_orders()) == 1
    assert restored.pending_bills()[0].per_person == {
        "Ana": Decimal("10.00"),
        "Luis": Decimal("5.00"),
    }
    known_ids = [item.item_id for item in table.pending_cart] + [
        bill.bill_id for bill in restored.bills
    ]
    assert restored.ids.next() > max(known_ids)


def test_restore_skips_foreign_tables_and_empty_orders(state, dispatcher, clock) -> None:
    _busy_state(state, dispatcher)
    document = json.loads(BuildSnapshot(state).execute())
    document["tables"][0]["id"] = 99
    document["orders"][0]["items"] = []
    document["calls"][0]["tableId"] = 0
    document["unexpected"] = {"ignored": True}
    restored = AppState(clock=clock)

    RestoreSnapshot(restored).execute(json.dumps(document))

    assert len(restored.tables) == 10
    assert restored.orders == []
    assert restored.calls == []
    assert restored.get_table(3).status == TableStatus.PAYING


def test_restore_rejects_malformed_documents(state) -> None:
    with pytest.raises(SnapshotError):
        RestoreSnapshot(state).execute("{not json")
    with pytest.raises(SnapshotError):
        RestoreSnapshot(state).execute(json.dumps({"tables": [{"id": "uno"}]}))


def test_snapshotter_swallows_store_failures(state) -> None:
    snapshotter = Snapshotter(state, FailingStore(), backend="file")

    assert snapshotter.save() is False
    assert snapshotter.restore() is False
    assert all(table.status == TableStatus.AVAILABLE for table in state.all_tables())


def test_snapshotter_round_trips_through_a_store(state, dispatcher, clock) -> None:
    _busy_state(state, dispatcher)
    store = MemoryStore()

    assert Snapshotter(state, store, backend="memory").save() is True
    restored = AppState(clock=clock)

    assert Snapshotter(restored, store, backend="memory").restore() is True
    assert restored.get_table(3).status == TableStatus.PAYING


def test_snapshotter_without_snapshot_starts_fresh(state) -> None:
    assert Snapshotter(state, NullSnapshotStore(), backend="none").restore() is False


def test_snapshotter_drops_captures_older_than_the_last_write(state, dispatcher) -> None:
    store = MemoryStore()
    snapshotter = Snapshotter(state, store, backend="memory")
    guest = ClientSession(connection_id="ws_guest")

    dispatcher.dispatch(guest, "join-table", 3)
    older = snapshotter.capture()
    dispatcher.dispatch(guest, "add-to-cart", {"productId": 100})
    newer = snapshotter.capture()

    assert snapshotter.write(newer) is True
    assert snapshotter.write(older) is True
    assert store.payload == newer.payload
    assert json.loads(store.payload)["tables"][2]["pendingCart"]


def test_snapshotter_write_without_capture_reports_failure(state) -> None:
    store = MemoryStore()

    assert Snapshotter(state, store, backend="memory").write(None) is False
    assert store.payload is None


def test_file_store_writes_atomically(tmp_path: Path) -> None:
    store = FileSnapshotStore(tmp_path / "nested" / "snapshot.json")

    assert store.load() is None
    assert store.ping() is True
    store.save('{"tables": []}')
    store.save('{"tables": [], "calls": []}')

    assert store.load() == '{"tables": [], "calls": []}'
    assert [path.name for path in store.path.parent.iterdir()] == ["snapshot.json"]


def test_file_store_wraps_io_errors(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = FileSnapshotStore(blocker / "snapshot.json")

    with pytest.raises(SnapshotError):
        store.save("{}")
