from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))


def _send(ws, event: str, data=None) -> None:
    ws.send_json({"event": event, "data": data})


def _expect(ws, event: str) -> dict:
    message = ws.receive_json()
    assert message["event"] == event, message
    return message["data"]


def test_guest_joins_and_builds_a_cart(client) -> None:
    with client.websocket_connect("/ws") as guest:
        _send(guest, "join-table", 2)
        connected = _expect(guest, "table-connected")
        assert connected["tableId"] == 2
        assert connected["tableState"]["status"] == "active"

        _send(guest, "add-to-cart", {"productId": 1, "quantity": 2, "notes": "bien fría"})
        cart = _expect(guest, "cart-updated")
        assert cart["status"] == "ordering"
        (item,) = cart["pendingCart"]
        assert item["price"] == 8.5
        assert item["quantity"] == 2
        assert item["person"] == "Todos"

        _send(guest, "remove-from-cart", item["id"])
        cart = _expect(guest, "cart-updated")
        assert cart["pendingCart"] == []
        assert cart["status"] == "active"


def test_invalid_frames_and_tables_are_reported(client) -> None:
    with client.websocket_connect("/ws") as guest:
        guest.send_text("this is not json")
        assert _expect(guest, "error")["message"] == "Mensaje inválido"

        _send(guest, "join-table", 11)
        assert _expect(guest, "error")["message"] == "Mesa inválida (1-10)"

        _send(guest, "teleport", 1)
        assert _expect(guest, "error")["message"] == "Evento desconocido"

        _send(guest, "add-to-cart", {"productId": "cerveza"})
        error = _expect(guest, "error")
        assert error["message"] == "Datos inválidos"
        assert error["details"]["event"] == "add-to-cart"

        _send(guest, "ping")
        assert isinstance(_expect(guest, "pong"), int)


def test_binary_frames_are_read_as_text_or_rejected(client) -> None:
    with client.websocket_connect("/ws") as guest:
        guest.send_bytes(b'{"event":"ping"}')
        assert isinstance(_expect(guest, "pong"), int)

        guest.send_bytes(b"\xff\xfe\x00")
        assert _expect(guest, "error")["message"] == "Mensaje inválido"

        _send(guest, "join-table", 4)
        assert _expect(guest, "table-connected")["tableId"] == 4



def test_full_service_cycle_between_guest_and_staff(client, admin_password) -> None:
    with client.websocket_connect("/ws") as staff, client.websocket_connect("/ws") as guest:
        _send(staff, "join-as-admin", admin_password)
        snapshot = _expect(staff, "admin-connected")
        assert len(snapshot["tables"]) == 10

        _send(guest, "join-table", 5)
        _expect(guest, "table-connected")
        assert _expect(staff, "table-updated")["status"] == "active"

        _send(guest, "set-bill-type", {"split": True, "people": ["Ana", "Luis"]})
        assert _expect(guest, "bill-type-set")["people"] == ["Ana", "Luis"]
        _expect(staff, "table-updated")

        _send(guest, "add-to-cart", {"productId": 1, "personIndex": 0})
        _expect(guest, "cart-updated")
        _expect(staff, "table-updated")

        _send(guest, "call-waiter")
        call = _expect(staff, "new-call")
        assert _expect(guest, "waiter-called")["message"] == "Mozo notificado"
        _send(staff, "attend-call", call["id"])
        assert _expect(staff, "call-attended") == call["id"]
        _expect(guest, "waiter-arriving")

        _send(guest, "place-order")
        order = _expect(staff, "new-order")
        assert order["total"] == 8.5
        assert _expect(guest, "order-confirmed")["orderId"] == order["id"]
        assert _expect(staff, "table-updated")["status"] == "waiting"

        _send(staff, "mark-order-served", order["id"])
        served = _expect(guest, "items-served")
        assert served["currentTotal"] == 8.5
        assert served["consumptionByPerson"] == {"Ana": 8.5}
        assert _expect(guest, "cart-updated")["status"] == "active"
        assert _expect(staff, "order-served")["orderId"] == order["id"]
        _expect(staff, "table-updated")

        _send(guest, "request-bill")
        bill = _expect(staff, "bill-requested")
        prepared = _expect(guest, "bill-prepared")
        assert prepared["message"] == "Cuenta solicitada: $8.50"
        assert prepared["perPerson"] == {"Ana": 8.5, "Luis": 0.0}
        assert _expect(staff, "table-updated")["status"] == "paying"

        _send(staff, "mark-bill-paid", bill["id"])
        paid = _expect(guest, "bill-paid")
        assert paid["finalTotal"] == 8.5
        _expect(guest, "cart-updated")
        assert _expect(staff, "table-updated")["status"] == "paid_but_occupied"
        assert _expect(staff, "bill-paid") == bill["id"]

        _send(staff, "free-table", 5)
        assert _expect(guest, "table-freed")["message"] == "Mesa liberada - ¡Hasta la próxima!"
        assert _expect(guest, "cart-updated")["pendingCart"] == []
        _expect(guest, "reset-to-bill-selection")
        assert _expect(staff, "table-freed")["status"] == "available"

    state = client.get("/api/state").json()
    assert state["activeCalls"] == []
    assert state["activeOrders"] == []
    assert state["activeBills"] == []


def test_guest_cannot_use_staff_events(client) -> None:
    with client.websocket_connect("/ws") as guest:
        _send(guest, "join-as-admin", "adivina")
        _send(guest, "free-table", 1)
        _send(guest, "join-table", 1)
        # the first reply belongs to join-table: the two ignored events send nothing
        assert _expect(guest, "table-connected")["tableId"] == 1

    assert client.get("/api/tables/1").json()["status"] == "active"
